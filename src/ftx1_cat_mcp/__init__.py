"""CAT control for the Yaesu FTX-1 transceiver, with an MCP server front end."""

__version__ = "0.1.0"
