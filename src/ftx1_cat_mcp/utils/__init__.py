"""Stateless helpers shared across the package."""
