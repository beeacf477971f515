"""Core base classes shared across the package."""
