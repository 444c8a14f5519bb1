"""Data transformations package."""
