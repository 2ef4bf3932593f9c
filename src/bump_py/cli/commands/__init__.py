"""Implementations of the bump-py commands."""
