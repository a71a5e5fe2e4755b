"""Dors - Markdown documentation for Go package trees."""

__version__ = "0.3.0"
