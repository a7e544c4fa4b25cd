"""Laptop storefront: fuzzy search, suggestions and autocomplete."""

__version__ = "0.1.0"
