"""Catalog providers for library definitions."""
