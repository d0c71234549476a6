"""Shared helpers: logging, filesystem and code signing."""
