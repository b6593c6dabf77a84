"""Clients for external quoting services."""
