"""Helpers shared across modules: HTTP access and logging."""
