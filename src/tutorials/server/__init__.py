"""Tutorials REST server."""
