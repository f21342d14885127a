"""Observability helpers for kubedrift."""
