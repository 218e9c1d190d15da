"""Encoding and validation helpers for hdsigner."""
