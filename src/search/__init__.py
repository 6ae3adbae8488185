"""Exact substring search."""
