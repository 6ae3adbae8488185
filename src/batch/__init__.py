"""Submission discovery and batch normalization."""
