"""Submission tree normalization."""
