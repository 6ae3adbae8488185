"""Pairwise project comparison."""
