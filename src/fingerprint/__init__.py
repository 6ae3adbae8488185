"""Tokenization, k-gram hashing, winnowing and similarity scoring."""
