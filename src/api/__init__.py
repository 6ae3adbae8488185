"""Report facade and API models."""
