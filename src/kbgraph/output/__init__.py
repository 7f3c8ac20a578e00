"""Output formatting helpers."""
