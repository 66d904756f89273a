"""Shade Protocol oracle price client."""
