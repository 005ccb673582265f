"""Extraction issue logging."""
