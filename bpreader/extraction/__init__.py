"""Report text extraction: page text → Report."""
