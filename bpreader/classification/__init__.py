"""Blood pressure category classification."""
