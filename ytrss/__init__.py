"""Get RSS feed URLs from YouTube channel URLs."""
