"""PDF access and metadata extraction."""
