"""Small helpers shared across DocArchive."""
