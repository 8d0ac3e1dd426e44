"""Archive scanning, caching and listing."""
