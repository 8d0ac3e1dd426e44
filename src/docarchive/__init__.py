"""DocArchive - browse a folder-organised PDF archive over HTTP."""

__version__ = "0.1.0"
