"""Recipe API - CRUD service over a MongoDB recipe collection."""

__version__ = "0.1.0"
