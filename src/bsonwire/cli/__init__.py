"""Command-line interface for bsonwire."""
