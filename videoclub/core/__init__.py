"""Core configuration, database and error handling for the videoclub service."""
