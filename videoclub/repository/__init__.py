"""Repository helpers for the videoclub service."""
