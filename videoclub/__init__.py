"""Videoclub rental service: credits, time-boxed rentals, watch progress and reviews."""
