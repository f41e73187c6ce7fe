"""Command line interface for the movie rip scanner."""
