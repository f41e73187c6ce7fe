"""Movie rip scanner: index movie rip files from a genre-organized directory tree."""

__version__ = "0.1.0"
