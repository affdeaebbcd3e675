"""Concrete adapters for the interfaces in ``cineassist.interfaces``."""
