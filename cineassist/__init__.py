"""cineAssist: conversational movie discovery on top of TMDB."""

__version__ = "0.1.0"
