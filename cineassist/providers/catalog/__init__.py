"""Movie catalog providers.

TMDBCatalogProvider is the only implementation; it backs every search
stage, detail fetch, trending list and the read-only passthrough route.
"""

from cineassist.providers.catalog.tmdb_provider import TMDBCatalogProvider

__all__ = ["TMDBCatalogProvider"]
