"""Public interface definitions for all external service providers.

The services in ``cineassist/services`` only ever see these abstract base
classes; concrete adapters are built in ``cineassist/main.py`` and
injected through constructors.

    Interface          →  Concrete implementation (cineassist/providers/)
    ─────────────────────────────────────────────────────────────────
    ICatalogProvider   →  TMDBCatalogProvider
    ILLMProvider       →  OpenAILLMProvider
    ICacheProvider     →  MemoryCacheProvider
"""

from cineassist.interfaces.cache_provider import ICacheProvider
from cineassist.interfaces.catalog_provider import ICatalogProvider
from cineassist.interfaces.llm_provider import ILLMProvider

__all__ = [
    "ICacheProvider",
    "ICatalogProvider",
    "ILLMProvider",
]
