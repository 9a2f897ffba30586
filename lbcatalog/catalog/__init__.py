"""
Catalog package for lbcatalog.

Holds the provider-independent game model and the shared run-scoped store.
"""

from .models import AssetType, Assets, Collection, Game, GameFile
from .store import CollectionSummary, SearchContext

__all__ = [
    'AssetType',
    'Assets',
    'Collection',
    'Game',
    'GameFile',
    'CollectionSummary',
    'SearchContext',
]
