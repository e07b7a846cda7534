"""HTTP API clients."""

from .glotpress_client import GlotPressClient
from .store_client import TranslationStoreClient, compute_stats_from_translations

__all__ = ["GlotPressClient", "TranslationStoreClient", "compute_stats_from_translations"]
