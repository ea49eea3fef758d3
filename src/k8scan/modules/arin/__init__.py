"""Registry ownership enrichment."""

from .client import ARIN_API_ENDPOINT, ArinClient, EnrichmentError, parse_ownership

__all__ = ["ARIN_API_ENDPOINT", "ArinClient", "EnrichmentError", "parse_ownership"]
