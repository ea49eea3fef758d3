"""Scan pipeline, enrichment and notification modules."""
