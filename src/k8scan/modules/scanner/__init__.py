"""Concurrent scan engine: reachability gate, signature probe, dispatch."""

from .dispatcher import Enricher, Notifier, ScanDispatcher, ScanSummary
from .models import Finding, OwnershipInfo, ProbeOutcome, ProbeResult, Target
from .reachability import port_open
from .reporting import FindingPrinter, format_finding
from .signature import SIGNATURES, candidate_urls, classify, matches_signature

__all__ = [
    "SIGNATURES",
    "Enricher",
    "Finding",
    "FindingPrinter",
    "Notifier",
    "OwnershipInfo",
    "ProbeOutcome",
    "ProbeResult",
    "ScanDispatcher",
    "ScanSummary",
    "Target",
    "candidate_urls",
    "classify",
    "format_finding",
    "matches_signature",
    "port_open",
]
