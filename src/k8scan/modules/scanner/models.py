"""Data models for scan targets, probe outcomes and findings."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Target:
    """One (address, port) pair; the unit of concurrent work."""

    address: str
    port: int

    @property
    def endpoint(self) -> str:
        if ":" in self.address:
            return f"[{self.address}]:{self.port}"
        return f"{self.address}:{self.port}"


class ProbeOutcome(Enum):
    """Result of signature probing."""

    NO_RESPONSE = "no-response"
    NO_SIGNATURE = "reachable-no-signature"
    MATCH = "positive-match"


@dataclass(frozen=True)
class ProbeResult:
    """Signature probe outcome; ``uri`` is set only for a positive match."""

    outcome: ProbeOutcome
    uri: str = ""

    @property
    def matched(self) -> bool:
        return self.outcome is ProbeOutcome.MATCH


@dataclass(frozen=True)
class OwnershipInfo:
    """Registry ownership data for an address. Empty fields when unknown."""

    handle: str = ""
    name: str = ""
    reference: str = ""


@dataclass(frozen=True)
class Finding:
    """A confirmed detection, enriched with whatever ownership data was found."""

    address: str
    port: int
    uri: str
    ownership: OwnershipInfo = OwnershipInfo()

    @property
    def endpoint(self) -> str:
        return Target(self.address, self.port).endpoint
