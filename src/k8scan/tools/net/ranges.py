"""CIDR block enumeration."""

from __future__ import annotations

import ipaddress
from collections.abc import Iterator

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address
IPNetwork = ipaddress.IPv4Network | ipaddress.IPv6Network


def parse_cidr(cidr: str) -> IPNetwork:
    """Parse a CIDR block, masking off any host bits.

    ``10.0.0.7/24`` becomes ``10.0.0.0/24``. A bare address is a single-host block.
    Raises ValueError for anything that is not an IPv4 or IPv6 block.
    """
    if not isinstance(cidr, str) or not cidr.strip():
        raise ValueError(f"invalid CIDR address: {cidr!r}")
    return ipaddress.ip_network(cidr.strip(), strict=False)


class AddressRange:
    """Every address inside a network block, network and broadcast included.

    Iteration is lazy and starts over each time ``iter()`` is called, so the
    same range can be walked more than once without holding a list in memory.
    """

    def __init__(self, network: IPNetwork | str):
        self.network = parse_cidr(network) if isinstance(network, str) else network

    def __iter__(self) -> Iterator[IPAddress]:
        return iter_hosts(self.network)

    @property
    def size(self) -> int:
        """Number of addresses in the block (may exceed sys.maxsize for IPv6)."""
        return self.network.num_addresses

    def __contains__(self, address: object) -> bool:
        try:
            return ipaddress.ip_address(address) in self.network  # type: ignore[arg-type]
        except ValueError:
            return False

    def __repr__(self) -> str:
        return f"AddressRange({str(self.network)!r})"


def iter_hosts(network: IPNetwork) -> Iterator[IPAddress]:
    """Yield addresses from the masked network address upwards until the block ends.

    Addresses are handled as integers, which is the same as incrementing the
    big-endian byte form and carrying into the next byte on overflow.
    """
    address_cls = type(network.network_address)
    first = int(network.network_address)
    last = int(network.broadcast_address)
    for value in range(first, last + 1):
        yield address_cls(value)
