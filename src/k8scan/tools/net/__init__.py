"""Address range and port set helpers."""

from .ports import DEFAULT_PORTS, PortSpecError, format_ports, parse_port_spec
from .ranges import AddressRange, IPAddress, IPNetwork, iter_hosts, parse_cidr

__all__ = [
    "DEFAULT_PORTS",
    "AddressRange",
    "IPAddress",
    "IPNetwork",
    "PortSpecError",
    "format_ports",
    "iter_hosts",
    "parse_cidr",
    "parse_port_spec",
]
