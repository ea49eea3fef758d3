"""Port specification parsing."""

DEFAULT_PORTS: tuple[int, ...] = (80, 443, 8001, 9001)

MIN_PORT = 0
MAX_PORT = 65535


class PortSpecError(ValueError):
    """Raised when a port specification cannot be parsed."""


def _parse_port(token: str, spec: str) -> int:
    value = token.strip()
    if not (value.isascii() and value.isdigit()):
        raise PortSpecError(f"invalid port {token!r} in {spec!r}")
    port = int(value)
    if port > MAX_PORT:
        raise PortSpecError(f"port {port} out of range {MIN_PORT}-{MAX_PORT}")
    return port


def parse_port_spec(spec: str | None) -> tuple[int, ...]:
    """
    Resolve a port specification into an ordered tuple of ports.

    Tokens are comma-separated; each is a single port or an inclusive
    ``begin-end`` range. Order follows the specification with ranges
    expanded ascending, duplicates are kept. An empty specification
    resolves to DEFAULT_PORTS.

    Examples:
        "80-82,443" -> (80, 81, 82, 443)
        "" -> (80, 443, 8001, 9001)
    """
    if spec is None or not spec.strip():
        return DEFAULT_PORTS

    ports: list[int] = []
    for token in spec.split(","):
        if "-" in token:
            begin_raw, end_raw = token.split("-", 1)
            begin = _parse_port(begin_raw, spec)
            end = _parse_port(end_raw, spec)
            if begin > end:
                raise PortSpecError(
                    f"end port can not be less than the beginning port: {end} < {begin}"
                )
            ports.extend(range(begin, end + 1))
            continue
        ports.append(_parse_port(token, spec))
    return tuple(ports)


def format_ports(ports: tuple[int, ...] | list[int]) -> str:
    """Render ports back into a compact spec, collapsing consecutive runs."""
    parts: list[str] = []
    run_start: int | None = None
    previous: int | None = None
    for port in ports:
        if previous is not None and port == previous + 1:
            previous = port
            continue
        if run_start is not None:
            parts.append(_format_run(run_start, previous))
        run_start = previous = port
    if run_start is not None:
        parts.append(_format_run(run_start, previous))
    return ",".join(parts)


def _format_run(start: int, end: int | None) -> str:
    if end is None or end == start:
        return str(start)
    return f"{start}-{end}"
