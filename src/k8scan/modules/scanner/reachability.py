"""TCP reachability gate."""

import asyncio
import logging

logger = logging.getLogger(__name__)


async def port_open(address: str, port: int, timeout: float) -> bool:
    """Return True if a TCP connection to address:port is accepted within timeout.

    The connection is closed as soon as it is established. Refusals, timeouts
    and other network errors all collapse into False.
    """
    try:
        _, writer = await asyncio.wait_for(asyncio.open_connection(address, port), timeout)
    except (OSError, TimeoutError) as exc:
        logger.debug("connect to %s:%d failed: %r", address, port, exc)
        return False

    writer.close()
    try:
        await asyncio.wait_for(writer.wait_closed(), timeout)
    except (OSError, TimeoutError):
        pass
    return True
