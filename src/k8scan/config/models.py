"""Immutable scan configuration."""

from dataclasses import dataclass, field

from k8scan.tools.net import DEFAULT_PORTS

DEFAULT_CIDR = "0.0.0.0/0"
DEFAULT_PING_TIMEOUT = 2.0
DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_CONCURRENCY = 1024


@dataclass(frozen=True)
class MailgunConfig:
    """Mailgun credentials and the address findings are sent to."""

    domain: str = ""
    api_key: str = ""
    recipient: str = ""

    @property
    def enabled(self) -> bool:
        return bool(self.domain and self.api_key and self.recipient)

    @property
    def masked_api_key(self) -> str:
        if len(self.api_key) <= 4:
            return "****"
        return f"{self.api_key[:4]}****"


@dataclass(frozen=True)
class ScanConfig:
    """Configuration for a scan run. Built once and passed to the dispatcher."""

    cidr: str = DEFAULT_CIDR
    ports: tuple[int, ...] = DEFAULT_PORTS
    ping_timeout: float = DEFAULT_PING_TIMEOUT
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    concurrency: int = DEFAULT_CONCURRENCY
    graceful: bool = False
    mailgun: MailgunConfig = field(default_factory=MailgunConfig)

    def __post_init__(self):
        if self.ping_timeout <= 0 or self.http_timeout <= 0:
            raise ValueError("timeouts must be positive")
        if self.concurrency < 0:
            raise ValueError("concurrency must be >= 0 (0 means unbounded)")
