"""
Configuration management for k8scan.

Supports multiple configuration sources in order of priority:
1. Command-line options (highest priority)
2. Environment variables
3. Global config file (~/.k8scan/config.yml)
4. Default values (lowest priority)
"""

from .env_loader import get_global_config_path, load_global_config
from .getters import get_config, resolve_option
from .models import (
    DEFAULT_CIDR,
    DEFAULT_CONCURRENCY,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_PING_TIMEOUT,
    MailgunConfig,
    ScanConfig,
)

ENV_CIDR = "K8SCAN_CIDR"
ENV_PORTS = "K8SCAN_PORTS"
ENV_CONCURRENCY = "K8SCAN_CONCURRENCY"
ENV_MAILGUN_API_KEY = "K8SCAN_MAILGUN_API_KEY"
ENV_MAILGUN_DOMAIN = "K8SCAN_MAILGUN_DOMAIN"
ENV_EMAIL_RECIPIENT = "K8SCAN_EMAIL_RECIPIENT"

__all__ = [
    # env_loader
    "get_global_config_path",
    "load_global_config",
    # getters
    "get_config",
    "resolve_option",
    # models
    "DEFAULT_CIDR",
    "DEFAULT_CONCURRENCY",
    "DEFAULT_HTTP_TIMEOUT",
    "DEFAULT_PING_TIMEOUT",
    "MailgunConfig",
    "ScanConfig",
    # keys
    "ENV_CIDR",
    "ENV_CONCURRENCY",
    "ENV_EMAIL_RECIPIENT",
    "ENV_MAILGUN_API_KEY",
    "ENV_MAILGUN_DOMAIN",
    "ENV_PORTS",
]
