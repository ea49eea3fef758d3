"""k8scan CLI - find exposed Kubernetes dashboards and API servers."""

import logging
from typing import NoReturn, Optional

import typer

from k8scan.config import (
    DEFAULT_CIDR,
    DEFAULT_CONCURRENCY,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_PING_TIMEOUT,
    ENV_CIDR,
    ENV_CONCURRENCY,
    ENV_EMAIL_RECIPIENT,
    ENV_MAILGUN_API_KEY,
    ENV_MAILGUN_DOMAIN,
    ENV_PORTS,
    MailgunConfig,
    ScanConfig,
    load_global_config,
    resolve_option,
)
from k8scan.modules.arin import ArinClient
from k8scan.modules.notify import MailgunNotifier
from k8scan.modules.scanner import FindingPrinter, ScanDispatcher, ScanSummary
from k8scan.tools.net import PortSpecError, format_ports, parse_cidr, parse_port_spec
from k8scan.utils.async_utils import ScanInterrupted, run_with_signals
from k8scan.utils.debug import configure_logging

logger = logging.getLogger("k8scan.cli")

app = typer.Typer(
    name="k8scan",
    help="Scan an IP range for Kubernetes dashboards and API servers.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if not value:
        return
    from importlib.metadata import PackageNotFoundError, version as pkg_version

    try:
        current_version = pkg_version("k8scan")
    except PackageNotFoundError:
        current_version = "0.0.0+unknown"
    typer.echo(f"k8scan {current_version}")
    raise typer.Exit()


def fatal(message: str, *args: object) -> NoReturn:
    """Log at CRITICAL and exit with status 1."""
    logger.critical(message, *args)
    raise typer.Exit(1)


def build_config(
    cidr: str | None,
    ports: str | None,
    timeout_ping: float,
    timeout_get: float,
    concurrency: int | None,
    graceful: bool,
    mailgun_api_key: str | None,
    mailgun_domain: str | None,
    email_recipient: str | None,
) -> ScanConfig:
    """Resolve options against env/config file and validate them.

    Raises:
        ValueError: for a malformed CIDR, port spec, concurrency value or
            config file.
    """
    file_config = load_global_config()

    def resolve(value, key, default=None):
        return resolve_option(value, key, default, global_config=file_config)

    effective_cidr = str(resolve(cidr, ENV_CIDR, DEFAULT_CIDR))
    network = parse_cidr(effective_cidr)

    port_spec = resolve(ports, ENV_PORTS, "")
    port_list = parse_port_spec(str(port_spec))

    raw_concurrency = resolve(concurrency, ENV_CONCURRENCY, DEFAULT_CONCURRENCY)
    try:
        effective_concurrency = int(raw_concurrency)
    except (TypeError, ValueError):
        raise ValueError(f"invalid concurrency {raw_concurrency!r}") from None

    mailgun = MailgunConfig(
        domain=str(resolve(mailgun_domain, ENV_MAILGUN_DOMAIN, "")),
        api_key=str(resolve(mailgun_api_key, ENV_MAILGUN_API_KEY, "")),
        recipient=str(resolve(email_recipient, ENV_EMAIL_RECIPIENT, "")),
    )

    return ScanConfig(
        cidr=str(network),
        ports=port_list,
        ping_timeout=timeout_ping,
        http_timeout=timeout_get,
        concurrency=effective_concurrency,
        graceful=graceful,
        mailgun=mailgun,
    )


def build_dispatcher(config: ScanConfig) -> ScanDispatcher:
    """Wire the dispatcher with the ARIN client and, when configured, Mailgun."""
    notifier = None
    if config.mailgun.enabled:
        notifier = MailgunNotifier(
            config.mailgun.domain,
            config.mailgun.api_key,
            config.mailgun.recipient,
            timeout=config.http_timeout,
        )
    return ScanDispatcher(
        config,
        enricher=ArinClient(timeout=config.http_timeout),
        notifier=notifier,
        emit=FindingPrinter(),
    )


@app.command()
def scan(
    timeout_ping: float = typer.Option(
        DEFAULT_PING_TIMEOUT,
        "--timeout-ping",
        min=0.001,
        help="Timeout in seconds for checking that the port is open",
    ),
    timeout_get: float = typer.Option(
        DEFAULT_HTTP_TIMEOUT,
        "--timeout-get",
        min=0.001,
        help="Timeout in seconds for getting the contents of the URL",
    ),
    cidr: Optional[str] = typer.Option(
        None, "--cidr", help=f"IP CIDR to scan (default {DEFAULT_CIDR!r})"
    ),
    ports: Optional[str] = typer.Option(
        None,
        "--ports",
        help="Ports to scan (ex. 80-443 or 80,443,8080 or 1-20,22,80-443) "
        "(default '80,443,8001,9001')",
    ),
    concurrency: Optional[int] = typer.Option(
        None,
        "--concurrency",
        "-c",
        help=f"Maximum targets probed at once, 0 for unbounded (default {DEFAULT_CONCURRENCY})",
    ),
    graceful: bool = typer.Option(
        False,
        "--graceful",
        help="On interrupt, cancel in-flight probes and drain instead of exiting at once",
    ),
    mailgun_api_key: Optional[str] = typer.Option(
        None, "--mailgun-api-key", help="Mailgun API Key to use for sending email (optional)"
    ),
    mailgun_domain: Optional[str] = typer.Option(
        None, "--mailgun-domain", help="Mailgun Domain to use for sending email (optional)"
    ),
    email_recipient: Optional[str] = typer.Option(
        None, "--email-recipient", help="Recipient for email notifications (optional)"
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help="Run in debug mode"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the installed k8scan version",
    ),
) -> None:
    """Scan for Kubernetes Dashboards and API Servers."""
    configure_logging(debug)

    try:
        config = build_config(
            cidr,
            ports,
            timeout_ping,
            timeout_get,
            concurrency,
            graceful,
            mailgun_api_key,
            mailgun_domain,
            email_recipient,
        )
    except PortSpecError as exc:
        fatal("invalid port specification: %s", exc)
    except ValueError as exc:
        fatal("%s", exc)

    logger.info(
        "Scanning for Kubernetes Dashboards and API Servers on %s over ports %s",
        config.cidr,
        format_ports(config.ports),
    )
    if config.mailgun.enabled:
        logger.info(
            "Using Mailgun Domain %s, API Key %s to send emails to %s",
            config.mailgun.domain,
            config.mailgun.masked_api_key,
            config.mailgun.recipient,
        )
    logger.info("This may take a bit...")

    dispatcher = build_dispatcher(config)
    try:
        summary: ScanSummary = run_with_signals(dispatcher.run(), graceful=config.graceful)
    except ScanInterrupted as exc:
        logger.info(
            "Scan interrupted by %s after %d targets completed", exc, dispatcher.completed
        )
        raise typer.Exit(0) from None

    logger.info("Scan took: %.3fs", summary.elapsed)
    logger.info(
        "Probed %d targets, found %d dashboards/API servers",
        summary.targets,
        len(summary.findings),
    )


def main():
    """Entry point for the CLI."""
    app()
