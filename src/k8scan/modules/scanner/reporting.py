"""Finding output."""

import sys
from typing import TextIO

from .models import Finding


def format_finding(finding: Finding) -> str:
    """Tab-separated line: ``address:port  handle  name  reference``."""
    ownership = finding.ownership
    return "\t".join(
        [
            f"{finding.address}:{finding.port}",
            ownership.handle,
            ownership.name,
            ownership.reference,
        ]
    )


class FindingPrinter:
    """Writes one line per finding.

    Each line goes out in a single write followed by a flush, so lines from
    concurrent pipelines never split.
    """

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream
        self.count = 0

    def __call__(self, finding: Finding) -> None:
        stream = self.stream or sys.stdout
        stream.write(format_finding(finding) + "\n")
        stream.flush()
        self.count += 1
