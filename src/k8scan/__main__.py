"""Allow ``python -m k8scan``."""

from k8scan.cli import main

main()
