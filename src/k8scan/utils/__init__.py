"""Runtime helpers: logging and event loop management."""
