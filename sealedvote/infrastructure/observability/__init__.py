"""Observability infrastructure: structured logging with structlog."""

from sealedvote.infrastructure.observability.logging import (
    build_processors,
    configure_structlog,
)

__all__: list[str] = ["build_processors", "configure_structlog"]
