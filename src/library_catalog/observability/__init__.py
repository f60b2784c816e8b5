"""Logfire observability for the library catalog."""

import logging

import logfire

from .config import ObservabilityConfig

logger = logging.getLogger(__name__)


def initialize_observability(config: ObservabilityConfig | None = None) -> None:
    """Configure Logfire once at server startup."""
    config = config or ObservabilityConfig()

    if not config.enabled:
        logger.debug("Observability disabled via configuration")
        return

    logfire.configure(
        send_to_logfire=config.send_to_logfire,
        token=config.token or None,
        environment=config.environment,
        service_name=config.service_name,
        service_version=config.service_version,
        # None keeps logfire's default console exporter
        console=None if config.console_output else False,
    )
    logger.info(
        "Logfire configured (environment=%s, send_to_logfire=%s)",
        config.environment,
        config.send_to_logfire,
    )


__all__ = [
    "ObservabilityConfig",
    "initialize_observability",
    "logfire",
]
