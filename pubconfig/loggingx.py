"""
Structured Logging Setup

structlog configuration and the log helpers used while resolving and registering.
"""

import sys
import logging
import structlog
from typing import Optional
from pathlib import Path


_SHARED_PROCESSORS = (
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
)


def setup_logging(level: str = "INFO", verbose: bool = False,
                  log_file: Optional[str] = None) -> None:
    """
    Route structlog through the standard library logger.

    Args:
        level: Logging level name
        verbose: Colored console output instead of JSON lines
        log_file: Also append plain-text records to this file
    """
    # stderr keeps command output on stdout machine-readable
    logging.basicConfig(format="%(message)s", stream=sys.stderr,
                        level=getattr(logging, level.upper()))

    renderer = (structlog.dev.ConsoleRenderer(colors=True) if verbose
                else structlog.processors.JSONRenderer())
    structlog.configure(
        processors=[*_SHARED_PROCESSORS, renderer],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file)
        handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        logging.getLogger().addHandler(handler)


def get_logger(name: str) -> structlog.BoundLogger:
    """Named structlog logger; configuration is picked up on first use."""
    return structlog.get_logger(name)


def log_credential_resolution(target: str, field: str, source: Optional[str],
                              logger: Optional[structlog.BoundLogger] = None) -> None:
    """
    Log which source supplied a credential field. Never logs the value.

    Args:
        target: Repository target name
        field: Credential field (username or password)
        source: Description of the winning source, None when nothing matched
        logger: Optional logger instance
    """
    if logger is None:
        logger = get_logger(__name__)

    if source is None:
        logger.debug("Credential field unresolved", target=target, field=field)
    else:
        logger.debug("Credential field resolved",
                     target=target, field=field, source=source)


def log_registration(kind: str, name: str,
                     logger: Optional[structlog.BoundLogger] = None, **details) -> None:
    """
    Log a registration with the publishing registry.

    Args:
        kind: Entry kind (repository or publication)
        name: Entry name
        logger: Optional logger instance
        **details: Extra fields such as url or authenticated
    """
    if logger is None:
        logger = get_logger(__name__)

    logger.info("Registered publishing entry", kind=kind, name=name, **details)
