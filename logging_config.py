import sys

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} - {level} - {message}"


def configure_logging(level: str = "INFO") -> None:
    """Route log output to a single stderr sink at ``level``."""
    logger.configure(
        handlers=[
            {
                "sink": sys.stderr,
                "level": level.upper(),
                "format": LOG_FORMAT,
            }
        ]
    )
