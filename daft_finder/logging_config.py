"""Logging setup shared by the CLI and the API server."""

import logging
from typing import Optional

from daft_finder.config import Settings, settings as default_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[str] = None, config: Optional[Settings] = None) -> None:
    """Configure the root logger from settings.

    Args:
        level: Override for the configured log level
        config: Settings to read from (defaults to the global settings)
    """
    config = config or default_settings
    log_level = getattr(logging, (level or config.log_level).upper(), logging.INFO)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    # File handler (if log file is configured)
    handlers = [console_handler]
    if config.log_file:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(config.log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)

    # Reduce noise from the HTTP stack
    logging.getLogger("urllib3").setLevel(logging.WARNING)
