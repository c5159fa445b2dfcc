import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(levelname)s: [%(name)s] %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """Send log records to stdout. No-op if the root logger is already configured."""
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stdout,
    )
