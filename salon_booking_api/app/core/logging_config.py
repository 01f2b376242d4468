"""
Logging setup for the API process.

Messages go to the console and, when ``LOG_FILE`` is set, to a file as
well.  The Google API client, the Stripe SDK and httpx log every
request at INFO level; they are lowered to WARNING so booking and
payment logs stay readable.
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

NOISY_LOGGERS = ("googleapiclient.discovery", "googleapiclient.discovery_cache", "stripe", "httpx")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger once; later calls are no‑ops."""
    root = logging.getLogger()
    if root.handlers:
        # uvicorn, pytest or an earlier create_app call got here first
        return

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
