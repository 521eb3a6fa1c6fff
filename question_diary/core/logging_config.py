"""
Logging setup for the Question Diary API.

Call `setup_logging()` once at startup; modules then use
`logging.getLogger(__name__)`. Output goes to stdout, one line per record,
so the container platform can collect it alongside gunicorn's own logs.
"""
import logging
import sys
from typing import Optional

from question_diary.core.config import settings

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def setup_logging(level: Optional[str] = None) -> None:
    """Configure the root logger. Safe to call more than once."""
    global _configured

    resolved = (level or settings.LOG_LEVEL).upper()
    root = logging.getLogger()
    root.setLevel(resolved)

    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)

    # SQL echo is noisy at INFO; only surface it when debugging.
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if resolved == "DEBUG" else logging.WARNING
    )
    _configured = True
