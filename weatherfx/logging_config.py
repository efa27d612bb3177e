"""
Logging setup for weatherfx entry points.

While the dashboard runs, curses owns the terminal, so logs go to a file
(~/.weatherfx/logs/weatherfx.log unless WEATHERFX_LOG_FILE says otherwise).
"""

import logging
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_LOG_DIR = Path.home() / '.weatherfx' / 'logs'
DEFAULT_LOG_FILE = DEFAULT_LOG_DIR / 'weatherfx.log'


def configure_logging(level: Union[str, int] = "INFO",
                      log_file: Optional[Union[str, Path]] = None) -> logging.Handler:
    """
    Install one handler on the 'weatherfx' logger.

    Args:
        level: Level name or number
        log_file: Write to this file instead of stderr

    Returns:
        The installed handler
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger('weatherfx')
    for existing in list(root.handlers):
        root.removeHandler(existing)
        existing.close()

    handler: logging.Handler
    if log_file is not None:
        path = Path(log_file).expanduser()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(path, encoding='utf-8')
        except OSError as e:
            # Fall back to discarding logs rather than writing over the TUI
            handler = logging.NullHandler()
            logging.getLogger(__name__).debug(f"Cannot open log file {path}: {e}")
    else:
        handler = logging.StreamHandler()

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
    return handler
