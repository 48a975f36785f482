import logging
import sys


class _ColoredFormatter(logging.Formatter):
    _COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    _RESET = '\033[0m'
    _BOLD = '\033[1m'

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        color = self._COLORS.get(levelname, '')
        if color:
            record.levelname = f"{color}{self._BOLD}{levelname}{self._RESET}"
        try:
            return super().format(record)
        finally:
            # the same record reaches the other console handler
            record.levelname = levelname


class _BelowWarningFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


def _make_handler(stream, level: int, log_format: str, date_format: str) -> logging.Handler:
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    formatter = (
        _ColoredFormatter(log_format, datefmt=date_format)
        if stream.isatty()
        else logging.Formatter(log_format, datefmt=date_format)
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(level: int | str = logging.INFO) -> None:
    """Setup console logging: informational records on stdout, warnings and errors on stderr."""
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    log_format = '%(asctime)s [%(levelname)s] %(name)s %(funcName)s():%(lineno)d - %(message)s'
    date_format = '%Y-%m-%d %H:%M:%S'

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    info_handler = _make_handler(sys.stdout, level, log_format, date_format)
    info_handler.addFilter(_BelowWarningFilter())
    root_logger.addHandler(info_handler)

    error_handler = _make_handler(sys.stderr, max(level, logging.WARNING), log_format, date_format)
    root_logger.addHandler(error_handler)
