import datetime as dt
import json
import logging
import logging.config
from pathlib import Path
from typing import Optional

CONSOLE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

# Loggers this application writes to; aiohttp.access carries one line per upload request.
APP_LOGGERS = ("torrentlens", "aiohttp.access")

# Attributes every LogRecord has; anything else on a record came in through extra={...}.
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class JSONLineFormatter(logging.Formatter):
    """Renders a record as one JSON line: time, level, logger, message, source, then extras."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": dt.datetime.fromtimestamp(record.created, tz=dt.timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "source": f"{record.module}:{record.lineno}",
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and key not in entry:
                entry[key] = value

        return json.dumps(entry, default=str)


def build_logging_config(level: str = "INFO", log_file: Optional[Path] = None) -> dict:
    """dictConfig mapping: console on stderr, plus a rotating JSON-lines file when log_file is set."""
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "console",
            "stream": "ext://sys.stderr",
        },
    }
    if log_file is not None:
        handlers["json_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "json_lines",
            "filename": str(log_file),
            "maxBytes": 5 * 1024 * 1024,
            "backupCount": 3,
            "encoding": "utf-8",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"format": CONSOLE_FORMAT},
            "json_lines": {"()": JSONLineFormatter},
        },
        "handlers": handlers,
        "loggers": {
            name: {"level": level.upper(), "handlers": list(handlers), "propagate": False}
            for name in APP_LOGGERS
        },
    }


def config_logging(level: str = "INFO", log_file: Optional[Path] = None) -> dict:
    """Applies build_logging_config and returns the mapping it applied."""
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

    config = build_logging_config(level, log_file)
    logging.config.dictConfig(config)
    return config
