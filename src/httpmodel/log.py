"""
=============================================================================
LOGGING SETUP
=============================================================================

Every module logs through a logger named after itself, all under the
"httpmodel" namespace:

    httpmodel.http.headers   rejected header names / values
    httpmodel.http.uri       unparseable URIs, rejected components
    httpmodel.http.request   rejected methods / targets, Host synthesis
    ...

The library never touches the root logger. An application either
configures "httpmodel" itself:

    logging.getLogger("httpmodel").setLevel(logging.DEBUG)

or calls configure_logging() with a MessageConfig:

    configure_logging(MessageConfig(log_level="DEBUG", log_format="json"))

=============================================================================
"""

import json
import logging
from datetime import datetime, timezone
from typing import Optional

from .config import MessageConfig


LOGGER_NAME = "httpmodel"

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line, for log aggregators (ELK, Datadog, ...).

        {"timestamp": "...", "level": "DEBUG", "logger": "httpmodel.http.uri",
         "message": "Rejected port 70000"}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def configure_logging(
    config: Optional[MessageConfig] = None,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """
    Attach a handler to the "httpmodel" logger and set its level.

    Calling it again replaces the handler it installed last time instead of
    stacking a second one.

    Args:
        config: Level and format to use. Defaults to MessageConfig().
        handler: Handler to install. Defaults to a StreamHandler (stderr).

    Returns:
        The configured "httpmodel" logger.
    """
    config = config or MessageConfig()
    config.validate()

    logger = logging.getLogger(LOGGER_NAME)
    for existing in list(logger.handlers):
        if getattr(existing, "_httpmodel_handler", False):
            logger.removeHandler(existing)

    handler = handler or logging.StreamHandler()
    if config.log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    handler._httpmodel_handler = True

    logger.addHandler(handler)
    logger.setLevel(config.level)
    return logger
