import logging
import sys
from typing import Optional, TextIO

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "profile-scoring"
LOG_FORMAT = '%(timestamp)s %(level)s %(name)s %(message)s'

# `extra=` keys the scoring modules attach; grouped under "scoring" in the JSON record.
SCORING_CONTEXT_FIELDS = (
    "instrument",
    "section",
    "code",
    "template_key",
    "dimension_name",
    "variant",
    "available_keys",
)


class ScoringJsonFormatter(jsonlogger.JsonFormatter):
    """JSON records tagged with the service name, with scoring context nested under one key."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        if not log_record.get('timestamp'):
            log_record['timestamp'] = record.created
        log_record['level'] = record.levelname
        log_record['service'] = SERVICE_NAME

        context = {field: log_record.pop(field) for field in SCORING_CONTEXT_FIELDS if field in log_record}
        if context:
            log_record['scoring'] = context


def _json_handler(logger: logging.Logger) -> Optional[logging.Handler]:
    for handler in logger.handlers:
        if isinstance(handler.formatter, ScoringJsonFormatter):
            return handler
    return None


def setup_logging(log_level_str: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """
    Installs one JSON handler on the root logger and sets its level.
    Repeat calls only change the level; unknown level names fall back to INFO.
    """
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if _json_handler(root_logger) is None:
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.setFormatter(ScoringJsonFormatter(LOG_FORMAT))
        root_logger.addHandler(handler)
        root_logger.info(f"JSON logging configured at {logging.getLevelName(log_level)}")
    else:
        root_logger.debug(f"JSON logging already configured, level set to {logging.getLevelName(log_level)}")
