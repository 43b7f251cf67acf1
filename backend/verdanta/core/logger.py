import logging
import json
import os
from logging.handlers import RotatingFileHandler
from datetime import datetime

from verdanta.core.config import settings

LOG_DIR = settings.LOG_DIR
os.makedirs(LOG_DIR, exist_ok=True)

# record attributes copied into the JSON line when a caller passes them via `extra`
EXTRA_FIELDS = (
    "request_id",
    "user_id",
    "path",
    "method",
    "status_code",
    "duration_ms",
    "alert_id",
    "action",
    "detail",
)


def json_formatter(record):
    log = {
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "level": record.levelname,
        "service": "verdanta-api",
        "logger": record.name,
        "message": record.getMessage(),
    }

    for field in EXTRA_FIELDS:
        if hasattr(record, field):
            log[field] = getattr(record, field)

    if record.exc_info:
        log["exception"] = logging.Formatter().formatException(record.exc_info)

    return json.dumps(log, default=str)


class JSONFormatter(logging.Formatter):
    def format(self, record):
        return json_formatter(record)


logger = logging.getLogger("verdanta")
logger.setLevel(settings.LOG_LEVEL)

json_f = JSONFormatter()

file_handler = RotatingFileHandler(
    os.path.join(LOG_DIR, "app.json.log"),
    maxBytes=5 * 1024 * 1024,
    backupCount=5
)
file_handler.setLevel(settings.LOG_LEVEL)
file_handler.setFormatter(json_f)

console_handler = logging.StreamHandler()
console_handler.setLevel(settings.LOG_LEVEL)
console_handler.setFormatter(json_f)

if not logger.handlers:
    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
