import logging
import os

LOG_LEVEL = os.getenv("SCHEDULE_LOG_LEVEL", "INFO").upper()

# Path of an append-only debug log for the parser (empty = disabled)
PARSE_DEBUG_LOG = os.getenv("SCHEDULE_PARSE_DEBUG_LOG", "")

MAX_UPLOAD_BYTES = int(os.getenv("SCHEDULE_MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))

CORS_ORIGINS = [o.strip() for o in os.getenv("SCHEDULE_CORS_ORIGINS", "*").split(",") if o.strip()]

DEFAULT_SHIFT_HOURS = int(os.getenv("SCHEDULE_DEFAULT_SHIFT_HOURS", "8"))

HOST = os.getenv("SCHEDULE_HOST", "127.0.0.1")
PORT = int(os.getenv("SCHEDULE_PORT", "8000"))


def configure_logging():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if PARSE_DEBUG_LOG:
        parser_logger = logging.getLogger("schedule_parser")
        already_attached = any(
            isinstance(h, logging.FileHandler) and h.baseFilename == os.path.abspath(PARSE_DEBUG_LOG)
            for h in parser_logger.handlers
        )
        if not already_attached:
            handler = logging.FileHandler(PARSE_DEBUG_LOG, mode="a")
            handler.setLevel(logging.DEBUG)
            handler.setFormatter(logging.Formatter("%(asctime)s DEBUG: %(message)s"))
            parser_logger.addHandler(handler)
            parser_logger.setLevel(logging.DEBUG)
