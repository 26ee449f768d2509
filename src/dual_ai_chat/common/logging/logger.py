# shared service logger, import the `logger` object directly from here
import logging
import os
import sys

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

logger = logging.getLogger("dual_ai_chat")

# guard against duplicate handlers when the module is re-imported (e.g. uvicorn reload)
if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(module)s:%(lineno)d | %(message)s")
    )
    logger.addHandler(handler)

logger.setLevel(LOG_LEVEL)
logger.propagate = False
