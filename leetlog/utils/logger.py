# leetlog/utils/logger.py
import logging
import sys
from leetlog.utils.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Every module logs through this one named logger.
logger = logging.getLogger("leetlog")

# Unknown level names in LOG_LEVEL fall back to INFO.
logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

# uvicorn --reload re-imports this module; start from a single handler each time.
if logger.hasHandlers():
    logger.handlers.clear()

_stdout = logging.StreamHandler(sys.stdout)
_stdout.setFormatter(logging.Formatter(LOG_FORMAT))
logger.addHandler(_stdout)

# uvicorn configures the root logger too.
logger.propagate = False
