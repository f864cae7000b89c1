import logging
import os
import sys
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger("memorial")

formatter = logging.Formatter(
    fmt = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
)

stream_handler = logging.StreamHandler(sys.stdout)
stream_handler.setFormatter(formatter)
logger.handlers = [stream_handler]

# LOG_FILE="" keeps logging on stdout only
log_file = os.getenv("LOG_FILE", "memorial.log")
if log_file:
    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(formatter)
    logger.handlers.append(file_handler)

logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

logger.info("Logger initialized")
