import logging.config
import os
from pathlib import Path

LOGGING_CONFIG_PATH = Path(__file__).resolve().parent.parent / "logging.conf"

# Ensure logs directory exists
os.makedirs("logs", exist_ok=True)

logging.config.fileConfig(LOGGING_CONFIG_PATH, disable_existing_loggers=False)


logger = logging.getLogger("shopapp")
