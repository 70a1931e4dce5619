# --- src/radheat_core/log_config.py ---
import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] [%(name)s] %(message)s"
DEFAULT_LOG_FILE = "radheat.log"


def setup_logging(level=logging.INFO, log_file: Optional[Union[str, Path]] = None):
    """
    Configures logging to stdout and, if `log_file` is given, to that file as well.
    Calling it again replaces the previously installed handlers.
    """
    log_formatter = logging.Formatter(LOG_FORMAT)
    root_logger = logging.getLogger()

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(Path(log_file), mode="a", encoding="utf-8")
        file_handler.setFormatter(log_formatter)
        root_logger.addHandler(file_handler)
        logging.info(f"Logging configured (log file: {log_file}).")
    else:
        logging.info("Logging configured.")
