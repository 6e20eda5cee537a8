# logger_setup.py
import logging
from datetime import datetime

from config import LOG_DIR

def setup_logger(level=logging.INFO, log_dir=LOG_DIR):
    log_dir.mkdir(exist_ok=True, parents=True)
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    log_file = log_dir / f"drip_{timestamp}.log"

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler()
        ]
    )

    logging.info(f"Logger initialized at {logging.getLevelName(level)}, output file: {log_file}")
    return log_file
