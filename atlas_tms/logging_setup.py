import os
from datetime import datetime
import logging
import sys


def set_up_logging(level=logging.INFO, dir_logs=None):

    # Console handler
    handlers = [logging.StreamHandler(sys.stdout)]

    # File handler, only when a log directory is given
    if dir_logs is not None:
        os.makedirs(dir_logs, exist_ok=True)
        path_log = os.path.join(dir_logs,
                    datetime.now().strftime("log_%Y-%m-%d_%H-%M-%S.txt"))
        handlers.append(logging.FileHandler(path_log, encoding='utf-8'))

    # Configure root logger
    logging.basicConfig(
        level=level,
        format='%(message)s',
        handlers=handlers,
        force=True
    )

    return
