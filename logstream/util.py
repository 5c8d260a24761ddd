import logging
from pathlib import Path

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(log_dir: Path, level: int = logging.DEBUG) -> logging.Logger:
    """
    Send everything under the 'logstream' logger to <log_dir>/logstream.log

    The terminal belongs to the TUI, so nothing goes to stdout. Calling this
    more than once does not add duplicate handlers.
    """
    logger = logging.getLogger('logstream')
    logger.setLevel(level)

    if not logger.handlers:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_dir / "logstream.log", encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(file_handler)

    return logger
