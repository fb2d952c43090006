import logging
import colorlog

PACKAGE_LOGGER_NAME = 'arearamps'

LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'bold_red',
}

formatter = colorlog.ColoredFormatter(
    "%(log_color)s%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    log_colors=LOG_COLORS
)

handler = logging.StreamHandler()
handler.setFormatter(formatter)

_package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
_package_logger.setLevel(logging.INFO)
_package_logger.addHandler(handler)
_package_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Logger below the package logger; module loggers share its colored handler and level."""
    if name == '__main__' or not name.startswith(PACKAGE_LOGGER_NAME):
        name = f'{PACKAGE_LOGGER_NAME}.{name}'
    return logging.getLogger(name)


def set_log_level(level: int | str):
    _package_logger.setLevel(level)


if __name__ == "__main__":
    set_log_level(logging.DEBUG)
    logger = get_logger(__name__)
    logger.debug("Resampling ramps to weekly with mean, min and max.")
    logger.info("Computing net load ramps of 8760 areas rows.")
    logger.warning("Table of type areas has no 'mcYear' column.")
