import logging
from colorlog import ColoredFormatter
from ferrecloud.core.settings import settings

LOG_FORMAT = (
    "%(log_color)s%(asctime)s %(levelname)-8s "
    "%(reset)s%(purple)s[" + settings.APP_ENV + "]%(reset)s "
    "%(blue)s%(name)s:%(reset)s %(message)s"
)

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}

def _build_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(
        ColoredFormatter(
            LOG_FORMAT,
            datefmt="%Y-%m-%d %H:%M:%S",
            reset=True,
            # en prod los logs van a un colector, sin códigos ANSI
            no_color=settings.APP_ENV == "prod",
            log_colors=LOG_COLORS,
        )
    )
    return handler

logger = logging.getLogger("ferrecloud")
logger.setLevel("DEBUG" if settings.DEBUG else settings.LOG_LEVEL.upper())
if not logger.handlers:
    logger.addHandler(_build_handler())
logger.propagate = False
