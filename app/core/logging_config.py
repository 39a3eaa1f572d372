import logging.config


def setup_logging(level: str = "INFO") -> None:
    """Configure console logging for the app and uvicorn."""
    level = level.upper()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": level,
                    "formatter": "default",
                },
            },
            "loggers": {
                "app": {"level": level, "handlers": ["console"], "propagate": False},
            },
            "root": {"level": level, "handlers": ["console"]},
        }
    )
