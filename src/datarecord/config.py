import logging
from typing import Literal
import structlog
import pydantic
from pydantic_settings import BaseSettings, SettingsConfigDict
from .exceptions import ConfigError

# file opened by the last load_config, closed when logging is reconfigured
_log_handle = None


class Config(BaseSettings):
    log_level: Literal["debug", "info", "warning", "error", "critical"] = (
        pydantic.Field(
            "info",
            description="Logging level.",
        )
    )
    log_file: str = pydantic.Field(
        "STDOUT",
        description="Path to the log file.",
    )
    log_format: Literal["text", "json"] = pydantic.Field(
        "text",
        description="Log format.",
    )
    model_config = SettingsConfigDict(env_prefix="datarecord_")


def load_config(**overrides) -> Config:
    global _log_handle
    try:
        config = Config(**overrides)
    except pydantic.ValidationError as e:
        raise ConfigError(str(e)) from e
    # configure log output
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(),
    ]
    if config.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    if _log_handle is not None:
        _log_handle.close()
        _log_handle = None
    if config.log_file == "STDOUT":
        factory = structlog.PrintLoggerFactory()
    else:
        _log_handle = open(config.log_file, "a")
        factory = structlog.PrintLoggerFactory(file=_log_handle)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(config.log_level.upper())
        ),
        logger_factory=factory,
    )
    return config
