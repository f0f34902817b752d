# =============================================================================
# numdump - Runtime Configuration
# =============================================================================
#
# Defaults come from the environment:
#
#   NUMDUMP_MAX_ELEMENTS  upper bound on elements per array (unset = no limit)
#   NUMDUMP_LOG_LEVEL     level of the "numdump" logger, by name or number
#                         (unset = the logger level is left alone)
#
# The environment is read on first use, not at import. A malformed value
# found that way is logged and the defaults are used; reset_config() and
# configure() raise InvalidArgument instead.
#
# Usage:
#   import numdump
#   numdump.configure(max_elements=1 << 20, log_level="DEBUG")
#   numdump.get_config().max_elements
#
# =============================================================================

import logging
from typing import Optional

from pydantic import Field, NonNegativeInt, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import InvalidArgument

# Bytes per element (IEEE-754 single precision)
FLOAT_SIZE = 4

ENV_PREFIX = "NUMDUMP_"
ENV_MAX_ELEMENTS = ENV_PREFIX + "MAX_ELEMENTS"
ENV_LOG_LEVEL = ENV_PREFIX + "LOG_LEVEL"

logger = logging.getLogger(__name__)
_package_logger = logging.getLogger("numdump")


class Config(BaseSettings):
    """Active library settings, read from ``NUMDUMP_*`` variables."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    max_elements: Optional[NonNegativeInt] = Field(
        default=None,
        description="Largest array numdump will allocate (None = no limit)",
    )
    log_level: Optional[int] = Field(
        default=None,
        description="Level for the numdump logger (None = leave it alone)",
    )

    @field_validator("max_elements", mode="before")
    @classmethod
    def validate_max_elements(cls, v):
        """Reject bools, which would otherwise pass as 0 or 1."""
        if isinstance(v, bool):
            raise ValueError("max_elements must be an integer, not bool")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v):
        """Accept a level name ("debug") or number (10, "10")."""
        if v is None:
            return None
        if isinstance(v, bool):
            raise ValueError("log level must be a name or number, not bool")
        if isinstance(v, int):
            return v
        if isinstance(v, str):
            text = v.strip()
            if text.lstrip("-").isdigit():
                return int(text)
            level = logging.getLevelName(text.upper())
            if isinstance(level, int):
                return level
            raise ValueError(f"unknown log level {v!r}")
        raise ValueError(f"log level must be a name or number, got {type(v).__name__}")


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        parts.append(f"{field}: {error['msg']}")
    return "invalid numdump configuration: " + "; ".join(parts)


def _build(**values) -> Config:
    try:
        return Config(**values)
    except ValidationError as exc:
        raise InvalidArgument(_describe(exc)) from None


_active: Optional[Config] = None
_owns_logger_level = False


def _apply(config: Config) -> Config:
    global _active, _owns_logger_level
    _active = config
    if config.log_level is not None:
        _package_logger.setLevel(config.log_level)
        _owns_logger_level = True
    elif _owns_logger_level:
        # Only undo a level numdump set itself.
        _package_logger.setLevel(logging.NOTSET)
        _owns_logger_level = False
    return config


def get_config() -> Config:
    """Return the active configuration, reading the environment on first use."""
    if _active is None:
        try:
            config = _build()
        except InvalidArgument as exc:
            logger.warning("Ignoring %s* environment settings: %s", ENV_PREFIX, exc)
            config = Config.model_construct()
        _apply(config)
    return _active


def configure(**changes) -> Config:
    """Replace selected settings and return the new configuration.

    Unknown keys and invalid values raise InvalidArgument; the previous
    configuration stays active in that case.
    """
    unknown = sorted(set(changes) - set(Config.model_fields))
    if unknown:
        raise InvalidArgument(f"unknown configuration keys: {', '.join(unknown)}")
    values = get_config().model_dump()
    values.update(changes)
    return _apply(_build(**values))


def reset_config() -> Config:
    """Re-read the defaults from the environment.

    Raises InvalidArgument when a ``NUMDUMP_*`` variable is malformed.
    """
    return _apply(_build())


def check_element_count(count: int) -> None:
    """Raise InvalidArgument when *count* exceeds ``max_elements``."""
    limit = get_config().max_elements
    if limit is not None and count > limit:
        raise InvalidArgument(f"{count} elements exceeds max_elements={limit}")
