from logging.config import dictConfig
from typing import Any

import structlog

from common.core.config_service import get_config_service
from common.logging.std_logging_config import StdLoggingConfig, common_logger_config
from common.utils.utils import deep_merge


def setup_logging(logging_config: dict[str, Any] | None = None, level: str | None = None) -> None:
    """Route structlog through stdlib logging using the shared formatters.

    ``level`` defaults to ``TABLE_ENUM_LOG_LEVEL`` and applies to the
    ``table_enum`` and ``common`` logger trees. ``logging_config`` is merged
    over the defaults and accepts any ``dictConfig`` keys.
    """
    log_level = (level or get_config_service().settings.log_level).upper()
    library_loggers = {
        name: {"handlers": ["standard"], "propagate": False, "level": log_level} for name in ("table_enum", "common")
    }
    config = deep_merge(common_logger_config, {"loggers": library_loggers})
    dictConfig(deep_merge(config, logging_config or {}))

    structlog.configure(
        processors=StdLoggingConfig.structlog_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        # Output goes to stdlib loggers so the dictConfig handlers apply
        logger_factory=StdLoggingConfig.logger_factory,
        cache_logger_on_first_use=True,
    )
