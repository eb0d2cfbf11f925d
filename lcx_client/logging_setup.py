"""
Structured logging setup.

Library modules only call ``structlog.get_logger(__name__)``; applications
that want the client's log format call ``setup_logging`` once at startup.
"""

import logging
from typing import Any, Dict, Optional

import structlog

from lcx_client.config.models import LogFormat, LoggingConfig

_SENSITIVE_KEYS = ("api_key", "secret", "signature")
_SIGN_TOKEN = "sign"


def _is_sensitive(key: str) -> bool:
    # "sign" only as a whole word, e.g. x_access_sign, never "design"
    key = key.lower()
    if any(s in key for s in _SENSITIVE_KEYS):
        return True
    return _SIGN_TOKEN in key.replace("-", "_").split("_")


def _mask_sensitive(_: Any, __: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Mask credential material in log output."""
    for key in list(event_dict.keys()):
        if _is_sensitive(key):
            value = str(event_dict[key])
            if len(value) > 8:
                event_dict[key] = value[:4] + "****"
            else:
                event_dict[key] = "****"
    return event_dict


def setup_logging(config: Optional[LoggingConfig] = None) -> None:
    """
    Configure structlog over the standard library logger.

    Args:
        config: Format and level; JSON at INFO when omitted.
    """
    config = config or LoggingConfig()
    level = getattr(logging, config.level.value)

    if config.format is LogFormat.JSON:
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            _mask_sensitive,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger().setLevel(level)

    # Transport libraries log full URLs, which carry auth query parameters
    for noisy in ("websockets", "aiohttp"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
