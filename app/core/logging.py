import logging

from app.core.config import get_settings


class SecretsFilter(logging.Filter):
    """Mask credential-bearing fields passed through ``extra``."""

    BLOCKED_KEYS = {"password", "code", "id_token", "access_token", "token"}

    def filter(self, record: logging.LogRecord) -> bool:
        for key in self.BLOCKED_KEYS:
            if hasattr(record, key):
                setattr(record, key, "[REDACTED]")
        return True


def configure_logging() -> None:
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    # Logger-level filters skip propagated records, so attach to the handlers.
    for handler in logging.getLogger().handlers:
        if not any(isinstance(existing, SecretsFilter) for existing in handler.filters):
            handler.addFilter(SecretsFilter())
