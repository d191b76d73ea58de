from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .errors import ConfigurationError

DUPLICATE_POLICIES = frozenset({"reject", "overwrite"})


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    if val in {"1", "true", "yes", "y", "on"}:
        return True
    if val in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclass(frozen=True)
class Settings:
    """Static settings for service dispatch.

    Defaults are read from the environment when the module is imported.
    Pass an explicit instance to ServiceBuilder to override them.
    """

    log_level: str = os.environ.get("JSONRPC_SERVICE_LOG_LEVEL", "INFO")

    # What to do when a method name is registered twice:
    # "reject" raises DuplicateMethodError, "overwrite" keeps the last one.
    duplicate_methods: str = os.environ.get("JSONRPC_SERVICE_DUPLICATE_METHODS", "reject")

    # Include the formatted traceback in server_error data.
    include_traceback: bool = _env_bool("JSONRPC_SERVICE_INCLUDE_TRACEBACK", False)

    # Batch entries run on a thread pool of this size; 1 keeps them sequential.
    batch_workers: int = int(os.environ.get("JSONRPC_SERVICE_BATCH_WORKERS", "1"))

    def __post_init__(self) -> None:
        if self.duplicate_methods not in DUPLICATE_POLICIES:
            raise ConfigurationError(
                f"duplicate_methods must be one of {sorted(DUPLICATE_POLICIES)}",
                setting="duplicate_methods",
                value=self.duplicate_methods,
            )
        if self.batch_workers < 1:
            raise ConfigurationError(
                "batch_workers must be at least 1",
                setting="batch_workers",
                value=self.batch_workers,
            )


settings = Settings()


def configure_logging(config: Settings | None = None) -> logging.Logger:
    """Attach a stream handler to the package logger at the configured level."""
    config = config or settings
    package_logger = logging.getLogger("jsonrpc_service")
    package_logger.setLevel(config.log_level.upper())
    if not any(getattr(h, "_jsonrpc_service", False) for h in package_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handler._jsonrpc_service = True  # type: ignore[attr-defined]
        package_logger.addHandler(handler)
    return package_logger
