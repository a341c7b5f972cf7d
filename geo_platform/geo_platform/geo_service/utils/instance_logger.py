"""
Logging setup and entity lifecycle log lines for the service layer.
"""
import logging
import os
import sys
from typing import Any, Optional


def configure_logging(level: str = "INFO", log_dir: Optional[str] = None) -> None:
    """
    Configure stdout logging, plus a file handler when ``log_dir`` is given.

    A log directory that cannot be created only drops the file handler.
    """
    handlers = [logging.StreamHandler(sys.stdout)]

    if log_dir:
        try:
            os.makedirs(log_dir, exist_ok=True)
            handlers.append(logging.FileHandler(os.path.join(log_dir, "geo_service.log")))
        except OSError as e:
            print(f"WARNING: Could not set up file logging: {e}", file=sys.stderr)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True
    )


class InstanceLogger:
    """
    Emits one log line per entity lifecycle step (create/select/update/delete).

    Bound to a context name, usually the owning service class.
    """

    def __init__(self, context: str):
        self.context = context
        self._logger = logging.getLogger(f"geo_service.{context}")

    def created(self, instance: Any) -> None:
        self._logger.info("[%s] %r created", self.context, instance)

    def selected(self, entity: str, count: int) -> None:
        self._logger.info("[%s] %d %s instance(s) selected", self.context, count, entity)

    def updated(self, instance: Any) -> None:
        self._logger.info("[%s] %r updated", self.context, instance)

    def deleted(self, entity: str, affected: int) -> None:
        self._logger.info("[%s] %d %s instance(s) deleted", self.context, affected, entity)
