"""
Configuration centralisée du logging pour le bot hackathon.

Objectifs :
- Un seul setup idempotent (évite la duplication des handlers)
- Déduplication des messages identiques (interactions rejouées, retries Discord)
- Format uniforme configurable via variables d'environnement (LOG_LEVEL, LOG_FILE)
- Logger `discord` aligné sur le même niveau et les mêmes handlers
"""
from __future__ import annotations

import logging
import threading
import os

_INITIALIZED = False
_SEEN_LOCK = threading.Lock()
_SEEN_RECORDS: set[tuple[str, int, str]] = set()
_MAX_SEEN = 5000

DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEFAULT_FORMAT = '[%(asctime)s] %(levelname)s %(name)s: %(message)s'
LOG_FILE = os.getenv("LOG_FILE")


class _DeduplicateFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        # Les erreurs avec trace passent toujours
        if record.exc_info:
            return True
        try:
            rendered = record.getMessage()
        except Exception:  # noqa: BLE001
            rendered = str(record.msg)
        key = (record.name, record.levelno, rendered)
        with _SEEN_LOCK:
            if key in _SEEN_RECORDS:
                return False
            if len(_SEEN_RECORDS) >= _MAX_SEEN:
                _SEEN_RECORDS.clear()
            _SEEN_RECORDS.add(key)
        return True


def _build_handlers() -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if LOG_FILE:
        handlers.append(logging.FileHandler(LOG_FILE, encoding="utf-8"))
    return handlers


def setup_logging(force: bool = False) -> None:
    global _INITIALIZED
    if _INITIALIZED and not force:
        return

    root = logging.getLogger()
    if force:
        for h in list(root.handlers):
            root.removeHandler(h)
    if not root.handlers:
        for h in _build_handlers():
            root.addHandler(h)
    formatter = logging.Formatter(DEFAULT_FORMAT)
    for h in root.handlers:
        if not any(isinstance(f, _DeduplicateFilter) for f in h.filters):
            h.addFilter(_DeduplicateFilter())
        h.setFormatter(formatter)
    level = getattr(logging, DEFAULT_LEVEL, logging.INFO)
    root.setLevel(level)
    # discord.py journalise via le logger racine (pas de handler propre, cf. run(log_handler=None))
    logging.getLogger("discord").setLevel(max(level, logging.INFO))
    _INITIALIZED = True


__all__ = ["setup_logging"]
