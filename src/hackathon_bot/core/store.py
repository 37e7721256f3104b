"""
Stores de documents JSON.

Chaque store persiste un seul document (dict) en l'écrasant entièrement :
- `JsonFileStore` : fichier local (par défaut)
- `PostgresDocumentStore` : ligne de la table `bot_document` (si DATABASE_URL défini)

Un document absent ou illisible se charge comme `None` : l'appelant repart d'un état vide.
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from hackathon_bot.core import db

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    async def load(self) -> Optional[Dict[str, Any]]: ...

    async def save(self, document: Dict[str, Any]) -> None: ...


class JsonFileStore:
    def __init__(self, path: str | os.PathLike[str]):
        self.path = Path(path)

    async def load(self) -> Optional[Dict[str, Any]]:
        try:
            with self.path.open(encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            logger.info("Aucun fichier %s, état vide", self.path)
            return None
        except (OSError, ValueError):
            logger.warning("Fichier %s illisible, état vide", self.path, exc_info=True)
            return None
        if not isinstance(data, dict):
            logger.warning("Contenu inattendu dans %s, état vide", self.path)
            return None
        return data

    async def save(self, document: Dict[str, Any]) -> None:
        payload = json.dumps(document, indent=2, ensure_ascii=False)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(payload, encoding="utf-8")

    def __repr__(self) -> str:
        return f"JsonFileStore({str(self.path)!r})"


class PostgresDocumentStore:
    def __init__(self, pool, name: str):
        self.pool = pool
        self.name = name

    async def load(self) -> Optional[Dict[str, Any]]:
        data = await db.fetch_document(self.pool, self.name)
        if data is not None and not isinstance(data, dict):
            logger.warning("Document %s inattendu en base, état vide", self.name)
            return None
        return data

    async def save(self, document: Dict[str, Any]) -> None:
        await db.save_document(self.pool, self.name, document)

    def __repr__(self) -> str:
        return f"PostgresDocumentStore({self.name!r})"


__all__ = ["DocumentStore", "JsonFileStore", "PostgresDocumentStore"]
