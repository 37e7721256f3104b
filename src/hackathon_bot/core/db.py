"""
Abstraction pour PostgreSQL via asyncpg.

Principes :
- Un pool global unique, créé à la demande (`get_pool`)
- Fonctions utilitaires atomiques (pas d'ORM) pour garder le contrôle
- Une seule table `bot_document` : un document JSON par store (événements, préférences)
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional

import asyncpg

logger = logging.getLogger(__name__)

_pool = None


CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS bot_document (
    name TEXT PRIMARY KEY,
    body JSONB NOT NULL,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
);
"""


# Écrasement complet du document (upsert sur le nom)
UPSERT_DOCUMENT_SQL = """
INSERT INTO bot_document(name, body, updated_at)
VALUES($1, $2::jsonb, NOW())
ON CONFLICT (name) DO UPDATE SET body = EXCLUDED.body, updated_at = NOW();
"""


async def get_pool(dsn: str):
    """
    Retourne (et crée si nécessaire) le pool asyncpg.
    Args :
        dsn : URL de connexion Postgres
    """
    global _pool
    if _pool is None:
        _pool = await asyncpg.create_pool(dsn, min_size=1, max_size=5)
        logger.info("Pool asyncpg initialisé")
    return _pool


async def ensure_schema(pool: asyncpg.Pool):
    async with pool.acquire() as conn:
        await conn.execute(CREATE_TABLE_SQL)
        logger.info("Schéma vérifié (bot_document)")


async def fetch_document(pool: asyncpg.Pool, name: str) -> Optional[Any]:
    async with pool.acquire() as conn:
        raw = await conn.fetchval("SELECT body FROM bot_document WHERE name=$1", name)
    # Sans codec enregistré, asyncpg renvoie le JSONB sous forme de texte
    if raw is None:
        return None
    return json.loads(raw) if isinstance(raw, str) else raw


async def save_document(pool: asyncpg.Pool, name: str, body: Any):
    async with pool.acquire() as conn:
        await conn.execute(UPSERT_DOCUMENT_SQL, name, json.dumps(body, ensure_ascii=False))


async def close_pool():
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None
        logger.info("Pool asyncpg fermé")


__all__ = ["get_pool", "ensure_schema", "fetch_document", "save_document", "close_pool"]
