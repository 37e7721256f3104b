"""
Configuration centrale du bot hackathon.

Ce module charge les variables d'environnement (.env) et prépare :
- Les intents Discord (members, guild_scheduled_events, presences)
- Le token du bot (BOT_TOKEN, obligatoire)
- Le stockage : DATABASE_URL (PostgreSQL, optionnel) ou fichiers JSON (EVENTS_PATH, PREFERENCE_PATH)
- Le comportement du workflow `/join` (SELECTION_TIMEOUT, JOIN_HIDE_JOINED_TEAMS)

Un warning est émis si BOT_TOKEN est absent pour détecter le problème avant le lancement du bot.
"""
from __future__ import annotations

import os
import logging
from dotenv import load_dotenv
import discord

load_dotenv()

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: str = "false") -> bool:
    return (os.getenv(name, default) or default).strip().lower() in _TRUE_VALUES


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("%s invalide (%r), valeur par défaut %s", name, raw, default)
        return default


INTENTS = discord.Intents.default()
INTENTS.members = True
INTENTS.guild_scheduled_events = True

# L'intent "presences" est privilégié ; activable via la variable d'environnement ENABLE_PRESENCES
INTENTS.presences = _env_flag("ENABLE_PRESENCES")

BOT_TOKEN = os.getenv("BOT_TOKEN")
DATABASE_URL = os.getenv("DATABASE_URL")

EVENTS_PATH = os.getenv("EVENTS_PATH", "events.json")
PREFERENCE_PATH = os.getenv("PREFERENCE_PATH", "preference.json")

# Délai (secondes) laissé à l'utilisateur pour répondre à chaque menu
SELECTION_TIMEOUT = _env_float("SELECTION_TIMEOUT", 180.0)
# Masque dans `/join` les équipes dont l'utilisateur fait déjà partie
JOIN_HIDE_JOINED_TEAMS = _env_flag("JOIN_HIDE_JOINED_TEAMS")


# Avertit si le token du bot est absent
if not BOT_TOKEN:
    logger.warning("BOT_TOKEN manquant dans l'environnement")
