"""
Accès aux objets partagés du bot depuis une interaction (registre, préférences).
"""
from __future__ import annotations

import discord

from hackathon_bot.core.teams.preference import Preference
from hackathon_bot.core.teams.registry import EventsRegistry


def get_registry(interaction: discord.Interaction) -> EventsRegistry:
    registry = getattr(interaction.client, "registry", None)
    if registry is None:
        raise RuntimeError("Registre des événements non initialisé")
    return registry


def get_preference(interaction: discord.Interaction) -> Preference:
    preference = getattr(interaction.client, "preference", None)
    if preference is None:
        raise RuntimeError("Préférences non initialisées")
    return preference


__all__ = ["get_registry", "get_preference"]
