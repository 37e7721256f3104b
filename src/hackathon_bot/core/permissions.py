"""
Vérification des permissions Discord des commandes d'organisation.

Rappel :
- `discord.Permissions` expose un attribut `.value` (int) contenant les bits cumulés
- On teste un sous-ensemble via : (current & required) == required
- Un administrateur passe toujours

Ce module fournit le décorateur `require_perms` pour les commandes slash.
"""
from __future__ import annotations

from typing import Callable, TypeVar, Awaitable, Any
import functools
import discord

T = TypeVar("T", bound=Callable[..., Awaitable[Any]])

ADMINISTRATOR = discord.Permissions(administrator=True).value
MANAGE_CHANNELS = discord.Permissions(manage_channels=True).value
MANAGE_EVENTS = discord.Permissions(manage_events=True).value


def has_perms(member: Any, bits: int) -> bool:
    perms = getattr(member, "guild_permissions", None)
    if perms is None:
        return False
    value = perms.value
    if value & ADMINISTRATOR:
        return True
    return (value & bits) == bits


async def _deny(interaction: discord.Interaction, text: str, ephemeral: bool):
    if interaction.response.is_done():
        await interaction.followup.send(text, ephemeral=ephemeral)
    else:
        await interaction.response.send_message(text, ephemeral=ephemeral)


def require_perms(bits: int, *, ephemeral: bool = True, message: str | None = None):
    """
    Décorateur : l'utilisateur doit posséder toutes les permissions `bits` dans la guilde.

    En DM ou si les permissions manquent, répond (éphémère par défaut) sans exécuter la commande.
    """
    def decorator(func: T) -> T:
        # discord.py résout les annotations de `func` dans les globals de ce module :
        # n'y utiliser que des types accessibles via `discord` ou les builtins
        @functools.wraps(func)
        async def wrapper(interaction: discord.Interaction, *args, **kwargs):  # type: ignore[misc]
            if interaction.guild is None:
                await _deny(interaction, "Commande uniquement disponible dans un serveur.", ephemeral)
                return  # type: ignore[return-value]
            if not has_perms(interaction.user, bits):
                await _deny(interaction, message or "Permissions insuffisantes.", ephemeral)
                return  # type: ignore[return-value]
            return await func(interaction, *args, **kwargs)
        return wrapper  # type: ignore[return-value]
    return decorator

__all__ = ["require_perms", "has_perms", "ADMINISTRATOR", "MANAGE_CHANNELS", "MANAGE_EVENTS"]
