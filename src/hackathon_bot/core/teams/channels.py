"""
Salons d'équipe : création, visibilité par membre, suppression.

`grant_visibility` / `revoke_visibility` sont appelées une fois par salon et par
opération ; les erreurs Discord remontent telles quelles.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Tuple

import discord

from .models import Team

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Overwrite:
    """Surcharge de permissions d'un salon pour un membre."""

    target_id: int
    allow: discord.Permissions = field(default_factory=discord.Permissions.none)
    deny: discord.Permissions = field(default_factory=discord.Permissions.none)

    @classmethod
    def view_channel(cls, member_id: int) -> "Overwrite":
        return cls(target_id=member_id, allow=discord.Permissions(view_channel=True))

    @property
    def target(self) -> discord.Object:
        return discord.Object(id=self.target_id, type=discord.Member)

    def to_discord(self) -> discord.PermissionOverwrite:
        return discord.PermissionOverwrite.from_pair(self.allow, self.deny)


async def resolve_channel(guild: discord.Guild, channel_id: int) -> discord.abc.GuildChannel:
    channel = guild.get_channel(channel_id)
    if channel is None:
        channel = await guild.fetch_channel(channel_id)
    return channel


async def apply_overwrite(guild: discord.Guild, channel_id: int, overwrite: Overwrite, *, reason: Optional[str] = None):
    channel = await resolve_channel(guild, channel_id)
    await channel.set_permissions(overwrite.target, overwrite=overwrite.to_discord(), reason=reason)


async def grant_visibility(guild: discord.Guild, channel_id: int, member_id: int):
    await apply_overwrite(guild, channel_id, Overwrite.view_channel(member_id), reason="Rejoint une équipe")


async def revoke_visibility(guild: discord.Guild, channel_id: int, member_id: int):
    channel = await resolve_channel(guild, channel_id)
    await channel.set_permissions(discord.Object(id=member_id, type=discord.Member), overwrite=None, reason="Quitte une équipe")


def channel_slug(name: str) -> str:
    slug = re.sub(r"[^\w-]+", "-", name.strip().lower()).strip("-")
    return slug[:90] or "equipe"


async def provision_team_channels(guild: discord.Guild, name: str, category: Optional[discord.CategoryChannel]) -> Tuple[discord.TextChannel, discord.VoiceChannel]:
    """Crée les salons texte et vocal privés d'une équipe."""
    overwrites = {
        guild.default_role: discord.PermissionOverwrite(view_channel=False),
        guild.me: discord.PermissionOverwrite(view_channel=True, manage_channels=True, manage_permissions=True),
    }
    prefix = channel_slug(name)
    reason = f"Équipe {name}"
    text = await guild.create_text_channel(f"{prefix}-text", category=category, overwrites=overwrites, reason=reason)
    try:
        voice = await guild.create_voice_channel(f"{prefix}-voice", category=category, overwrites=overwrites, reason=reason)
    except discord.HTTPException:
        # Pas de salon texte orphelin si le vocal échoue
        await text.delete(reason=reason)
        raise
    logger.info("Salons créés pour l'équipe %s: %s / %s", name, text.id, voice.id)
    return text, voice


async def delete_team_channels(guild: discord.Guild, team: Team):
    for channel_id in (team.text_channel, team.vocal_channel):
        channel = guild.get_channel(channel_id)
        if channel is None:
            continue
        try:
            await channel.delete(reason=f"Suppression de l'équipe {team.name}")
        except discord.HTTPException:
            logger.exception("Impossible de supprimer le salon %s de l'équipe %s", channel_id, team.name)


__all__ = [
    "Overwrite", "resolve_channel", "apply_overwrite", "grant_visibility", "revoke_visibility",
    "channel_slug", "provision_team_channels", "delete_team_channels",
]
