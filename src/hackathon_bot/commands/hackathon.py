"""
Commandes slash `/hackathon` : salon d'annonces et catégorie des salons d'équipe.

Commandes disponibles :
- /hackathon channel <salon> : salon où sont annoncées les nouvelles équipes
- /hackathon category <categorie> : catégorie accueillant les salons d'équipe
- /hackathon show : affiche la configuration
"""
from __future__ import annotations

import logging
import discord
from discord import app_commands

from hackathon_bot.commands._context import get_preference
from hackathon_bot.core.permissions import require_perms, ADMINISTRATOR
from hackathon_bot.views import teams as teams_view

logger = logging.getLogger(__name__)

hackathon = app_commands.Group(name="hackathon", description="Configuration du hackathon", guild_only=True)


@hackathon.command(name="channel", description="Définir le salon hackathon")
@app_commands.describe(salon="Salon des annonces hackathon")
@require_perms(ADMINISTRATOR, message="Admin requis")
async def channel_cmd(inter: discord.Interaction, salon: discord.TextChannel):
    await get_preference(inter).edit_hackathon_channel(salon.id)
    logger.info("Salon hackathon -> %s (guild %s)", salon.id, inter.guild.id)
    await inter.response.send_message(teams_view.msg_channel_set(salon.mention), ephemeral=True)


@hackathon.command(name="category", description="Définir la catégorie des salons d'équipe")
@app_commands.describe(categorie="Catégorie où créer les salons d'équipe")
@require_perms(ADMINISTRATOR, message="Admin requis")
async def category_cmd(inter: discord.Interaction, categorie: discord.CategoryChannel):
    await get_preference(inter).edit_hackathon_category(categorie.id)
    logger.info("Catégorie hackathon -> %s (guild %s)", categorie.id, inter.guild.id)
    await inter.response.send_message(teams_view.msg_category_set(categorie.name), ephemeral=True)


@hackathon.command(name="show", description="Afficher la configuration hackathon")
@require_perms(ADMINISTRATOR)
async def show_cmd(inter: discord.Interaction):
    preference = get_preference(inter)
    text = teams_view.fmt_preference(await preference.get_hackathon_channel(), await preference.get_hackathon_category())
    await inter.response.send_message(text, ephemeral=True)


def register(bot: discord.Client):
    try:
        bot.tree.add_command(hackathon)
    except Exception:
        logger.exception("Echec enregistrement commandes hackathon")

__all__ = ["register"]
