"""
Classe principale du bot hackathon.

Responsabilités :
- Crée le client Discord et l'arbre de commandes slash.
- Ouvre le stockage : pool PostgreSQL (si DATABASE_URL) ou fichiers JSON.
- Charge le registre des événements et les préférences (état partagé du processus).
- Enregistre les commandes et événements globaux.
- Sauvegarde une dernière fois l'état à la fermeture.

Note : L'initialisation asynchrone est centralisée dans `setup_hook`, appelé avant `on_ready`.
"""
from __future__ import annotations

import logging
import discord
from discord import app_commands

from hackathon_bot.core import config, db
from hackathon_bot.core.errors import HackathonError, SelectionFailed
from hackathon_bot.core.store import JsonFileStore, PostgresDocumentStore
from hackathon_bot.core.teams.preference import Preference
from hackathon_bot.core.teams.registry import EventsRegistry

logger = logging.getLogger(__name__)

ERROR_MESSAGE = "Une erreur est survenue."


class Bot(discord.Client):
    """
    Client Discord étendu, encapsulant l'état applicatif.

    Attributs principaux :
        tree : Arbre des commandes slash (CommandTree)
        db_pool : Pool asyncpg (None si stockage fichier)
        registry : Registre des événements hackathon
        preference : Préférences globales (salon et catégorie hackathon)
    """

    def __init__(self):
        super().__init__(intents=config.INTENTS)
        self.tree = app_commands.CommandTree(self)
        self.tree.error(self.on_tree_error)
        self.db_pool = None
        self.registry: EventsRegistry | None = None
        self.preference: Preference | None = None

    async def _open_stores(self):
        if config.DATABASE_URL:
            self.db_pool = await db.get_pool(config.DATABASE_URL)
            await db.ensure_schema(self.db_pool)
            logger.info("Stockage PostgreSQL")
            return PostgresDocumentStore(self.db_pool, "events"), PostgresDocumentStore(self.db_pool, "preference")
        logger.info("Stockage fichiers: %s, %s", config.EVENTS_PATH, config.PREFERENCE_PATH)
        return JsonFileStore(config.EVENTS_PATH), JsonFileStore(config.PREFERENCE_PATH)

    async def setup_hook(self):
        """
        Initialise les sous-systèmes avant la mise en ligne.

        Séquence :
        1. Stockage et chargement de l'état partagé (obligatoire)
        2. Enregistrement des commandes et événements globaux
        3. Synchronisation des commandes slash
        """
        events_store, preference_store = await self._open_stores()
        self.registry = EventsRegistry(events_store)
        await self.registry.load()
        self.preference = Preference(preference_store)
        await self.preference.load()
        # Chargement commandes dynamiques
        try:
            from hackathon_bot.commands import load_all_commands
            await load_all_commands(self)
        except Exception:  # noqa: BLE001
            logger.exception("Erreur chargement commandes dynamiques")
        # Events généraux
        try:
            from hackathon_bot.events.scheduled import setup as setup_scheduled
            setup_scheduled(self)
        except Exception:  # noqa: BLE001
            logger.exception("Erreur setup events")
        # Sync final
        try:
            await self.tree.sync()
            logger.info("Slash commands synchronisées")
        except Exception:  # noqa: BLE001
            logger.exception("Erreur sync slash commands")

    async def on_ready(self):
        logger.info("Connecté: %s (%s)", self.user, getattr(self.user, 'id', '?'))

    async def on_tree_error(self, interaction: discord.Interaction, error: app_commands.AppCommandError):
        """Point de sortie des erreurs de commandes : journalise puis prévient l'utilisateur si possible."""
        original = getattr(error, "original", error)
        command = interaction.command.qualified_name if interaction.command else "?"
        if isinstance(original, SelectionFailed):
            # Le dernier menu reste affiché, pas de message supplémentaire
            logger.info("Commande /%s: %s pour %s", command, original, interaction.user.id)
            return
        if isinstance(original, HackathonError):
            logger.warning("Commande /%s interrompue pour %s: %s", command, interaction.user.id, original)
        else:
            logger.error("Erreur commande /%s", command, exc_info=original)
        try:
            if interaction.response.is_done():
                await interaction.followup.send(ERROR_MESSAGE, ephemeral=True)
            else:
                await interaction.response.send_message(ERROR_MESSAGE, ephemeral=True)
        except discord.HTTPException:
            logger.debug("Interaction %s expirée, pas de message d'erreur", interaction.id)

    async def close(self):  # type: ignore[override]
        """
        Fermeture propre du bot.
        Sauvegarde le registre et les préférences, puis ferme le pool asyncpg si présent.
        """
        for name, state in (("registry", self.registry), ("preference", self.preference)):
            if state is None:
                continue
            try:
                await state.flush()
            except Exception:  # noqa: BLE001
                logger.exception("Erreur sauvegarde %s", name)
        try:
            if self.db_pool is not None:
                await db.close_pool()
                self.db_pool = None
        except Exception:  # noqa: BLE001
            logger.exception("Erreur fermeture pool")
        await super().close()
