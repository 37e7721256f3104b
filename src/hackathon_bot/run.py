"""
Entrée principale du bot hackathon.

Lancement : `hackathon-bot` (script installé) ou `python -m hackathon_bot.run`.
"""
from __future__ import annotations

import sys

from hackathon_bot.core.logging_config import setup_logging


def main():
    setup_logging()  # Initialise le logging global avant tout import discord/config

    from hackathon_bot.core import config, bot as bot_module

    # Vérifie la présence du token Discord
    if not config.BOT_TOKEN:
        raise SystemExit("BOT_TOKEN manquant")

    bot = bot_module.Bot()
    try:
        # log_handler=None : le logging est déjà configuré par setup_logging
        bot.run(config.BOT_TOKEN, log_handler=None)
    except KeyboardInterrupt:
        print("Arrêt manuel")
        sys.exit(0)


# Démarre le bot si le script est exécuté directement
if __name__ == "__main__":
    main()
