"""
Exceptions métier du bot hackathon.

Seule `CapacityReached` est convertie en message utilisateur par le workflow `/join`.
Les autres remontent jusqu'au gestionnaire d'erreurs de l'arbre de commandes (log).
Les erreurs Discord (`discord.HTTPException`) ne sont jamais enveloppées.
"""
from __future__ import annotations


class HackathonError(Exception):
    """Base des erreurs métier."""

    default_message = "Erreur hackathon."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class NoTeamsAvailable(HackathonError):
    default_message = "Veuillez créer une équipe avant d'essayer de rejoindre une équipe."


class SelectionFailed(HackathonError):
    """Réponse de menu absente, invalide ou hors délai."""

    def __init__(self, stage: str):
        super().__init__(stage)
        self.stage = stage


class LookupFailed(HackathonError):
    default_message = "Event joining failed."


class CapacityReached(HackathonError):
    default_message = "L'équipe a atteint sa capacité maximale"


__all__ = ["HackathonError", "NoTeamsAvailable", "SelectionFailed", "LookupFailed", "CapacityReached"]
