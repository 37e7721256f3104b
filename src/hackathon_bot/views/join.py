"""
Textes des commandes `/join` et `/leave`.
"""
from __future__ import annotations

def msg_no_team() -> str: return "Veuillez créer une équipe avant d'essayer de rejoindre une équipe."
def msg_select_event() -> str: return "Sélectionnez l'événement que vous voulez rejoindre."
def msg_select_team() -> str: return "Sélectionnez l'équipe que vous voulez rejoindre."
def msg_joined(team_name: str) -> str: return f"Vous avez été rajouté à l'équipe: {team_name}"
def msg_not_joined(error: object) -> str: return f"Vous n'avez pas été rajouté à l'équipe: {error}"

def msg_not_in_team() -> str: return "Vous ne faites partie d'aucune équipe."
def msg_select_event_leave() -> str: return "Sélectionnez l'événement que vous voulez quitter."
def msg_select_team_leave() -> str: return "Sélectionnez l'équipe que vous voulez quitter."
def msg_left(team_name: str) -> str: return f"Vous avez quitté l'équipe: {team_name}"

def msg_not_for_you() -> str: return "Ce menu ne vous est pas destiné."

__all__ = [name for name in globals().keys() if name.startswith('msg_')]
