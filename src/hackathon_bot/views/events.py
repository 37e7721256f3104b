"""
Rendus texte des événements hackathon (description Discord, listes).
"""
from __future__ import annotations

from typing import Sequence

from hackathon_bot.core.teams.models import Event

# Limite Discord de la description d'un événement programmé
MAX_DESCRIPTION = 1000


def render_event_description(event: Event) -> str:
    parts = [event.description.strip()] if event.description.strip() else []
    if len(event.teams):
        parts.append(str(event.teams))
    text = "\n\n".join(parts)
    if len(text) > MAX_DESCRIPTION:
        text = text[: MAX_DESCRIPTION - 1] + "…"
    return text


def fmt_event_line(event: Event) -> str:
    cap = f", capacité {event.teams.capacity}" if event.teams.capacity else ""
    return f"**{event.name}** (`{event.id}`) : {len(event.teams)} équipe(s){cap}"


def render_event_list(events: Sequence[Event]) -> str:
    if not events:
        return msg_no_event()
    blocks = []
    for event in events:
        lines = [fmt_event_line(event)]
        for team_id, team in event.teams:
            lines.append(f"- `{team_id}` {team} ({len(team.members)} membre(s))")
        blocks.append("\n".join(lines))
    text = "\n\n".join(blocks)
    return text if len(text) <= 1900 else text[:1899] + "…"

def msg_no_event() -> str: return "Aucun événement enregistré."
def msg_event_registered(name: str) -> str: return f"Événement enregistré: {name}"
def msg_event_already(name: str) -> str: return f"Événement déjà enregistré: {name}"
def msg_event_unregistered(name: str) -> str: return f"Événement retiré: {name}"
def msg_event_unknown() -> str: return "Événement introuvable."
def msg_capacity_invalid() -> str: return "Capacité invalide (entier positif)."

__all__ = [name for name in globals().keys() if name.startswith(('msg_', 'fmt_', 'render_'))]
