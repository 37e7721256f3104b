"""
Textes des commandes `/team` et `/hackathon`.
"""
from __future__ import annotations

def msg_no_category() -> str: return "Aucune catégorie hackathon configurée. Utilisez /hackathon category."
def msg_team_created(name: str, event_name: str) -> str: return f"Équipe créée: {name} ({event_name})"
def msg_team_deleted(name: str) -> str: return f"Équipe supprimée: {name}"
def msg_team_unknown() -> str: return "Équipe introuvable."
def msg_team_name_invalid(limit: int) -> str: return f"Nom d'équipe invalide (1 à {limit} caractères)."
def msg_team_announce(name: str, description: str, event_name: str) -> str:
    return f"Nouvelle équipe pour **{event_name}** : **{name}** : {description}\nRejoignez-la avec /join."

def msg_channel_set(mention: str) -> str: return f"Salon hackathon défini sur {mention}."
def msg_category_set(name: str) -> str: return f"Catégorie hackathon définie sur {name}."

def fmt_preference(channel_id: int | None, category_id: int | None) -> str:
    channel = f"<#{channel_id}>" if channel_id else "(aucun)"
    category = f"`{category_id}`" if category_id else "(aucune)"
    return f"Salon hackathon: {channel}\nCatégorie hackathon: {category}"

__all__ = [name for name in globals().keys() if name.startswith(('msg_', 'fmt_'))]
