"""Teams core package (événements, équipes, participants).

Les imports sont effectués de manière lazy pour éviter d'exécuter du code
pendant l'initialisation globale si non nécessaire.
"""
from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # aide mypy/IDE sans exécuter les imports au runtime initial
	from .models import Event, Participant, Team, TeamId, Teams  # noqa: F401
	from .preference import Preference  # noqa: F401
	from .registry import EventsRegistry  # noqa: F401

_LAZY = {
	"Event": "models",
	"Participant": "models",
	"Team": "models",
	"TeamId": "models",
	"Teams": "models",
	"EventsRegistry": "registry",
	"Preference": "preference",
}

__all__ = list(_LAZY)


def __getattr__(name: str):  # lazy resolution
	module = _LAZY.get(name)
	if module is None:
		raise AttributeError(name)
	return getattr(import_module(f"{__name__}.{module}"), name)
