from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, NewType, Optional, Tuple

import discord

from hackathon_bot.core.errors import CapacityReached

TeamId = NewType("TeamId", int)

# Limite Discord du nombre d'options d'un Select
MAX_SELECT_OPTIONS = 25


@dataclass(frozen=True)
class Participant:
    """Membre d'une équipe. Égalité par identifiant uniquement."""

    id: int
    display: str = field(default="", compare=False)

    @classmethod
    def from_user(cls, user: discord.abc.User) -> "Participant":
        display = getattr(user, "display_name", None) or user.name
        return cls(id=user.id, display=display)

    def __str__(self) -> str:
        return self.display or f"<@{self.id}>"

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "display": self.display}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        return cls(id=int(data["id"]), display=data.get("display", ""))


@dataclass
class Team:
    name: str
    description: str
    members: List[Participant] = field(default_factory=list)
    text_channel: int = 0
    vocal_channel: int = 0

    def contains(self, user_id: int) -> bool:
        return any(p.id == user_id for p in self.members)

    def __str__(self) -> str:
        return f"**{self.name}**: {self.description}"

    def render(self) -> str:
        names = " ".join(str(p) for p in self.members)
        return f"{self}\nParticipants: {names}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "members": [p.to_dict() for p in self.members],
            "text_channel": self.text_channel,
            "vocal_channel": self.vocal_channel,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        return cls(
            name=data["name"],
            description=data.get("description", ""),
            members=[Participant.from_dict(p) for p in data.get("members", [])],
            text_channel=int(data["text_channel"]),
            vocal_channel=int(data["vocal_channel"]),
        )


@dataclass
class Teams:
    """Équipes d'un événement, indexées par TeamId.

    Les identifiants viennent d'un compteur par événement (`next_id`) et ne sont
    jamais réutilisés après une suppression.
    """

    entries: Dict[TeamId, Team] = field(default_factory=dict)
    capacity: Optional[int] = None
    next_id: int = 0

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Tuple[TeamId, Team]]:
        return iter(self.entries.items())

    def add_team(self, team: Team) -> TeamId:
        team_id = TeamId(self.next_id)
        self.next_id += 1
        self.entries[team_id] = team
        return team_id

    def get_team(self, team_id: TeamId) -> Optional[Team]:
        team = self.entries.get(team_id)
        return copy.deepcopy(team) if team is not None else None

    def delete(self, team_id: TeamId) -> Optional[Team]:
        return self.entries.pop(team_id, None)

    def add_participant(self, team_id: TeamId, participant: Participant) -> None:
        # Équipe inconnue: aucun effet, aucune erreur
        team = self.entries.get(team_id)
        if team is None:
            return
        if self.capacity is not None and len(team.members) >= self.capacity:
            raise CapacityReached()
        team.members.append(participant)

    def remove_participant(self, team_id: TeamId, user_id: int) -> None:
        team = self.entries.get(team_id)
        if team is None:
            return
        team.members = [p for p in team.members if p.id != user_id]

    def options(self, *, exclude_user: Optional[int] = None, only_user: Optional[int] = None) -> List[discord.SelectOption]:
        options: List[discord.SelectOption] = []
        for team_id, team in self.entries.items():
            if exclude_user is not None and team.contains(exclude_user):
                continue
            if only_user is not None and not team.contains(only_user):
                continue
            options.append(discord.SelectOption(label=team.name[:100], value=str(team_id)))
            if len(options) >= MAX_SELECT_OPTIONS:
                break
        return options

    def __str__(self) -> str:
        return "\n".join(team.render() for _, team in self.entries.items())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "teams": {str(tid): team.to_dict() for tid, team in self.entries.items()},
            "capacity": self.capacity,
            "next_id": self.next_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Teams":
        entries = {TeamId(int(k)): Team.from_dict(v) for k, v in data.get("teams", {}).items()}
        # Documents écrits sans compteur: on repart après le plus grand id connu
        next_id = data.get("next_id")
        if next_id is None:
            next_id = max(entries, default=-1) + 1
        return cls(entries=entries, capacity=data.get("capacity"), next_id=int(next_id))


@dataclass
class Event:
    """Événement hackathon rattaché à un événement programmé Discord."""

    id: int
    guild_id: int
    name: str
    description: str = ""
    teams: Teams = field(default_factory=Teams)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "guild_id": self.guild_id,
            "name": self.name,
            "description": self.description,
            "teams": self.teams.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        return cls(
            id=int(data["id"]),
            guild_id=int(data["guild_id"]),
            name=data.get("name", ""),
            description=data.get("description", ""),
            teams=Teams.from_dict(data.get("teams", {})),
        )


__all__ = ["TeamId", "Participant", "Team", "Teams", "Event", "MAX_SELECT_OPTIONS"]
