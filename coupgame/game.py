"""Game state: players, turn order, blocks and the action log."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional

from coupgame.errors import CoupError

MAX_PLAYERS = 6


class ActionType(enum.Enum):
    """Every distinct action that can be performed during the game."""

    GATHER = "Gather"
    TAX = "Tax"
    BRIBE = "Bribe"
    ARREST = "Arrest"
    SANCTION = "Sanction"
    TAX_CANCEL = "BlockedTax"
    COUP = "Coup"
    INVEST = "Invest"
    BLOCK_COUP = "BlockCoup"

    def label(self) -> str:
        """Name of the action as shown in the action log."""
        return self.value


@dataclass
class ActionRecord:
    """One logged action, kept so that it can be blocked later."""

    actor: Any
    type: ActionType = ActionType.GATHER
    target: Any = None
    turn_idx: int = 0


class Game:
    """Turn order, blocks, bank and action history of one game.

    Players are compared by identity; any object with a ``name`` attribute
    and a ``start_of_turn()`` method can take part.
    """

    def __init__(self) -> None:
        self._players: list[Any] = []
        self._turn_idx = 0
        self.bank = 0
        self._log: list[ActionRecord] = []
        self._log_lines: list[str] = []
        self._arrest_blocked: list[Any] = []
        self._sanction_blocked: list[Any] = []
        self._tax_blocked: list[Any] = []

    # ---------------------------------------------------------------- players

    def _contains(self, player: Any) -> bool:
        return any(p is player for p in self._players)

    def add_player(self, player: Any) -> None:
        """Add a player to the end of the turn order."""
        if player is None:
            raise CoupError("Null player pointer")
        if len(self._players) >= MAX_PLAYERS:
            raise CoupError("Game already has 6 players")
        if self._contains(player):
            raise CoupError("Player already in game")
        self._players.append(player)

    def eliminate(self, player: Any) -> None:
        """Remove a player, keeping the turn on the right player."""
        if player is None:
            return
        removed = next((i for i, p in enumerate(self._players) if p is player), None)
        if removed is None:
            return
        del self._players[removed]
        if not self._players:
            self._turn_idx = 0
            return
        if removed < self._turn_idx:
            self._turn_idx -= 1
        if self._turn_idx >= len(self._players):
            self._turn_idx %= len(self._players)

    def player_objects(self) -> tuple:
        """The active players in turn order."""
        return tuple(self._players)

    # ------------------------------------------------------------------ turns

    def turn(self) -> str:
        """Name of the player whose turn it is."""
        if not self._players:
            raise CoupError("No active players")
        return self._players[self._turn_idx].name

    def players(self) -> list[str]:
        """Names of the active players in turn order."""
        return [p.name for p in self._players]

    def next_turn(self) -> None:
        """Finish the current turn and start the next player's."""
        if not self._players:
            return
        finished = self._players[self._turn_idx]
        _discard(self._arrest_blocked, finished)
        _discard(self._tax_blocked, finished)
        self.prune_log()
        self._turn_idx = (self._turn_idx + 1) % len(self._players)
        self._players[self._turn_idx].start_of_turn()

    def validate_turn(self, player: Any) -> None:
        """Raise unless it is ``player``'s turn."""
        if not self._players:
            raise CoupError("No players in game")
        if self._players[self._turn_idx] is not player:
            raise CoupError("Not this player's turn")

    def current_player(self) -> Optional[Any]:
        """The player whose turn it is, or None if nobody is left."""
        return self._players[self._turn_idx] if self._players else None

    def winner(self) -> str:
        """Name of the last remaining player."""
        if len(self._players) != 1:
            raise CoupError("Game is still ongoing")
        return self._players[0].name

    # ------------------------------------------------------------- action log

    def register_action(
        self,
        actor: Any,
        action_type: ActionType,
        target: Any = None,
        success: bool = True,
    ) -> None:
        """Record an action for blocking logic and for the readable log."""
        self._log.append(ActionRecord(actor, action_type, target, self._turn_idx))
        text = f"{actor.name},{action_type.label()}"
        if target is not None:
            text += f" for {target.name}"
        text += ",Succeeded" if success else ",Failed"
        self._log_lines.append(text)

    def action_log(self) -> list[str]:
        """Readable log lines: ``name,Action[ for target],Succeeded|Failed``."""
        return list(self._log_lines)

    def last_action(self, actor: Any, action_type: ActionType) -> Optional[ActionRecord]:
        """Most recent still-logged action of this type by ``actor``."""
        for record in reversed(self._log):
            if record.actor is actor and record.type is action_type:
                return record
        return None

    def prune_log(self) -> None:
        """Drop records older than one full round."""
        count = len(self._players)

        def expired(record: ActionRecord) -> bool:
            if self._turn_idx >= record.turn_idx:
                diff = self._turn_idx - record.turn_idx
            else:
                diff = count + self._turn_idx - record.turn_idx
            return diff < 0 or diff > count

        self._log = [r for r in self._log if not expired(r)]

    # ----------------------------------------------------------------- blocks

    def block_tax(self, target: Any) -> None:
        """Forbid ``target`` from taxing until the end of their next turn."""
        if target is not None:
            _add(self._tax_blocked, target)

    def is_tax_blocked(self, player: Any) -> bool:
        return _has(self._tax_blocked, player)

    def block_arrest(self, target: Any) -> None:
        """Forbid ``target`` from arresting until the end of their next turn."""
        if target is not None:
            _add(self._arrest_blocked, target)

    def is_arrest_blocked(self, player: Any) -> bool:
        return _has(self._arrest_blocked, player)

    def block_sanction(self, target: Any) -> None:
        """Mark ``target`` as sanctioned."""
        if target is not None:
            _add(self._sanction_blocked, target)

    def is_sanctioned(self, player: Any) -> bool:
        return _has(self._sanction_blocked, player)

    def cancel_coup(self, target: Any) -> None:
        """Undo the latest coup against ``target`` and bring them back."""
        if target is None:
            raise CoupError("Null target for cancel_coup")
        index = next(
            (
                i
                for i in range(len(self._log) - 1, -1, -1)
                if self._log[i].type is ActionType.COUP and self._log[i].target is target
            ),
            None,
        )
        if index is None:
            raise CoupError("No coup to cancel for this target")
        del self._log[index]
        if not self._contains(target):
            self._players.insert(self._turn_idx, target)


def _has(items: list, player: Any) -> bool:
    return any(p is player for p in items)


def _add(items: list, player: Any) -> None:
    if not _has(items, player):
        items.append(player)


def _discard(items: list, player: Any) -> None:
    items[:] = [p for p in items if p is not player]