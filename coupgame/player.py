"""Base player: the actions every role can take and the hooks roles override."""

from __future__ import annotations

from typing import TYPE_CHECKING

from coupgame.errors import CoupError
from coupgame.game import ActionType

if TYPE_CHECKING:
    from coupgame.game import Game

MANDATORY_COUP_LIMIT = 10
BRIBE_COST = 4
SANCTION_COST = 3
COUP_COST = 7


class Player:
    """A participant who registers with a game on creation."""

    def __init__(self, game: Game, name: str) -> None:
        self.name = name
        self._coins = 0
        self._game = game
        self._extra_action_allowed = False
        self._last_arrest_target: Player | None = None
        game.add_player(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, coins={self._coins})"

    @property
    def coins(self) -> int:
        """Coins the player currently holds."""
        return self._coins

    @property
    def game(self) -> Game:
        """The game this player belongs to."""
        return self._game

    def role(self) -> str:
        """Name of the player's role."""
        return type(self).__name__

    # ------------------------------------------------------------- utilities

    def spend(self, amount: int) -> None:
        """Pay ``amount`` coins; raise if negative or not affordable."""
        if amount < 0:
            raise CoupError("Negative spend amount")
        if self._coins < amount:
            raise CoupError("Not enough coins")
        self._coins -= amount

    def gain(self, amount: int) -> None:
        """Receive ``amount`` coins."""
        self._coins += amount

    def _check_not_forced_to_coup(self) -> None:
        if self._coins >= MANDATORY_COUP_LIMIT:
            raise CoupError("Must coup when holding 10 or more coins")

    def _finish_action(self) -> None:
        """Use up a bribed extra action, or hand the turn on."""
        if self._extra_action_allowed:
            self._extra_action_allowed = False
        else:
            self._game.next_turn()

    # --------------------------------------------------------------- actions

    def gather(self) -> None:
        """Take one coin; failures are logged before being raised."""
        try:
            self._game.validate_turn(self)
            self._check_not_forced_to_coup()
            if self._game.is_sanctioned(self):
                raise CoupError("Gather action is blocked by sanction")
            self.gain(1)
            self._game.register_action(self, ActionType.GATHER, None, True)
            self._finish_action()
        except CoupError:
            self._game.register_action(self, ActionType.GATHER, None, False)
            raise

    def tax(self) -> None:
        """Take two coins."""
        self._game.validate_turn(self)
        if self._game.is_tax_blocked(self):
            raise CoupError("Tax action is blocked by Governor")
        self._check_not_forced_to_coup()
        if self._game.is_sanctioned(self):
            raise CoupError("Tax action is blocked by sanction")
        self._game.register_action(self, ActionType.TAX)
        self.gain(2)
        self._finish_action()

    def bribe(self) -> None:
        """Pay four coins for an extra action this turn."""
        self._game.validate_turn(self)
        self._check_not_forced_to_coup()
        self.spend(BRIBE_COST)
        self._game.register_action(self, ActionType.BRIBE)
        self._extra_action_allowed = True

    def arrest(self, target: Player) -> None:
        """Take one coin from ``target``."""
        self._game.validate_turn(self)
        self._check_not_forced_to_coup()
        if target is self:
            raise CoupError("Cannot arrest self")
        if self._game.is_arrest_blocked(self):
            raise CoupError("Arrest action is blocked for this turn")
        if self._last_arrest_target is target:
            raise CoupError("Cannot arrest same target twice in a row")
        if target.coins <= 0:
            raise CoupError("Target has no coins to steal")
        self._game.register_action(self, ActionType.ARREST, target)
        target.spend(1)
        self.gain(1)
        target.on_arrested(self)
        self._last_arrest_target = target
        self._finish_action()

    def sanction(self, target: Player) -> None:
        """Pay three coins to stop ``target`` from gathering and taxing."""
        self._game.validate_turn(self)
        self._check_not_forced_to_coup()
        self.spend(SANCTION_COST)
        self._game.register_action(self, ActionType.SANCTION, target)
        self._game.block_sanction(target)
        target.on_sanction(self)
        self._finish_action()

    def coup(self, target: Player) -> None:
        """Pay seven coins to eliminate ``target``."""
        self._game.validate_turn(self)
        self.spend(COUP_COST)
        self._game.register_action(self, ActionType.COUP, target)
        self._game.eliminate(target)
        self._finish_action()

    def undo(self, action_owner: Player) -> None:
        """Undo another player's action; only some roles can."""
        raise CoupError("This role cannot undo actions")

    # ----------------------------------------------------------------- hooks

    def on_sanction(self, attacker: Player) -> None:
        """Called after this player has been sanctioned."""

    def on_arrested(self, thief: Player) -> None:
        """Called after this player has been arrested."""

    def start_of_turn(self) -> None:
        """Called when this player's turn begins."""