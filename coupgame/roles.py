"""The six playable roles and a factory that builds them by name."""

from __future__ import annotations

from coupgame.errors import CoupError
from coupgame.game import ActionType, Game
from coupgame.player import MANDATORY_COUP_LIMIT, Player

ROLE_NAMES = ("Governor", "Spy", "Baron", "General", "Judge", "Merchant")


class Governor(Player):
    """Collects three coins on tax and can cancel or block other players' tax."""

    def tax(self) -> None:
        self._game.validate_turn(self)
        if self._coins >= MANDATORY_COUP_LIMIT:
            raise CoupError("Must coup when holding 10 or more coins")
        self._game.register_action(self, ActionType.TAX)
        self.gain(3)
        self._game.bank -= 3
        self._game.register_action(self, ActionType.TAX, None, True)
        self._game.next_turn()

    def undo(self, action_owner: Player) -> None:
        """Take back the two coins of ``action_owner``'s recent tax."""
        if self._game.last_action(action_owner, ActionType.TAX) is None:
            raise CoupError("No tax action to undo")
        action_owner.spend(2)
        self._game.bank += 2

    def block_tax(self, target: Player) -> None:
        """Forbid ``target`` from taxing on their next turn."""
        self._game.validate_turn(self)
        if self._game.is_tax_blocked(target):
            raise CoupError(f"Already blocked tax for {target.name}")
        self._game.block_tax(target)
        self._game.register_action(self, ActionType.TAX_CANCEL, target, True)
        self._game.next_turn()


class Spy(Player):
    """Can see other players' coins and block their next arrest."""

    def inspect(self, target: Player) -> int:
        """Coins held by ``target``; free and does not use the turn."""
        return target.coins

    def block_arrest(self, target: Player) -> None:
        """Prevent ``target`` from arresting on their next turn."""
        self._game.block_arrest(target)


class Baron(Player):
    """Can invest three coins for six and is compensated when sanctioned."""

    def invest(self) -> None:
        """Pay three coins to the bank and take six from it."""
        self._game.validate_turn(self)
        if self._coins < 3:
            raise CoupError("Not enough coins to invest")
        self.spend(3)
        self._game.bank += 3
        self.gain(6)
        self._game.bank -= 6
        self._game.register_action(self, ActionType.INVEST, None, True)
        self._game.next_turn()

    def on_sanction(self, attacker: Player) -> None:
        self.gain(1)


class General(Player):
    """Can pay five coins to undo a coup."""

    def block_coup(self, target: Player) -> None:
        """Pay five coins to undo the latest coup against ``target``."""
        self._game.validate_turn(self)
        if self._coins < 5:
            raise CoupError("Not enough coins to block a coup")
        self.spend(5)
        self._game.bank += 5
        self._game.cancel_coup(target)
        self._game.register_action(self, ActionType.BLOCK_COUP, target, True)
        self._game.next_turn()

    def on_arrest_refund(self) -> None:
        """Get back the coin taken by an arrest."""
        self.gain(1)


class Judge(Player):
    """Can cancel bribes; sanctioning a Judge costs the attacker one more coin."""

    def undo(self, action_owner: Player) -> None:
        """Cancel ``action_owner``'s recent bribe."""
        if self._game.last_action(action_owner, ActionType.BRIBE) is None:
            raise CoupError("No bribe action to undo")
        self._game.prune_log()

    def on_sanction(self, attacker: Player) -> None:
        attacker.spend(1)
        self._game.bank += 1


class Merchant(Player):
    """Earns a bonus coin at turn start with three or more coins."""

    def start_of_turn(self) -> None:
        super().start_of_turn()
        if self._coins >= 3:
            self.gain(1)
            self._game.register_action(self, ActionType.GATHER, None, True)

    def on_arrested(self, thief: Player) -> None:
        """Pay up to two coins to the bank instead of losing one to the thief."""
        thief.spend(1)
        self.gain(1)
        pay = min(2, self._coins)
        self.spend(pay)
        self._game.bank += pay


_ROLE_CLASSES: dict[str, type[Player]] = {
    "Governor": Governor,
    "Spy": Spy,
    "Baron": Baron,
    "General": General,
    "Judge": Judge,
    "Merchant": Merchant,
}


def make_player(role: str, game: Game, name: str) -> Player:
    """Create a player of the named role and add it to ``game``."""
    try:
        cls = _ROLE_CLASSES[role]
    except KeyError:
        raise CoupError(f"Unknown role: {role}") from None
    return cls(game, name)