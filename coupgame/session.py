"""Interface-free game session: menu, action dispatch, target and coup dialogs."""

from __future__ import annotations

import enum
import random
from typing import Optional

from coupgame.errors import CoupError
from coupgame.game import Game
from coupgame.player import COUP_COST, Player
from coupgame.roles import ROLE_NAMES, Baron, General, Governor, Spy, make_player

BASE_ACTIONS = ("Gather", "Tax", "Bribe", "Arrest", "Sanction", "Coup")
BLOCK_COUP_COST = 5
DEFAULT_LOG_LINES = 9
MIN_PLAYERS = 2


class WindowState(enum.Enum):
    """Which screen the session is on."""

    MENU = "menu"
    PLAYING = "playing"


class PendingAction(enum.Enum):
    """An action that waits for a target to be chosen."""

    NONE = "none"
    ARREST = "arrest"
    SANCTION = "sanction"
    COUP = "coup"
    BLOCK_TAX = "block_tax"
    BLOCK_ARREST = "block_arrest"
    BLOCK_COUP = "block_coup"


_TARGETED = {
    "Arrest": PendingAction.ARREST,
    "Sanction": PendingAction.SANCTION,
    "Coup": PendingAction.COUP,
    "Block Tax": PendingAction.BLOCK_TAX,
    "Block Arrest": PendingAction.BLOCK_ARREST,
    "BlockCoup": PendingAction.BLOCK_COUP,
}


class GameSession:
    """State behind the game window, driven by named actions and choices.

    Rule violations never escape from the interactive methods; their message
    is stored in ``popup`` the way the window shows it to the players.
    """

    def __init__(self, game: Optional[Game] = None, rng: Optional[random.Random] = None) -> None:
        self.game = game if game is not None else Game()
        self._rng = rng if rng is not None else random.Random()
        self.state = WindowState.MENU
        self.popup: Optional[str] = None
        self.show_spy_balances = False
        self.pending = PendingAction.NONE
        self.show_target_dialog = False
        self.block_coup_general: Optional[Player] = None
        self.pending_coup_attacker: Optional[Player] = None
        self.pending_coup_target: Optional[Player] = None
        self.show_winner_dialog = False
        self.winner_name: Optional[str] = None

    # ------------------------------------------------------------------ menu

    @property
    def block_coup_pending(self) -> bool:
        """True while a General is being asked whether to block a coup."""
        return self.block_coup_general is not None

    def _show(self, message: str) -> None:
        self.popup = message

    def add_player(self, name: str) -> Optional[Player]:
        """Add a player under a random free role; None if that is not possible."""
        if name in self.game.players():
            self._show("Name is taken")
            return None
        used = {p.role() for p in self.game.player_objects()}
        free = [role for role in ROLE_NAMES if role not in used]
        if not free:
            self._show("All six roles are already taken")
            return None
        role = self._rng.choice(free)
        try:
            player = make_player(role, self.game, name)
        except CoupError as exc:
            self._show(str(exc))
            return None
        self._show(f"Added {name} as {role}")
        return player

    def start_game(self) -> bool:
        """Switch to play if there are enough players."""
        if len(self.game.players()) < MIN_PLAYERS:
            self._show("Need at least 2 players")
            return False
        self.state = WindowState.PLAYING
        return True

    # ------------------------------------------------------------------ play

    def available_actions(self) -> list[str]:
        """Action buttons offered to the current player."""
        current = self.game.current_player()
        if current is None:
            return []
        actions = list(BASE_ACTIONS)
        role = current.role()
        if role == "Governor":
            actions.append("Block Tax")
        elif role == "Spy":
            actions.append("Block Arrest")
            actions.append("Hide Coins" if self.show_spy_balances else "Show Coins")
        elif role == "Baron":
            actions.append("Invest")
        return actions

    def perform(self, action: str) -> None:
        """Carry out a button press for the current player."""
        if self.block_coup_pending:
            return
        current = self.game.current_player()
        if current is None:
            return
        if action in _TARGETED:
            self.pending = _TARGETED[action]
            self.show_target_dialog = True
            return
        if action == "Show Coins":
            self.show_spy_balances = True
            return
        if action == "Hide Coins":
            self.show_spy_balances = False
            return
        try:
            if action == "Gather":
                current.gather()
            elif action == "Tax":
                current.tax()
            elif action == "Bribe":
                current.bribe()
            elif action == "Invest":
                if not isinstance(current, Baron):
                    raise CoupError("Only a Baron can invest")
                current.invest()
                self._show(f"{current.name} invested 3 coins for 6")
                return
            else:
                raise ValueError(f"Unknown action: {action}")
        except CoupError as exc:
            self._show(str(exc))
            return
        self._show(f"{current.name} performed {action}")

    def target_candidates(self) -> list[Player]:
        """Players the current player may pick as a target."""
        current = self.game.current_player()
        return [p for p in self.game.player_objects() if p is not current]

    def choose_target(self, target: Player) -> None:
        """Complete the pending targeted action against ``target``."""
        current = self.game.current_player()
        if current is None:
            return
        try:
            pending = self.pending
            if pending is PendingAction.ARREST:
                current.arrest(target)
                self._show(f"{current.name} arrested {target.name}")
            elif pending is PendingAction.SANCTION:
                current.sanction(target)
                self._show(f"{current.name} sanctioned {target.name}")
            elif pending is PendingAction.COUP:
                general = next(
                    (
                        p
                        for p in self.game.player_objects()
                        if p.role() == "General" and p.coins >= BLOCK_COUP_COST
                    ),
                    None,
                )
                if general is not None:
                    self.pending_coup_attacker = current
                    self.pending_coup_target = target
                    self.block_coup_general = general
                    return
                current.coup(target)
                self._show(f"{current.name} performed a coup on {target.name}")
            elif pending is PendingAction.BLOCK_TAX:
                if not isinstance(current, Governor):
                    raise CoupError("Only a Governor can block tax")
                current.block_tax(target)
                self._show(f"{current.name} blocked Tax for {target.name}")
            elif pending is PendingAction.BLOCK_ARREST:
                if not isinstance(current, Spy):
                    raise CoupError("Only a Spy can block arrest")
                current.block_arrest(target)
                self._show(f"{current.name} blocked Arrest for {target.name}")
            elif pending is PendingAction.BLOCK_COUP:
                if not isinstance(current, General):
                    raise CoupError("Only a General can block a coup")
                current.block_coup(target)
                self._show(f"{current.name} blocked Coup on {target.name}")
        except CoupError as exc:
            self._show(str(exc))
        self.pending = PendingAction.NONE
        self.show_target_dialog = False

    def resolve_block_coup(self, block: bool) -> None:
        """Answer the General's prompt: block the pending coup or let it happen."""
        general = self.block_coup_general
        attacker = self.pending_coup_attacker
        target = self.pending_coup_target
        if general is None or attacker is None or target is None:
            raise CoupError("No coup is waiting for a decision")
        try:
            if block:
                general.spend(BLOCK_COUP_COST)
                self.game.bank += BLOCK_COUP_COST
                attacker.spend(COUP_COST)
                self.game.bank += COUP_COST
                self._show(f"{general.name} blocked the coup")
            else:
                attacker.coup(target)
                self._show(f"{attacker.name} performed a coup on {target.name}")
        except CoupError as exc:
            self._show(str(exc))
        self.block_coup_general = None
        self.pending_coup_attacker = None
        self.pending_coup_target = None
        self.pending = PendingAction.NONE
        self.show_target_dialog = False

    def visible_coins(self, player: Player) -> Optional[int]:
        """Coins shown for ``player``: own coins, or all when a Spy reveals them."""
        current = self.game.current_player()
        if current is None:
            return None
        if player is current or (current.role() == "Spy" and self.show_spy_balances):
            return player.coins
        return None

    def check_winner(self) -> Optional[str]:
        """Open the winner dialog once a single player is left; return the winner."""
        if not self.show_winner_dialog and len(self.game.player_objects()) == 1:
            self.winner_name = self.game.winner()
            self.show_winner_dialog = True
        return self.winner_name if self.show_winner_dialog else None

    def play_again(self) -> None:
        """Clear all players and return to the menu."""
        for player in self.game.player_objects():
            self.game.eliminate(player)
        self.show_winner_dialog = False
        self.winner_name = None
        self.pending = PendingAction.NONE
        self.show_target_dialog = False
        self.show_spy_balances = False
        self.state = WindowState.MENU

    def log_tail(self, max_lines: int = DEFAULT_LOG_LINES) -> list[str]:
        """The most recent ``max_lines`` action-log lines, oldest first."""
        if max_lines <= 0:
            return []
        return self.game.action_log()[-max_lines:]