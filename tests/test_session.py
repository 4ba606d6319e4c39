import random

import pytest

from coupgame.errors import CoupError
from coupgame.game import Game
from coupgame.roles import ROLE_NAMES, Baron, General, Governor, Spy
from coupgame.session import GameSession, PendingAction, WindowState


def _session(*specs):
    game = Game()
    players = [cls(game, name) for cls, name in specs]
    session = GameSession(game, random.Random(0))
    return session, players


def test_add_player_assigns_distinct_roles():
    session = GameSession(Game(), random.Random(1))
    names = ["A", "B", "C", "D", "E", "F"]
    for name in names:
        assert session.add_player(name) is not None
    roles = sorted(p.role() for p in session.game.player_objects())
    assert roles == sorted(ROLE_NAMES)
    assert session.game.players() == names


def test_add_player_seventh_is_refused():
    session = GameSession(Game(), random.Random(2))
    for name in "ABCDEF":
        session.add_player(name)
    assert session.add_player("G") is None
    assert session.popup == "All six roles are already taken"
    assert len(session.game.players()) == 6


def test_add_player_duplicate_name():
    session = GameSession(Game(), random.Random(3))
    player = session.add_player("A")
    assert session.popup == f"Added A as {player.role()}"
    assert session.add_player("A") is None
    assert session.popup == "Name is taken"


def test_start_game_needs_two_players():
    session = GameSession(Game(), random.Random(4))
    session.add_player("A")
    assert session.start_game() is False
    assert session.popup == "Need at least 2 players"
    assert session.state is WindowState.MENU
    session.add_player("B")
    assert session.start_game() is True
    assert session.state is WindowState.PLAYING


def test_perform_gather_advances_turn():
    session, (a, b) = _session((Governor, "A"), (Spy, "B"))
    session.perform("Gather")
    assert a.coins == 1
    assert session.popup == "A performed Gather"
    assert session.game.current_player() is b


def test_perform_error_becomes_popup():
    session, (a, b) = _session((Governor, "A"), (Spy, "B"))
    session.perform("Bribe")
    assert session.popup == "Not enough coins"
    assert session.game.current_player() is a


def test_available_actions_by_role():
    session, (a, b, c) = _session((Governor, "A"), (Spy, "B"), (Baron, "C"))
    assert session.available_actions()[-1] == "Block Tax"
    session.perform("Gather")
    assert session.available_actions()[-2:] == ["Block Arrest", "Show Coins"]
    session.perform("Show Coins")
    assert session.available_actions()[-1] == "Hide Coins"
    session.perform("Hide Coins")
    session.perform("Gather")
    assert session.available_actions()[-1] == "Invest"


def test_visible_coins_for_spy():
    session, (s, g) = _session((Spy, "S"), (Governor, "G"))
    g.gain(3)
    assert session.visible_coins(s) == 0
    assert session.visible_coins(g) is None
    session.perform("Show Coins")
    assert session.visible_coins(g) == 3


def test_targeted_action_opens_dialog_and_completes():
    session, (a, b) = _session((Governor, "A"), (Spy, "B"))
    session.perform("Block Tax")
    assert session.pending is PendingAction.BLOCK_TAX
    assert session.show_target_dialog
    assert session.target_candidates() == [b]
    session.choose_target(b)
    assert session.popup == "A blocked Tax for B"
    assert session.game.is_tax_blocked(b)
    assert session.pending is PendingAction.NONE
    assert not session.show_target_dialog


def test_invest_requires_baron():
    session, (a, b) = _session((Governor, "A"), (Baron, "B"))
    a.gain(0)
    session.perform("Invest")
    assert a.coins == 0
    assert session.game.current_player() is a


def test_coup_without_general_is_immediate():
    session, (a, b) = _session((Governor, "A"), (Spy, "B"))
    a.gain(7)
    session.perform("Coup")
    session.choose_target(b)
    assert session.popup == "A performed a coup on B"
    assert session.game.players() == ["A"]
    assert session.check_winner() == "A"
    assert session.show_winner_dialog


def test_coup_blocked_by_general():
    session, (a, gen, s) = _session((Governor, "A"), (General, "G"), (Spy, "S"))
    a.gain(7)
    gen.gain(5)
    session.perform("Coup")
    session.choose_target(s)
    assert session.block_coup_general is gen
    session.perform("Gather")
    assert a.coins == 7
    session.resolve_block_coup(True)
    assert session.popup == "G blocked the coup"
    assert gen.coins == 0
    assert a.coins == 0
    assert session.game.bank == 12
    assert session.game.players() == ["A", "G", "S"]
    assert not session.block_coup_pending


def test_coup_continues_when_general_declines():
    session, (a, gen, s) = _session((Governor, "A"), (General, "G"), (Spy, "S"))
    a.gain(7)
    gen.gain(5)
    session.perform("Coup")
    session.choose_target(s)
    session.resolve_block_coup(False)
    assert session.popup == "A performed a coup on S"
    assert session.game.players() == ["A", "G"]


def test_resolve_without_pending_coup_raises():
    session, _ = _session((Governor, "A"), (Spy, "B"))
    with pytest.raises(CoupError):
        session.resolve_block_coup(True)


def test_play_again_resets():
    session, (a, b) = _session((Governor, "A"), (Spy, "B"))
    a.gain(7)
    session.start_game()
    session.perform("Coup")
    session.choose_target(b)
    session.check_winner()
    session.play_again()
    assert session.game.players() == []
    assert session.state is WindowState.MENU
    assert session.check_winner() is None


def test_log_tail_limits_lines():
    session, (a, b) = _session((Governor, "A"), (Spy, "B"))
    for _ in range(6):
        session.perform("Gather")
    full = session.game.action_log()
    assert session.log_tail(4) == full[-4:]
    assert session.log_tail() == full[-9:]
    assert session.log_tail(0) == []
    assert session.log_tail()[-1] == "B,Gather,Succeeded"