import pytest

from coupgame.errors import CoupError
from coupgame.game import ActionRecord, ActionType, Game


class FakePlayer:
    def __init__(self, name):
        self.name = name
        self.turn_starts = 0

    def start_of_turn(self):
        self.turn_starts += 1


def make_game(*names):
    game = Game()
    players = [FakePlayer(n) for n in names]
    for p in players:
        game.add_player(p)
    return game, players


def test_add_player_rejects_none():
    game = Game()
    with pytest.raises(CoupError):
        game.add_player(None)


def test_add_player_rejects_duplicate():
    game, (a,) = make_game("A")
    with pytest.raises(CoupError):
        game.add_player(a)
    assert game.players() == ["A"]


def test_add_player_rejects_seventh():
    game, _ = make_game("A", "B", "C", "D", "E", "F")
    with pytest.raises(CoupError):
        game.add_player(FakePlayer("G"))
    assert len(game.player_objects()) == 6


def test_players_and_turn():
    game, (a, b) = make_game("A", "B")
    assert game.players() == ["A", "B"]
    assert game.turn() == "A"
    assert game.current_player() is a


def test_empty_game():
    game = Game()
    assert game.current_player() is None
    with pytest.raises(CoupError):
        game.turn()
    with pytest.raises(CoupError):
        game.validate_turn(FakePlayer("X"))


def test_next_turn_cycles_and_starts_turn():
    game, (a, b) = make_game("A", "B")
    game.next_turn()
    assert game.current_player() is b
    assert b.turn_starts == 1
    game.next_turn()
    assert game.current_player() is a
    assert a.turn_starts == 1


def test_validate_turn():
    game, (a, b) = make_game("A", "B")
    game.validate_turn(a)
    with pytest.raises(CoupError):
        game.validate_turn(b)


def test_winner():
    game, (a, b) = make_game("A", "B")
    with pytest.raises(CoupError):
        game.winner()
    game.eliminate(b)
    assert game.winner() == "A"
    assert game.players() == ["A"]


def test_eliminate_before_current_keeps_current():
    game, (a, b, c) = make_game("A", "B", "C")
    game.next_turn()
    game.next_turn()
    assert game.current_player() is c
    game.eliminate(a)
    assert game.current_player() is c


def test_eliminate_current_last_wraps():
    game, (a, b, c) = make_game("A", "B", "C")
    game.next_turn()
    game.next_turn()
    game.eliminate(c)
    assert game.current_player() is a


def test_eliminate_unknown_or_none_is_ignored():
    game, (a, b) = make_game("A", "B")
    game.eliminate(None)
    game.eliminate(FakePlayer("Z"))
    assert game.players() == ["A", "B"]


def test_register_action_formats_log():
    game, (a, b) = make_game("A", "B")
    game.register_action(a, ActionType.GATHER)
    game.register_action(a, ActionType.ARREST, b, False)
    game.register_action(a, ActionType.TAX_CANCEL, b, True)
    assert game.action_log() == [
        "A,Gather,Succeeded",
        "A,Arrest for B,Failed",
        "A,BlockedTax for B,Succeeded",
    ]


def test_action_type_labels():
    assert ActionType.TAX_CANCEL.label() == "BlockedTax"
    assert ActionType.BLOCK_COUP.label() == "BlockCoup"
    assert ActionType.INVEST.label() == "Invest"


def test_last_action_returns_most_recent():
    game, (a, b) = make_game("A", "B")
    game.register_action(a, ActionType.TAX)
    game.next_turn()
    game.register_action(a, ActionType.TAX)
    record = game.last_action(a, ActionType.TAX)
    assert isinstance(record, ActionRecord)
    assert record.turn_idx == 1
    assert game.last_action(b, ActionType.TAX) is None
    assert game.last_action(a, ActionType.BRIBE) is None


def test_prune_log_drops_stale_records():
    game, (a, b, c) = make_game("A", "B", "C")
    game.next_turn()
    game.next_turn()
    game.register_action(c, ActionType.BRIBE)
    game.eliminate(a)
    game.eliminate(b)
    assert game.last_action(c, ActionType.BRIBE) is not None
    game.prune_log()
    assert game.last_action(c, ActionType.BRIBE) is None


def test_tax_and_arrest_blocks_expire_after_own_turn():
    game, (a, b) = make_game("A", "B")
    game.block_tax(b)
    game.block_arrest(b)
    assert game.is_tax_blocked(b)
    assert game.is_arrest_blocked(b)
    game.next_turn()  # A's turn ends, B's begins
    assert game.is_tax_blocked(b)
    game.next_turn()  # B's turn ends
    assert not game.is_tax_blocked(b)
    assert not game.is_arrest_blocked(b)


def test_sanction_persists():
    game, (a, b) = make_game("A", "B")
    game.block_sanction(b)
    game.next_turn()
    game.next_turn()
    assert game.is_sanctioned(b)
    assert not game.is_sanctioned(a)


def test_blocks_ignore_none():
    game, (a, b) = make_game("A", "B")
    game.block_tax(None)
    game.block_arrest(None)
    game.block_sanction(None)
    assert not game.is_tax_blocked(None)
    assert not game.is_sanctioned(None)


def test_cancel_coup_restores_player():
    game, (a, b, c) = make_game("A", "B", "C")
    game.register_action(a, ActionType.COUP, c)
    game.eliminate(c)
    assert game.players() == ["A", "B"]
    game.cancel_coup(c)
    assert game.players() == ["C", "A", "B"]
    with pytest.raises(CoupError):
        game.cancel_coup(c)


def test_cancel_coup_errors():
    game, (a, b) = make_game("A", "B")
    with pytest.raises(CoupError):
        game.cancel_coup(None)
    with pytest.raises(CoupError):
        game.cancel_coup(b)


def test_bank_is_adjustable():
    game = Game()
    assert game.bank == 0
    game.bank += 5
    game.bank -= 3
    assert game.bank == 2