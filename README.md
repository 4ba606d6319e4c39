# coupgame

A hotseat version of the card game Coup. Two to six players share one screen;
each player is given a distinct random role when added, and the game is
played until a single player is left standing.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Playing

Start the table view with:

```
coupgame
```

The window uses the font `assets/sansation.ttf` relative to the current
directory when it exists, and pygame's default font otherwise.

In the menu, use **Add Player**, type a name and press Enter. Each new player
gets one of the six roles that is still free, so at most six players can be
seated; a name that is already taken is refused. Once at least two players
are seated, press **Start Game**.

On each turn the current player picks an action from the button row:

| Action   | Effect                                                           |
|----------|------------------------------------------------------------------|
| Gather   | +1 coin                                                          |
| Tax      | +2 coins (+3 for the Governor)                                   |
| Bribe    | pay 4 coins for an extra action this turn                        |
| Arrest   | take 1 coin from another player (not the same one twice running) |
| Sanction | pay 3 coins; the target can no longer gather or tax              |
| Coup     | pay 7 coins to remove another player                             |

A player holding 10 or more coins must coup. Rule violations are shown as a
short message on the table instead of ending the game.

Roles add their own abilities:

- **Governor** – taxes for 3 coins and can block another player's tax
  (**Block Tax**) until the end of that player's next turn.
- **Spy** – can show or hide every player's coins and block another player's
  arrest (**Block Arrest**).
- **Baron** – can invest 3 coins to receive 6 (**Invest**), and gains 1 coin
  when sanctioned.
- **General** – when a coup is chosen and a General holds 5 or more coins, a
  prompt lets that General pay 5 to block it (the attacker still loses 7) or
  let it go ahead.
- **Judge** – a player who sanctions the Judge pays an extra coin.
- **Merchant** – gains a bonus coin at the start of each turn when holding at
  least 3, and when arrested pays up to 2 coins to the bank instead of losing
  one to the thief.

Only the current player's coins are shown, unless a Spy has revealed them.
The latest nine log lines are shown in a strip below the table while the game
is running. When one player remains, a dialog names the winner and offers
**Play Again** (back to the menu with no players) or **Quit**.

## Using the engine directly

The rules can be driven without the window:

```python
from coupgame.game import Game
from coupgame.roles import Governor, Spy

game = Game()
alice = Governor(game, "Alice")
bob = Spy(game, "Bob")

alice.tax()          # Alice now holds 3 coins, Bob's turn
bob.gather()
print(game.turn())   # "Alice"
print(game.action_log())
```

Breaking a rule raises `coupgame.errors.CoupError`. Players of a role named
as a string can be created with `coupgame.roles.make_player(role, game, name)`.

`coupgame.session.GameSession` holds everything the window shows without
drawing anything: `add_player`, `start_game`, `available_actions`,
`perform`, `choose_target`, `resolve_block_coup`, `visible_coins`,
`check_winner`, `play_again` and `log_tail`. Its interactive methods store
rule violations in its `popup` attribute rather than raising them.

## What it does not do

The game is played on a single screen only: there is no network play, no
computer opponent, and games are not saved or restored.