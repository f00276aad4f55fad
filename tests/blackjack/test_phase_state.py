import pytest

from cmdjack.blackjack.state import (
    GamePhase,
    InGameState,
    OutOfGameState,
    calculate_outcome,
    payout_for,
)
from cmdjack.blackjack.stats import HandOutcome
from cmdjack.common.card import Rank


def test_initial_state(make_game):
    game = make_game()
    assert game.phase == GamePhase.OUT_OF_GAME
    assert isinstance(game.current_state, OutOfGameState)
    assert game.chips == 10
    assert game.bet == 0
    assert str(game.current_state) == "OutOfGameState"


# start


def test_start_deals_two_cards_and_takes_wager(make_game):
    game = make_game(Rank.TEN, Rank.SIX)
    game.dispatch("start 3")

    assert game.phase == GamePhase.IN_GAME
    assert isinstance(game.current_state, InGameState)
    assert game.chips == 7
    assert game.bet == 3
    assert len(game.player_hand) == 2
    assert game.io_interface.sent_messages[:4] == [
        "You have been dealt the following cards:",
        "(down) Ten of Hearts",
        "(up) Six of Diamonds",
        "Your hand value is 16!",
    ]
    assert 'To view more options, you can type "help".' in game.io_interface.sent_messages


def test_start_with_whole_balance(make_game):
    game = make_game(Rank.TWO, Rank.THREE)
    game.dispatch("start 10")
    assert game.phase == GamePhase.IN_GAME
    assert game.chips == 0
    assert game.bet == 10
    assert not game.is_broke


def test_start_with_natural_21_returns_wager(make_game):
    game = make_game(Rank.ACE, Rank.KING)
    game.dispatch("start 5")

    assert game.phase == GamePhase.OUT_OF_GAME
    assert game.chips == 10
    assert game.bet == 0
    assert len(game.dealer_hand) == 0
    assert game.io_interface.sent_messages[-1] == (
        "Blackjack! Your wager of 5 chips has been returned."
    )
    assert game.stats.outcomes[HandOutcome.BLACKJACK] == 1


def test_start_over_balance_changes_nothing(make_game):
    game = make_game(Rank.TEN, Rank.SIX)
    game.dispatch("start 11")

    assert game.phase == GamePhase.OUT_OF_GAME
    assert game.chips == 10
    assert game.bet == 0
    assert game.io_interface.sent_messages == [
        "You cannot wager 11 chips because you only have 10!"
    ]


def test_start_zero_wager(make_game):
    game = make_game(Rank.TEN, Rank.SIX)
    game.dispatch("start 0")

    assert game.phase == GamePhase.OUT_OF_GAME
    assert game.chips == 10
    assert game.io_interface.sent_messages == ["You must wager at least 1 chip!"]


@pytest.mark.parametrize(
    "line, message",
    [
        ("start", "Usage: start <wager>"),
        ("start 1 2", "Usage: start <wager>"),
        ("start lots", "Error: unable to parse wager value - invalid digit found in string"),
        ("start -4", "Error: unable to parse wager value - invalid digit found in string"),
    ],
)
def test_start_with_malformed_wager(make_game, line, message):
    game = make_game(Rank.TEN, Rank.SIX)
    game.dispatch(line)

    assert game.phase == GamePhase.OUT_OF_GAME
    assert game.chips == 10
    assert game.bet == 0
    assert game.io_interface.sent_messages == [message]


def test_chips_command(make_game):
    game = make_game()
    game.dispatch("chips")
    assert game.io_interface.sent_messages == ["You have 10 chips."]


def test_help_out_of_game(make_game):
    game = make_game()
    game.dispatch("help")
    messages = game.io_interface.sent_messages
    assert messages[:4] == [
        "-----------------------",
        "Command Line Blackjack",
        "-----------------------",
        "Available commands",
    ]
    assert "start <wager>: Start a new hand with the given wager." in messages
    assert game.chips == 10


@pytest.mark.parametrize("line", ["hit", "stay", "leave", "hand", "dance", ""])
def test_invalid_commands_out_of_game(make_game, line):
    game = make_game()
    game.dispatch(line)
    assert game.io_interface.sent_messages == ["Invalid command!"]
    assert game.phase == GamePhase.OUT_OF_GAME


# hit


def test_hit_below_21_stays_in_game(make_game):
    game = make_game(Rank.TWO, Rank.THREE, Rank.FOUR)
    game.dispatch("start 3")
    game.io_interface.clear()
    game.dispatch("hit")

    assert game.phase == GamePhase.IN_GAME
    assert game.chips == 7
    assert game.bet == 3
    assert game.io_interface.sent_messages == [
        "You have been dealt the Four of Clubs!",
        "Your hand value is now 9!",
    ]


def test_hit_to_21_refunds_wager(make_game):
    game = make_game(Rank.TEN, Rank.SIX, Rank.FIVE)
    game.dispatch("start 4")
    game.dispatch("hit")

    assert game.phase == GamePhase.OUT_OF_GAME
    assert game.chips == 10
    assert game.bet == 0
    assert game.io_interface.sent_messages[-1] == (
        "Blackjack! Your wager of 4 chips has been returned."
    )


def test_hit_over_21_loses_wager(make_game):
    game = make_game(Rank.TEN, Rank.SIX, Rank.KING)
    game.dispatch("start 3")
    game.dispatch("hit")

    assert game.phase == GamePhase.OUT_OF_GAME
    assert game.chips == 7
    assert game.bet == 0
    assert game.io_interface.sent_messages[-1] == "You busted! You lost 3 chips."
    assert game.stats.outcomes[HandOutcome.BUST] == 1


def test_hand_command(make_game):
    game = make_game(Rank.TEN, Rank.SIX, Rank.TWO)
    game.dispatch("start 1")
    game.dispatch("hit")
    game.io_interface.clear()
    game.dispatch("hand")

    assert game.io_interface.sent_messages == [
        "(down) Ten of Hearts",
        "(up) Six of Diamonds",
        "(up) Two of Clubs",
        "Your hand value is 18!",
    ]
    assert game.phase == GamePhase.IN_GAME


def test_help_in_game(make_game):
    game = make_game(Rank.TEN, Rank.SIX)
    game.dispatch("start 1")
    game.io_interface.clear()
    game.dispatch("help")

    messages = game.io_interface.sent_messages
    assert messages[3] == "Available commands"
    assert [line.split(":")[0] for line in messages[4:]] == [
        "exit",
        "hand",
        "help",
        "hit",
        "leave",
        "stay",
    ]


@pytest.mark.parametrize("line", ["start 1", "chips", "dance", ""])
def test_invalid_commands_in_game(make_game, line):
    game = make_game(Rank.TEN, Rank.SIX)
    game.dispatch("start 1")
    game.io_interface.clear()
    game.dispatch(line)

    assert game.io_interface.sent_messages == ["Invalid command!"]
    assert game.phase == GamePhase.IN_GAME
    assert game.chips == 9
    assert game.bet == 1


# leave


def test_leave_forfeits_wager(make_game):
    game = make_game(Rank.TEN, Rank.SIX, Rank.TEN, Rank.TWO)
    game.dispatch("start 3")
    game.dispatch("leave")

    assert game.phase == GamePhase.OUT_OF_GAME
    assert game.chips == 7
    assert game.bet == 0
    assert len(game.dealer_hand) == 0
    assert game.stats.outcomes[HandOutcome.FORFEIT] == 1


# stay


def test_dealer_draws_until_limit(make_game):
    game = make_game(Rank.TEN, Rank.EIGHT, Rank.SIX, Rank.SIX, Rank.SIX, Rank.KING)
    game.dispatch("start 2")
    game.dispatch("stay")

    assert game.dealer_hand.value() == 18
    assert len(game.dealer_hand) == 3
    assert game.deck.size == 1


def test_dealer_stands_on_two_card_18(make_game):
    game = make_game(Rank.TEN, Rank.NINE, Rank.KING, Rank.EIGHT, Rank.TWO)
    game.dispatch("start 3")
    game.dispatch("stay")

    assert len(game.dealer_hand) == 2
    assert game.dealer_hand.value() == 18
    assert game.deck.size == 1
    assert game.chips == 13
    assert game.io_interface.sent_messages[-1] == "You beat the dealer! You won 3 chips."


def test_stay_push_returns_wager(make_game):
    game = make_game(Rank.TEN, Rank.EIGHT, Rank.SIX, Rank.SIX, Rank.SIX)
    game.dispatch("start 2")
    game.dispatch("stay")

    assert game.phase == GamePhase.OUT_OF_GAME
    assert game.chips == 10
    assert game.bet == 0
    assert game.io_interface.sent_messages[-1] == (
        "It's a push! Your wager of 2 chips has been returned."
    )


def test_stay_dealer_bust_pays_double(make_game):
    game = make_game(Rank.TEN, Rank.TWO, Rank.TEN, Rank.SIX, Rank.KING)
    game.dispatch("start 4")
    game.dispatch("stay")

    assert game.dealer_hand.value() == 26
    assert game.chips == 14
    assert game.io_interface.sent_messages[-1] == "The dealer busted! You won 4 chips."


def test_stay_dealer_wins(make_game):
    game = make_game(Rank.TEN, Rank.SEVEN, Rank.TEN, Rank.NINE)
    game.dispatch("start 4")
    game.dispatch("stay")

    assert game.chips == 6
    assert game.bet == 0
    assert game.io_interface.sent_messages[-1] == "The dealer wins! You lost 4 chips."
    assert game.stats.outcomes[HandOutcome.LOSS] == 1


def test_stay_shows_both_hands(make_game):
    game = make_game(Rank.TEN, Rank.SEVEN, Rank.TEN, Rank.NINE)
    game.dispatch("start 1")
    game.io_interface.clear()
    game.dispatch("stay")

    assert game.io_interface.sent_messages[:-1] == [
        "Your cards:",
        "(down) Ten of Hearts",
        "(up) Seven of Diamonds",
        "Your hand value is 17!",
        "The dealer's cards:",
        "(down) Ten of Clubs",
        "(up) Nine of Spades",
        "The dealer's hand value is 19!",
    ]


# settlement


@pytest.mark.parametrize(
    "dealer_value, player_value, outcome",
    [
        (22, 12, HandOutcome.WIN),
        (26, 20, HandOutcome.WIN),
        (22, 25, HandOutcome.WIN),
        (17, 20, HandOutcome.WIN),
        (18, 18, HandOutcome.PUSH),
        (21, 21, HandOutcome.PUSH),
        (19, 17, HandOutcome.LOSS),
        (21, 4, HandOutcome.LOSS),
    ],
)
def test_calculate_outcome(dealer_value, player_value, outcome):
    assert calculate_outcome(dealer_value, player_value) == outcome


@pytest.mark.parametrize(
    "outcome, returned",
    [
        (HandOutcome.WIN, 10),
        (HandOutcome.PUSH, 5),
        (HandOutcome.BLACKJACK, 5),
        (HandOutcome.LOSS, 0),
        (HandOutcome.BUST, 0),
        (HandOutcome.FORFEIT, 0),
    ],
)
def test_payout_for(outcome, returned):
    assert payout_for(outcome, 5) == returned
