"""Tests for sampling hidden hands consistent with what a player has seen."""
import numpy as np
import pytest

from euchre.deck import ESuit, get_adjusted_esuit, parse_ecard
from euchre.logic import Trick
from euchre.players import NOBODY_ALONE
from euchre.state import Setup, State
from pomdp.determinization import DeterminizationError, Determinizer, cards_played_by_seat

HEARTS = ESuit["HEARTS"]
SPADES = ESuit["SPADES"]
DIAMONDS = ESuit["DIAMONDS"]


def cards(*tokens):
    return [parse_ecard(token) for token in tokens]


def all_dealt(hands):
    return [ecard for hand in hands for ecard in hand]


def test_bidding_samples_are_complete_deals():
    hand = cards("JH", "JD", "AH", "KH", "QH")
    top = parse_ecard("9H")
    determinizer = Determinizer(0, hand, [5, 5, 5, 5], seen=[top])
    rng = np.random.default_rng(0)

    for _ in range(20):
        hands = determinizer.sample(rng)
        assert hands[0] == hand
        assert [len(h) for h in hands] == [5, 5, 5, 5]
        dealt = all_dealt(hands)
        assert len(set(dealt)) == 20
        assert top not in dealt


def test_samples_differ_between_draws():
    determinizer = Determinizer(0, cards("9S", "10S", "JS", "QS", "KS"), [5, 5, 5, 5])
    rng = np.random.default_rng(1)
    assert determinizer.sample(rng) != determinizer.sample(rng)


def test_from_state_respects_failures_to_follow():
    # Seat 1 showed out of spades in the first trick and trumped the diamond lead
    setup = Setup(dealer=3, caller=1, picked_up=False, top=parse_ecard("9S"), trump=HEARTS)
    prior = [Trick(cards("AS", "9C", "10S", "QS"), led=0)]
    view = State.view(setup, 2, cards("10H", "QC", "KC", "10D"), played=cards("KD", "9H"), prior=prior)
    seen = set(cards("10H", "QC", "KC", "10D", "KD", "9H", "AS", "9C", "10S", "QS", "9S"))

    determinizer = Determinizer.from_state(view)
    assert determinizer.exclusions == {1: {SPADES, DIAMONDS}}
    assert determinizer.hand_sizes[0] == 3
    assert determinizer.hand_sizes[1] == 3
    assert determinizer.hand_sizes[3] == 4

    rng = np.random.default_rng(2)
    for _ in range(30):
        hands = determinizer.sample(rng)
        assert [len(h) for h in hands] == [3, 3, 4, 4]
        assert not seen.intersection(all_dealt(hands[:2] + hands[3:]))
        assert all(get_adjusted_esuit(ecard, HEARTS) not in (SPADES, DIAMONDS) for ecard in hands[1])


def test_picked_up_card_stays_with_the_dealer():
    top = parse_ecard("AH")
    setup = Setup(dealer=3, caller=1, picked_up=True, top=top, trump=HEARTS)
    view = State.view(setup, 0, cards("9S", "10S", "QC", "KD", "9D"))

    determinizer = Determinizer.from_state(view)
    assert determinizer.holders == {top: 3}

    rng = np.random.default_rng(3)
    for _ in range(10):
        assert top in determinizer.sample(rng)[3]


def test_dealer_following_suit_still_holds_the_picked_up_card():
    top = parse_ecard("AH")
    setup = Setup(dealer=3, caller=1, picked_up=True, top=top, trump=HEARTS)
    prior = [Trick(cards("KH", "QH", "10H", "9H"), led=0)]
    view = State.view(setup, 0, cards("10S", "QC", "KD", "9D"), prior=prior)

    determinizer = Determinizer.from_state(view)
    assert determinizer.holders == {top: 3}
    assert determinizer.hand_sizes[3] == 4

    rng = np.random.default_rng(5)
    for _ in range(10):
        hands = determinizer.sample(rng)
        assert top in hands[3]
        assert len(hands[3]) == 4


def test_picked_up_card_was_discarded_when_dealer_shows_out():
    top = parse_ecard("AH")
    setup = Setup(dealer=3, caller=1, picked_up=True, top=top, trump=HEARTS)
    prior = [Trick(cards("KH", "QH", "10H", "9S"), led=0)]
    view = State.view(setup, 0, cards("10S", "QC", "KD", "9D"), prior=prior)

    determinizer = Determinizer.from_state(view)
    assert determinizer.holders == {}

    rng = np.random.default_rng(4)
    for _ in range(10):
        assert top not in all_dealt(determinizer.sample(rng))


def test_dealer_never_samples_their_own_discard():
    discard = parse_ecard("9C")
    setup = Setup(dealer=0, caller=1, picked_up=True, top=parse_ecard("AH"), trump=HEARTS, discard=discard)
    view = State.view(setup, 0, cards("AH", "9S", "QC", "KD", "9D"), played=cards("KS", "QS", "10S"))

    determinizer = Determinizer.from_state(view)
    assert discard not in determinizer.pool

    rng = np.random.default_rng(5)
    for _ in range(10):
        hands = determinizer.sample(rng)
        assert [len(h) for h in hands] == [5, 4, 4, 4]
        assert discard not in all_dealt(hands[1:])


def test_turned_down_card_is_never_dealt():
    top = parse_ecard("JS")
    setup = Setup(dealer=2, caller=1, picked_up=False, top=top, trump=HEARTS)
    view = State.view(setup, 3, cards("9S", "10S", "QC", "KD", "9D"))

    rng = np.random.default_rng(6)
    for _ in range(10):
        assert top not in all_dealt(Determinizer.from_state(view).sample(rng))


def test_sitting_out_seat_gets_no_cards():
    setup = Setup(dealer=3, caller=0, picked_up=False, trump=HEARTS, alone=0)
    view = State.view(setup, 1, cards("9S", "10S", "QC", "KD", "9D"), played=cards("JH"))
    hands = Determinizer.from_state(view).sample(np.random.default_rng(7))
    assert [len(h) for h in hands] == [4, 5, 0, 5]


def test_backtracking_handles_tight_constraints():
    # Seats 1 and 2 only hold diamonds, so they must split all six between them
    hand = cards("9S", "10S", "JS", "QS", "KS")
    exclusions = {1: {SPADES, ESuit["CLUBS"], HEARTS}, 2: {SPADES, ESuit["CLUBS"], HEARTS}}
    determinizer = Determinizer(0, hand, [5, 3, 3, 5], exclusions=exclusions)

    hands = determinizer.sample(np.random.default_rng(8))

    diamonds = {ecard for ecard in hands[1] + hands[2]}
    assert len(diamonds) == 6
    assert all(get_adjusted_esuit(ecard, None) == DIAMONDS for ecard in diamonds)
    assert len(hands[3]) == 5
    assert not diamonds.intersection(hands[3])


def test_impossible_constraints_raise():
    hand = cards("9S", "10S", "JS", "QS", "KS")
    exclusions = {1: {SPADES, ESuit["CLUBS"], HEARTS}, 2: {SPADES, ESuit["CLUBS"], HEARTS}}
    determinizer = Determinizer(0, hand, [5, 4, 4, 5], exclusions=exclusions)

    with pytest.raises(DeterminizationError):
        determinizer.sample(np.random.default_rng(9))


def test_cards_played_by_seat():
    prior = [Trick(cards("AS", "KS", "QS", "JS"), led=1)]
    assert cards_played_by_seat(prior, cards("9C"), 2, NOBODY_ALONE) == [1, 1, 2, 1]

    alone_prior = [Trick(cards("AS", "KS", "QS"), led=1, alone=1)]
    assert cards_played_by_seat(alone_prior, [], 1, 1) == [1, 1, 1, 0]
