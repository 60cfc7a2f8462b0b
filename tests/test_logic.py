"""Tests for trick resolution: beats, legal plays, winners, leaders and void inference."""
from itertools import permutations

import pytest

from euchre.deck import ECard, ESuit, parse_ecard, get_adjusted_esuit
from euchre.logic import (
    Trick,
    beats,
    leader,
    leader_inclusive,
    next_seat,
    no_suits,
    possible,
    seat_order,
    trick_winner,
    winner,
    winner_index,
)
from euchre.players import NOBODY_ALONE

HEARTS = ESuit["HEARTS"]
SPADES = ESuit["SPADES"]


def cards(*tokens):
    return [parse_ecard(token) for token in tokens]


def brute_force_seats(led, alone):
    # Clockwise from led, leaving out the partner of the seat going alone
    sitting_out = (alone + 2) % 4 if 0 <= alone <= 3 else None
    seats = []
    seat = led
    for _ in range(4):
        if seat != sitting_out:
            seats.append(seat)
        seat = (seat + 1) % 4
    return seats


def test_bowers_and_trump_order():
    assert beats(parse_ecard("JH"), parse_ecard("JD"), HEARTS)
    assert not beats(parse_ecard("JD"), parse_ecard("JH"), HEARTS)
    assert beats(parse_ecard("JD"), parse_ecard("AH"), HEARTS)
    assert not beats(parse_ecard("AH"), parse_ecard("JD"), HEARTS)
    assert beats(parse_ecard("9H"), parse_ecard("AS"), HEARTS)
    assert not beats(parse_ecard("AS"), parse_ecard("9H"), HEARTS)
    assert beats(parse_ecard("AH"), parse_ecard("KH"), HEARTS)


@pytest.mark.parametrize("trump", list(ESuit))
def test_right_beats_left_beats_trump_beats_rest(trump):
    trumps = [ecard for ecard in ECard if get_adjusted_esuit(ecard, trump) == trump]
    right = next(ecard for ecard in trumps if ecard.name == f"{trump.name}_JACK")
    left = next(ecard for ecard in trumps if ecard.name.endswith("JACK") and ecard != right)

    for other in trumps:
        if other != right:
            assert beats(right, other, trump)
            assert not beats(other, right, trump)
        if other not in (right, left):
            assert beats(left, other, trump)
            assert not beats(other, left, trump)

    for off in ECard:
        if off not in trumps:
            for other in trumps:
                assert beats(other, off, trump)
                assert not beats(off, other, trump)


@pytest.mark.parametrize("trump", list(ESuit))
def test_beats_is_antisymmetric_when_suits_can_compete(trump):
    for a, b in permutations(ECard, 2):
        a_suit = get_adjusted_esuit(a, trump)
        b_suit = get_adjusted_esuit(b, trump)
        if a_suit == b_suit or trump in (a_suit, b_suit):
            assert beats(a, b, trump) != beats(b, a, trump), (a, b)


def test_led_card_wins_against_other_off_suit():
    nine_spades, ace_clubs = cards("9S", "AC")
    assert beats(nine_spades, ace_clubs, HEARTS)
    assert beats(ace_clubs, nine_spades, HEARTS)


def test_possible_follows_led_suit():
    hand = cards("9S", "AH", "10S", "JD")
    assert possible(hand, cards("KS"), HEARTS) == [0, 2]


def test_possible_counts_left_bower_as_trump():
    assert possible(cards("JD", "9S", "AC"), cards("QH"), HEARTS) == [0]
    # The left bower can't follow its printed suit
    assert possible(cards("JD", "9D"), cards("QD"), HEARTS) == [1]
    assert possible(cards("JD", "9S"), cards("QD"), HEARTS) == [0, 1]


def test_possible_without_led_suit_or_lead():
    hand = cards("9S", "AH", "10S")
    assert possible(hand, cards("QC"), HEARTS) == [0, 1, 2]
    assert possible(hand, [], HEARTS) == [0, 1, 2]


def test_possible_never_empty_for_a_card_in_hand():
    for ecard in ECard:
        for led in ECard:
            if led != ecard:
                assert possible([ecard], [led], SPADES) == [0]


def test_winner_index():
    assert winner_index([], HEARTS) == -1
    assert winner_index(cards("9C"), HEARTS) == 0
    assert winner_index(cards("9C", "AC", "9H", "KC"), HEARTS) == 2
    assert winner_index(cards("QS", "JD", "JH", "AH"), HEARTS) == 2
    assert winner_index(cards("KS", "AD", "QC", "9S"), HEARTS) == 0


def test_single_card_trick_goes_to_leader():
    for led in range(4):
        assert winner(cards("9C"), HEARTS, led, NOBODY_ALONE) == led


@pytest.mark.parametrize("led", range(4))
def test_winner_agrees_with_winner_index_when_nobody_alone(led):
    for played in (cards("9C", "AC", "9H", "KC"), cards("AS", "KS", "QS", "JS"), cards("10D", "JH", "AD", "JD")):
        assert winner(played, HEARTS, led, NOBODY_ALONE) == (led + winner_index(played, HEARTS)) % 4


def test_winner_skips_the_seat_sitting_out():
    # Seat 0 is alone so seat 2 sits out; the trick goes 1, 3, 0
    assert winner(cards("9S", "10S", "QS"), HEARTS, 1, 0) == 0
    assert winner(cards("QS", "10S", "9S"), HEARTS, 1, 0) == 1
    assert winner(cards("9S", "QS", "10S"), HEARTS, 1, 0) == 3


@pytest.mark.parametrize("alone", [NOBODY_ALONE, 0, 1, 2, 3, 7])
def test_winner_matches_brute_force_seating(alone):
    for led in range(4):
        seats = brute_force_seats(led, alone)
        if led not in seats:
            continue
        for high in range(len(seats)):
            played = cards("9C", "10C", "QC", "KC")[:len(seats)]
            played[high] = parse_ecard("JH")
            assert winner(played, HEARTS, led, alone) == seats[high]


@pytest.mark.parametrize("alone", [NOBODY_ALONE, 0, 1, 2, 3])
def test_seat_order_matches_brute_force(alone):
    for led in range(4):
        seats = brute_force_seats(led, alone)
        if led in seats:
            assert seat_order(led, alone) == seats
            assert next_seat(seats[0], alone) == seats[1]


def test_leader():
    assert leader([], 2, NOBODY_ALONE) == 2
    assert leader(cards("9C"), 2, NOBODY_ALONE) == 1
    assert leader(cards("9C", "10C", "QC"), 0, NOBODY_ALONE) == 1
    # Seat 2 sits out while seat 0 is alone
    assert leader(cards("9C"), 3, 0) == 1
    assert leader(cards("9C", "10C"), 0, 0) == 1


@pytest.mark.parametrize("alone", [NOBODY_ALONE, 0, 1, 2, 3])
def test_leader_round_trip(alone):
    full = cards("9C", "10C", "QC", "KC")
    for led in range(4):
        seats = brute_force_seats(led, alone)
        if led not in seats:
            continue
        for count in range(1, len(seats) + 1):
            played = full[:count]
            assert leader_inclusive(played, seats[count - 1], alone) == led
            if count < len(seats):
                assert leader(played, seats[count], alone) == led


def test_full_trick_leader_is_independent_of_who_is_asked():
    full = cards("9C", "10C", "QC", "KC")
    for led in range(4):
        seats = brute_force_seats(led, NOBODY_ALONE)
        assert {leader_inclusive(full[:i + 1], seat, NOBODY_ALONE) for i, seat in enumerate(seats)} == {led}


def test_no_suits_records_failures_to_follow():
    trick = Trick(cards("AS", "KS", "9C", "JD"), led=0)
    assert no_suits([trick], HEARTS) == {2: {SPADES}, 3: {SPADES}}


def test_no_suits_uses_adjusted_suits():
    # The left bower leads trump; 9D doesn't follow it
    trick = Trick(cards("JD", "9H", "9D", "AS"), led=1)
    assert no_suits([trick], HEARTS) == {3: {HEARTS}, 0: {HEARTS}}


def test_no_suits_skips_the_seat_sitting_out():
    # Seat 1 alone: seats 1, 2, 0 play
    trick = Trick(cards("AS", "9C", "KS"), led=1, alone=1)
    assert no_suits([trick], HEARTS) == {2: {SPADES}}


def test_no_suits_never_records_a_follower():
    tricks = [
        Trick(cards("AS", "KS", "QS", "10S"), led=2),
        Trick(cards("9D", "10D", "JH", "QD"), led=3),
    ]
    assert no_suits(tricks, ESuit["CLUBS"]) == {1: {ESuit["DIAMONDS"]}}


def test_trick_winner():
    assert trick_winner(Trick(cards("9C", "AC", "9H", "KC"), led=3), HEARTS) == 1
