from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from .deck import ECard, ESuit, get_adjusted_esuit, get_ecard_erank, is_right_bower, is_left_bower
from .players import NOBODY_ALONE, PLAYER_COUNT, get_sitting_out


@dataclass
class Trick:
    """Cards of one trick in play order, the seat that led it and the seat going alone (if any)."""
    cards: List[ECard] = field(default_factory=list)
    led: int = 0
    alone: int = NOBODY_ALONE

    def copy(self):
        return Trick(list(self.cards), self.led, self.alone)


def beats(a: ECard, b: ECard, trump: Optional[ESuit]) -> bool:
    """
    Returns whether a beats b given the trump suit.

    a and b must be different cards and a must have been played before b, so
    when they are two different non-trump suits a wins automatically.
    """
    a_trump = get_adjusted_esuit(a, trump) == trump
    b_trump = get_adjusted_esuit(b, trump) == trump

    # Exactly one trump card: it wins
    if a_trump != b_trump:
        return a_trump

    if a_trump and b_trump:
        if is_right_bower(a, trump):
            return True
        if is_right_bower(b, trump):
            return False
        if is_left_bower(a, trump):
            return True
        if is_left_bower(b, trump):
            return False
        return get_ecard_erank(a) > get_ecard_erank(b)

    if get_adjusted_esuit(a, trump) == get_adjusted_esuit(b, trump):
        return get_ecard_erank(a) > get_ecard_erank(b)

    # b didn't follow the led suit
    return True


def possible(hand: List[ECard], played: List[ECard], trump: Optional[ESuit]) -> List[int]:
    """
    Indices of the cards in hand that can legally be played on top of played.

    Indices (not cards) are returned so callers can remove the card directly.
    """
    if played:
        led_esuit = get_adjusted_esuit(played[0], trump)
        following = [i for i, ecard in enumerate(hand) if get_adjusted_esuit(ecard, trump) == led_esuit]
        if following:
            return following

    return list(range(len(hand)))


def next_seat(seat: int, alone: int = NOBODY_ALONE) -> int:
    # Clockwise, skipping the partner of a player going alone
    sitting_out = get_sitting_out(alone)
    seat = (seat + 1) % PLAYER_COUNT
    if seat == sitting_out:
        seat = (seat + 1) % PLAYER_COUNT
    return seat


def previous_seat(seat: int, alone: int = NOBODY_ALONE) -> int:
    sitting_out = get_sitting_out(alone)
    seat = (seat - 1) % PLAYER_COUNT
    if seat == sitting_out:
        seat = (seat - 1) % PLAYER_COUNT
    return seat


def seat_order(led: int, alone: int = NOBODY_ALONE) -> List[int]:
    """Active seats in the order they play a trick led by led."""
    order = [led]
    active_count = PLAYER_COUNT - 1 if get_sitting_out(alone) is not None else PLAYER_COUNT
    while len(order) < active_count:
        order.append(next_seat(order[-1], alone))
    return order


def winner_index(played: List[ECard], trump: Optional[ESuit]) -> int:
    """Index into played of the winning card, or -1 when nothing was played."""
    if not played:
        return -1

    high_index = 0
    for i in range(1, len(played)):
        if not beats(played[high_index], played[i], trump):
            high_index = i

    return high_index


def winner(played: List[ECard], trump: Optional[ESuit], led: int, alone: int = NOBODY_ALONE) -> int:
    """
    Seat that played the winning card, given the seat that led the trick.

    Seats are counted from led, skipping the seat sitting out when someone
    is going alone.
    """
    assert played, "A trick needs at least one card to have a winner!"
    return seat_order(led, alone)[winner_index(played, trump)]


def trick_winner(trick: Trick, trump: Optional[ESuit]) -> int:
    return winner(trick.cards, trump, trick.led, trick.alone)


def leader(played: List[ECard], player: int, alone: int = NOBODY_ALONE) -> int:
    """Seat that led played, where player is the next seat to play."""
    seat = player
    for _ in played:
        seat = previous_seat(seat, alone)
    return seat


def leader_inclusive(played: List[ECard], player: int, alone: int = NOBODY_ALONE) -> int:
    """Seat that led played, where player played the last card of played."""
    return leader(played[:-1], player, alone)


def no_suits(prior: List[Trick], trump: Optional[ESuit]) -> Dict[int, Set[ESuit]]:
    """
    Suits each seat is known not to hold, from every trick where it failed to
    follow the led suit.
    """
    missing: Dict[int, Set[ESuit]] = {}

    for trick in prior:
        if not trick.cards:
            continue

        led_esuit = get_adjusted_esuit(trick.cards[0], trump)
        for seat, ecard in zip(seat_order(trick.led, trick.alone), trick.cards):
            if get_adjusted_esuit(ecard, trump) != led_esuit:
                missing.setdefault(seat, set()).add(led_esuit)

    return missing
