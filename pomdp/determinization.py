import logging
from typing import Dict, Iterable, List, Optional, Set

import numpy as np

from euchre.deck import ECard, ESuit, HAND_SIZE, get_adjusted_esuit
from euchre.logic import Trick, no_suits, seat_order
from euchre.players import PLAYER_COUNT, get_sitting_out

logger = logging.getLogger(__name__)

ALL_CARDS = list(ECard)
REJECTION_ATTEMPTS = 200


class DeterminizationError(RuntimeError):
    """No deal of the unseen cards satisfies what has been observed."""


def cards_played_by_seat(prior: Iterable[Trick], played: List[ECard], led: int, alone: int) -> List[int]:
    counts = [0] * PLAYER_COUNT
    for trick in prior:
        for seat, _ in zip(seat_order(trick.led, trick.alone), trick.cards):
            counts[seat] += 1
    for seat, _ in zip(seat_order(led, alone), played):
        counts[seat] += 1
    return counts


class Determinizer:
    """
    Samples complete deals of the cards a player can't see.

    Every sample is drawn independently and uniformly from the deals that
    respect what the viewer knows:
    - cards the viewer has seen (own hand, played cards, turned down or
      discarded cards) are never dealt,
    - cards with a known holder are always dealt to that seat,
    - a seat is never dealt a card of a suit it failed to follow.
    """

    def __init__(
        self,
        viewer: int,
        hand: List[ECard],
        hand_sizes: List[int],
        seen: Iterable[ECard] = (),
        trump: Optional[ESuit] = None,
        exclusions: Optional[Dict[int, Set[ESuit]]] = None,
        holders: Optional[Dict[ECard, int]] = None,
    ):
        self.viewer = viewer
        self.hand = list(hand)
        self.hand_sizes = list(hand_sizes)
        self.trump = trump
        self.exclusions = exclusions or {}
        self.holders = dict(holders or {})

        unavailable = set(seen) | set(self.hand) | set(self.holders)
        self.pool = [ecard for ecard in ALL_CARDS if ecard not in unavailable]

        # Cards each hidden seat still needs once its known cards are placed
        self.needed = [0] * PLAYER_COUNT
        for seat in range(PLAYER_COUNT):
            if seat == viewer:
                continue
            known = sum(1 for holder in self.holders.values() if holder == seat)
            self.needed[seat] = self.hand_sizes[seat] - known
            assert self.needed[seat] >= 0, f"Seat {seat} holds more known cards than it has!"

        assert sum(self.needed) <= len(self.pool), "Not enough unseen cards to fill every hand!"

    @classmethod
    def from_state(cls, state):
        """Determinizer for the viewer of a player's-eye State during card play."""
        setup = state.setup
        viewer = state.player
        led = state.leader()

        seen = set(state.hand) | set(state.played)
        for trick in state.prior:
            seen.update(trick.cards)

        exclusions = no_suits(list(state.prior) + [Trick(list(state.played), led, state.alone)], state.trump)

        played_counts = cards_played_by_seat(state.prior, state.played, led, state.alone)
        sitting_out = get_sitting_out(state.alone)
        hand_sizes = [0 if seat == sitting_out else HAND_SIZE - played_counts[seat] for seat in range(PLAYER_COUNT)]

        holders = {}
        if viewer == setup.dealer and setup.discard is not None:
            seen.add(setup.discard)

        top = setup.top
        if top is not None and top not in seen:
            if not setup.picked_up:
                seen.add(top)
            elif viewer != setup.dealer:
                dealer_excluded = get_adjusted_esuit(top, state.trump) in exclusions.get(setup.dealer, set())
                if dealer_excluded or hand_sizes[setup.dealer] == 0:
                    # The dealer can't still hold it, so it must have been the discard
                    seen.add(top)
                else:
                    # Approximation: a dealer who discarded the top card is never
                    # sampled until they show out of its suit
                    holders[top] = setup.dealer

        return cls(viewer, state.hand, hand_sizes, seen, state.trump, exclusions, holders)

    def allowed(self, seat: int, ecard: ECard) -> bool:
        return get_adjusted_esuit(ecard, self.trump) not in self.exclusions.get(seat, ())

    def sample(self, rng: np.random.Generator) -> List[List[ECard]]:
        for _ in range(REJECTION_ATTEMPTS):
            hands = self._deal(rng)
            if self._consistent(hands):
                return hands

        logger.warning("Rejection sampling failed %d times, falling back to backtracking", REJECTION_ATTEMPTS)
        return self._backtrack(rng)

    def _empty_hands(self) -> List[List[ECard]]:
        hands = [[] for _ in range(PLAYER_COUNT)]
        hands[self.viewer] = list(self.hand)
        for ecard, seat in self.holders.items():
            hands[seat].append(ecard)
        return hands

    def _deal(self, rng) -> List[List[ECard]]:
        hands = self._empty_hands()
        order = rng.permutation(len(self.pool))
        position = 0
        for seat in range(PLAYER_COUNT):
            for index in order[position:position + self.needed[seat]]:
                hands[seat].append(self.pool[index])
            position += self.needed[seat]
        return hands

    def _consistent(self, hands) -> bool:
        for seat in range(PLAYER_COUNT):
            if seat == self.viewer:
                continue
            if not all(self.allowed(seat, ecard) for ecard in hands[seat]):
                return False
        return True

    def _backtrack(self, rng) -> List[List[ECard]]:
        # Fill the most constrained seats first, trying cards in random order
        slots = []
        for seat in range(PLAYER_COUNT):
            slots.extend([seat] * self.needed[seat])
        slots.sort(key=lambda seat: sum(1 for ecard in self.pool if self.allowed(seat, ecard)))

        hands = self._empty_hands()
        used = set()

        def fill(slot_index):
            if slot_index == len(slots):
                return True

            seat = slots[slot_index]
            candidates = [ecard for ecard in self.pool if ecard not in used and self.allowed(seat, ecard)]
            # Cards within one seat are unordered, so only try cards after the seat's previous pick
            if slot_index > 0 and slots[slot_index - 1] == seat and hands[seat]:
                candidates = [ecard for ecard in candidates if ecard > hands[seat][-1]]

            for index in rng.permutation(len(candidates)):
                ecard = candidates[index]
                used.add(ecard)
                hands[seat].append(ecard)
                if fill(slot_index + 1):
                    return True
                hands[seat].pop()
                used.remove(ecard)
            return False

        if not fill(0):
            raise DeterminizationError(f"No deal satisfies the exclusions {self.exclusions}")
        return hands
