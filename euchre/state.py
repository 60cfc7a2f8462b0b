from dataclasses import dataclass, field, replace
from typing import List, Optional

from tree_search.engine import Engine, Move

from .deck import ECard, ESuit, HAND_SIZE
from .logic import Trick, possible, next_seat, seat_order, leader, leader_inclusive, winner, trick_winner
from .players import NOBODY_ALONE, PLAYER_COUNT, eplayer_to_team_index, get_other_team_index, is_going_alone


@dataclass(frozen=True)
class Setup:
    """Parameters of one deal that don't change once play starts."""
    dealer: int
    caller: int
    picked_up: bool  # The dealer took the top card in the first bidding round
    top: Optional[ECard] = None
    trump: Optional[ESuit] = None
    discard: Optional[ECard] = None  # Only known to the dealer
    alone: int = NOBODY_ALONE

    @property
    def dealer_team_called(self):
        return eplayer_to_team_index(self.dealer) == eplayer_to_team_index(self.caller)

    def with_trump(self, trump, caller=None, alone=NOBODY_ALONE):
        return replace(self, trump=trump, caller=self.caller if caller is None else caller, alone=alone)


@dataclass
class State:
    """
    A hand in progress. hands holds every seat's cards once hidden cards have
    been sampled; a player's-eye view only holds the viewer's own hand.
    searcher is the seat whose team the evaluation is for.
    """
    setup: Setup
    player: int
    hands: List[List[ECard]]
    played: List[ECard] = field(default_factory=list)
    prior: List[Trick] = field(default_factory=list)
    searcher: int = 0

    @classmethod
    def view(cls, setup, player, hand, played=(), prior=()):
        hands = [[] for _ in range(PLAYER_COUNT)]
        hands[player] = list(hand)
        return cls(setup, player, hands, list(played), [trick.copy() for trick in prior], searcher=player)

    @classmethod
    def opening(cls, setup, hands, searcher=0):
        # The player left of the dealer leads the first trick
        first = next_seat(setup.dealer, setup.alone)
        return cls(setup, first, [list(hand) for hand in hands], searcher=searcher)

    @property
    def trump(self):
        return self.setup.trump

    @property
    def alone(self):
        return self.setup.alone

    @property
    def hand(self):
        return self.hands[self.player]

    def copy(self):
        return State(
            self.setup,
            self.player,
            [list(hand) for hand in self.hands],
            list(self.played),
            list(self.prior),  # Completed tricks are never modified
            self.searcher,
        )

    def leader(self):
        return leader(self.played, self.player, self.alone)

    def trick_wins(self):
        wins = [0] * 2
        for trick in self.prior:
            wins[eplayer_to_team_index(trick_winner(trick, self.trump))] += 1
        return wins

    def is_complete(self):
        return len(self.prior) >= HAND_SIZE


def apply_play(state: State, index: int) -> State:
    """Returns the state reached when the seat to act plays hand[index]."""
    new_state = state.copy()
    ecard = new_state.hands[new_state.player].pop(index)
    new_state.played.append(ecard)

    if len(new_state.played) == len(seat_order(new_state.player, new_state.alone)):
        led = leader_inclusive(new_state.played, new_state.player, new_state.alone)
        new_state.prior.append(Trick(new_state.played, led, new_state.alone))
        new_state.player = winner(new_state.played, new_state.trump, led, new_state.alone)
        new_state.played = []
    else:
        new_state.player = next_seat(new_state.player, new_state.alone)

    return new_state


def score_tricks(trick_wins, caller, alone=NOBODY_ALONE):
    """Points each team gets for a finished hand."""
    points = [0] * 2
    maker_team_index = eplayer_to_team_index(caller)
    defender_team_index = get_other_team_index(maker_team_index)

    if trick_wins[maker_team_index] == HAND_SIZE:
        points[maker_team_index] = 4 if is_going_alone(alone) else 2
    elif trick_wins[maker_team_index] >= 3:
        points[maker_team_index] = 1

    # The defenders "euchre" the makers if they win 3 or more
    if trick_wins[defender_team_index] >= 3:
        points[defender_team_index] = 2

    return points


class EuchreEngine(Engine):
    """
    Card play of one Euchre hand for the tree search engines.

    horizon limits the search to that many completed tricks, evaluated by
    trick difference instead of points.
    """

    def __init__(self, horizon=HAND_SIZE):
        self.horizon = horizon

    def successors(self, state: State) -> List[Move]:
        hand = state.hands[state.player]
        return [Move(index, apply_play(state, index)) for index in possible(hand, state.played, state.trump)]

    def is_terminal(self, state: State) -> bool:
        return len(state.prior) >= self.horizon or not state.hands[state.player]

    def evaluation(self, state: State) -> float:
        team_index = eplayer_to_team_index(state.searcher)
        other_index = get_other_team_index(team_index)
        trick_wins = state.trick_wins()

        if not state.is_complete():
            return float(trick_wins[team_index] - trick_wins[other_index])

        points = score_tricks(trick_wins, state.setup.caller, state.alone)
        return float(points[team_index] - points[other_index])

    def favorable(self, state: State) -> bool:
        return eplayer_to_team_index(state.player) == eplayer_to_team_index(state.searcher)
