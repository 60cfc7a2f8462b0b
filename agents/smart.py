import logging
import os
from collections import defaultdict
from concurrent.futures import ProcessPoolExecutor
from typing import Dict, List, Optional, Tuple

import numpy as np

from euchre.deck import ECard, ESuit, HAND_SIZE, get_ecard_esuit, get_ecard_score, is_trump
from euchre.logic import possible
from euchre.players import NOBODY_ALONE, PLAYER_COUNT
from euchre.state import EuchreEngine, Setup, State
from pomdp.determinization import Determinizer
from tree_search.mcts import MCTS
from tree_search.minimax import minimax

from .base import Player
from .config import SmartConfig
from .rule import choose_discard, choose_play, discard_from

logger = logging.getLogger(__name__)

ME = 0


# Determinization jobs run in worker processes, so they live at module level
# and only take plain, picklable arguments.

def _opening_values(job) -> List[float]:
    """
    Searched value of each scenario from the first lead, for one sampled deal.

    Every scenario is played on the same deal so their values are comparable.
    A scenario is (setup, my_hand); when the setup has an opponent or the
    partner picking up a top card it wasn't dealt, that dealer discards by
    the heuristic.
    """
    seed, determinizer, scenarios, runs, exploration, time_limit = job
    rng = np.random.default_rng(seed)
    sampled = determinizer.sample(rng)

    values = []
    for setup, my_hand in scenarios:
        hands = [list(hand) for hand in sampled]
        hands[ME] = list(my_hand)
        dealer_hand = hands[setup.dealer]
        if setup.picked_up and setup.dealer != ME and setup.top not in dealer_hand:
            hands[setup.dealer] = discard_from(dealer_hand, setup.top, choose_discard(dealer_hand, setup.top))

        state = State.opening(setup, hands, searcher=ME)
        root = MCTS(EuchreEngine(), exploration, rng).search(state, runs, time_limit)
        values.append(root.mean_value)

    return values


def _play_statistics(job) -> Dict[ECard, Tuple[int, float]]:
    """
    (weight, value) per card of the viewer's hand for one sampled deal.

    MCTS weights cards by visits; minimax gives its chosen card one vote.
    """
    seed, view, runs, exploration, time_limit, minimax_cards = job
    rng = np.random.default_rng(seed)

    state = view.copy()
    state.hands = Determinizer.from_state(view).sample(rng)
    state.searcher = view.player
    hand = state.hands[state.player]
    engine = EuchreEngine()

    if len(hand) <= minimax_cards:
        value, move = minimax(state, engine)
        return {hand[move.action]: (1, value)}

    root = MCTS(engine, exploration, rng).search(state, runs, time_limit)
    return {hand[action]: (visits, mean) for action, visits, mean in MCTS.statistics(root)}


class SmartPlayer(Player):
    """
    Player that decides by searching sampled deals of the hidden cards.

    Every decision samples deals consistent with everything the player has
    seen, searches each one independently (MCTS, or minimax near the end of
    a hand) and aggregates the results. Bids are only made when the average
    searched value clears the configured confidence threshold.
    """

    def __init__(self, config: Optional[SmartConfig] = None, rng=None):
        self.config = config if config is not None else SmartConfig()
        self.rng = np.random.default_rng(rng)

    def _seeds(self, count):
        return [int(seed) for seed in self.rng.integers(0, 2**32, size=count)]

    def _map(self, function, jobs):
        workers = self.config.workers or os.cpu_count() or 1
        if workers == 1 or len(jobs) == 1:
            return [function(job) for job in jobs]

        with ProcessPoolExecutor(max_workers=min(workers, len(jobs))) as executor:
            return list(executor.map(function, jobs))

    def _average_values(self, determinizer, scenarios, runs, determinizations) -> List[float]:
        jobs = [
            (seed, determinizer, scenarios, runs, self.config.exploration, self.config.time_limit)
            for seed in self._seeds(determinizations)
        ]
        results = np.array(self._map(_opening_values, jobs))
        return list(results.mean(axis=0))

    def pickup(self, hand, top, dealer):
        trump = get_ecard_esuit(top)
        setup = Setup(dealer=dealer, caller=ME, picked_up=True, top=top, trump=trump)
        my_hand = discard_from(hand, top, choose_discard(hand, top)) if dealer == ME else hand

        determinizer = Determinizer(ME, hand, [HAND_SIZE] * PLAYER_COUNT, seen=[top])
        value, = self._average_values(
            determinizer, [(setup, my_hand)], self.config.pickup_runs, self.config.pickup_determinizations
        )

        logger.debug("Pickup %s with dealer %d: average value %.3f", top.name, dealer, value)
        return value >= self.config.pickup_conf

    def call_trump(self, hand, top, dealer=3):
        suits = [esuit for esuit in ESuit if esuit != get_ecard_esuit(top)]
        scenarios = [(Setup(dealer=dealer, caller=ME, picked_up=False, top=top, trump=esuit), hand) for esuit in suits]

        determinizer = Determinizer(ME, hand, [HAND_SIZE] * PLAYER_COUNT, seen=[top])
        values = self._average_values(
            determinizer, scenarios, self.config.call_runs, self.config.call_determinizations
        )

        best = int(np.argmax(values))
        logger.debug("Call values %s", {esuit.name: round(value, 3) for esuit, value in zip(suits, values)})
        if values[best] >= self.config.call_conf:
            return suits[best]
        return None

    def discard(self, hand, top):
        trump = get_ecard_esuit(top)
        cards = list(hand) + [top]
        heuristic = choose_discard(hand, top)

        # Keeping higher trump is never worse, no search needed
        if all(is_trump(card, trump) for card in cards):
            lowest = min(cards, key=lambda card: get_ecard_score(card, trump, trump))
            return discard_from(hand, top, lowest), lowest

        scenarios = [
            (Setup(dealer=ME, caller=ME, picked_up=True, top=top, trump=trump, discard=card), discard_from(hand, top, card))
            for card in cards
        ]
        determinizer = Determinizer(ME, hand, [HAND_SIZE] * PLAYER_COUNT, seen=[top])
        values = self._average_values(
            determinizer, scenarios, self.config.discard_runs, self.config.discard_determinizations
        )

        best = int(np.argmax(values))
        heuristic_value = values[cards.index(heuristic)]
        logger.debug("Discard values %s", {card.name: round(value, 3) for card, value in zip(cards, values)})

        discarded = heuristic
        if values[best] - heuristic_value >= self.config.discard_conf:
            discarded = cards[best]
        return discard_from(hand, top, discarded), discarded

    def go_alone(self, hand, trump, dealer=3, top=None, picked_up=False):
        scenarios = [
            (Setup(dealer=dealer, caller=ME, picked_up=picked_up, top=top, trump=trump, alone=alone), hand)
            for alone in (ME, NOBODY_ALONE)
        ]

        seen, holders = [], {}
        if top is not None:
            if picked_up and dealer != ME:
                holders[top] = dealer
            else:
                seen.append(top)
        determinizer = Determinizer(ME, hand, [HAND_SIZE] * PLAYER_COUNT, seen=seen, holders=holders)
        alone_value, team_value = self._average_values(
            determinizer, scenarios, self.config.alone_runs, self.config.alone_determinizations
        )

        logger.debug("Alone value %.3f, with partner %.3f", alone_value, team_value)
        return alone_value >= self.config.alone_conf and alone_value > team_value

    def play_card(self, state):
        hand = state.hand
        legal = possible(hand, state.played, state.trump)
        if len(legal) == 1:
            return hand[legal[0]]

        jobs = [
            (seed, state, self.config.play_runs, self.config.exploration, self.config.time_limit, self.config.minimax_cards)
            for seed in self._seeds(self.config.play_determinizations)
        ]

        weights = defaultdict(int)
        values = defaultdict(list)
        for statistics in self._map(_play_statistics, jobs):
            for card, (weight, value) in statistics.items():
                weights[card] += weight
                values[card].append(value)

        if not weights:
            # No search got far enough to score a card
            logger.warning("No play statistics, falling back to the rule heuristic")
            return choose_play(state)

        best = max(weights, key=lambda card: (weights[card], np.mean(values[card])))
        logger.debug("Play weights %s", {card.name: weight for card, weight in weights.items()})
        return best
