from dataclasses import replace
from enum import IntEnum
import numpy as np

from .deck import Deck, HAND_SIZE, get_ecard_esuit
from .logic import possible
from .players import EPlayer, NOBODY_ALONE, PLAYER_COUNT, get_clockwise_player, relative_seat
from .state import Setup, State, apply_play, score_tricks

ROUND_STATES = ["FIRST_BIDDING", "DEALER_DISCARD", "SECOND_BIDDING", "DECIDING_GOING_ALONE", "PLAYING"]
RoundEState = IntEnum("RoundEState", [(round_state, index) for index, round_state in enumerate(ROUND_STATES)])
FIRST_BIDDING_STATE =        RoundEState["FIRST_BIDDING"]
DEALER_DISCARD_STATE =       RoundEState["DEALER_DISCARD"]
SECOND_BIDDING_STATE =       RoundEState["SECOND_BIDDING"]
DECIDING_GOING_ALONE_STATE = RoundEState["DECIDING_GOING_ALONE"]
PLAYING_STATE =              RoundEState["PLAYING"]


class Round:
    """
    One deal of Euchre between four Players, indexed by seat.

    step() asks the player whose turn it is for one decision; play() runs
    the deal to the end. If everybody passes twice the round finishes
    without points.
    """

    def __init__(self, players, dealer=None, last_dealer=None, rng=None):
        assert len(players) == PLAYER_COUNT, "Euchre needs four players!"
        self.players = players
        self.rng = np.random.default_rng(rng)

        self.finished = False
        self.trick_wins = [0] * 2
        self.round_points = [0] * 2

        self.deck = Deck(self.rng)
        if dealer is not None:
            self.dealer = EPlayer(dealer)
        elif last_dealer is not None:
            self.dealer = get_clockwise_player(last_dealer)
        else:
            self.dealer = EPlayer(int(self.rng.integers(0, PLAYER_COUNT)))

        self.current_player = get_clockwise_player(self.dealer)

        self.hands = [self.deck.draw_ecards(HAND_SIZE) for _ in range(PLAYER_COUNT)]
        self.upcard = self.deck.draw_ecards(1)[0]
        self.estate = FIRST_BIDDING_STATE

        self.trump_esuit = None
        self.maker = None
        self.picked_up = False
        self.discarded_card = None
        self.alone = NOBODY_ALONE

        self.setup = None
        self.state = None
        self.past_actions = []

    def get_current_player(self):
        return self.current_player

    def relative_dealer(self, eplayer):
        return relative_seat(self.dealer, eplayer)

    def step(self):
        assert not self.finished, "No actions can be taken after the round is finished!"

        player = self.current_player
        agent = self.players[player]

        if self.estate == FIRST_BIDDING_STATE:
            ordered_up = agent.pickup(list(self.hands[player]), self.upcard, self.relative_dealer(player))
            self.past_actions.append((player, self.estate, ordered_up))

            if ordered_up:
                self.trump_esuit = get_ecard_esuit(self.upcard)
                self.maker = player
                self.picked_up = True

                self.current_player = self.dealer
                self.estate = DEALER_DISCARD_STATE
            else:
                if player == self.dealer:
                    self.estate = SECOND_BIDDING_STATE
                self.current_player = get_clockwise_player(player)

        elif self.estate == DEALER_DISCARD_STATE:
            new_hand, discarded = agent.discard(list(self.hands[player]), self.upcard)
            assert discarded in self.hands[player] or discarded == self.upcard, f"{discarded} can't be discarded!"
            assert len(new_hand) == HAND_SIZE, "The dealer must keep five cards!"
            self.past_actions.append((player, self.estate, discarded))

            self.hands[player] = list(new_hand)
            self.discarded_card = discarded

            self.current_player = self.maker
            self.estate = DECIDING_GOING_ALONE_STATE

        elif self.estate == SECOND_BIDDING_STATE:
            esuit = agent.call_trump(list(self.hands[player]), self.upcard, self.relative_dealer(player))
            self.past_actions.append((player, self.estate, esuit))

            if esuit is not None:
                assert esuit != get_ecard_esuit(self.upcard), "The turned down suit can't be called!"
                self.trump_esuit = esuit
                self.maker = player
                self.estate = DECIDING_GOING_ALONE_STATE
            else:
                if player == self.dealer:
                    # If everyone passes for both rounds, the hand is thrown in
                    self.finished = True
                self.current_player = get_clockwise_player(player)

        elif self.estate == DECIDING_GOING_ALONE_STATE:
            going_alone = agent.go_alone(
                list(self.hands[player]), self.trump_esuit, self.relative_dealer(player), top=self.upcard, picked_up=self.picked_up
            )
            self.past_actions.append((player, self.estate, going_alone))
            self.alone = player if going_alone else NOBODY_ALONE

            self.setup = Setup(
                dealer=self.dealer,
                caller=self.maker,
                picked_up=self.picked_up,
                top=self.upcard,
                trump=self.trump_esuit,
                discard=self.discarded_card,
                alone=self.alone,
            )
            self.state = State.opening(self.setup, self.hands)
            self.current_player = EPlayer(self.state.player)
            self.estate = PLAYING_STATE

        elif self.estate == PLAYING_STATE:
            hand = self.state.hands[player]
            ecard = agent.play_card(self.view(player))
            assert ecard in hand, f"{ecard} is not in the hand of {player}!"
            index = hand.index(ecard)
            assert index in possible(hand, self.state.played, self.trump_esuit), f"{ecard} is not a legal play!"
            self.past_actions.append((player, self.estate, ecard))

            self.state = apply_play(self.state, index)
            self.hands = self.state.hands
            self.current_player = EPlayer(self.state.player)

            if self.state.is_complete():
                self.score_round()
                self.finished = True

    def view(self, eplayer):
        """What eplayer knows while playing: their hand, the table and (as dealer) the discard."""
        setup = self.setup if eplayer == self.dealer else replace(self.setup, discard=None)
        return State.view(setup, eplayer, self.state.hands[eplayer], self.state.played, self.state.prior)

    def play(self):
        while not self.finished:
            self.step()
        return self.round_points

    def score_round(self):
        self.trick_wins = self.state.trick_wins()
        self.round_points = score_tricks(self.trick_wins, self.maker, self.alone)
