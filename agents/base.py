"""Capabilities every Euchre player offers to the round driver."""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from euchre.deck import ECard, ESuit


class Player(ABC):
    """
    Decisions a Euchre player makes during one hand.

    Bidding seats are relative to the player deciding: the player is seat 0,
    the partner seat 2 and the opponents seats 1 and 3. None of these
    methods modify their arguments.
    """

    @abstractmethod
    def pickup(self, hand: List[ECard], top: ECard, dealer: int) -> bool:
        """First bidding round: order the dealer to pick up top (True) or pass."""

    @abstractmethod
    def call_trump(self, hand: List[ECard], top: ECard, dealer: int = 3) -> Optional[ESuit]:
        """Second bidding round: a trump suit other than top's, or None to pass."""

    @abstractmethod
    def discard(self, hand: List[ECard], top: ECard) -> Tuple[List[ECard], ECard]:
        """As dealer, take top into hand and return the new hand and the discarded card."""

    @abstractmethod
    def go_alone(self, hand: List[ECard], trump: ESuit, dealer: int = 3, top: Optional[ECard] = None, picked_up: bool = False) -> bool:
        """
        Whether to play without the partner after calling trump. top and
        picked_up say whether the dealer took the top card into their hand.
        """

    @abstractmethod
    def play_card(self, state) -> ECard:
        """Card to play from state.hand, where state is this player's view of the hand."""

    def __str__(self):
        return self.__class__.__name__
