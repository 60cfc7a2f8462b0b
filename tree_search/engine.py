from abc import ABC, abstractmethod
from typing import Any, List, NamedTuple, Optional


class Move(NamedTuple):
    """An edge of the search tree: the action taken and the state it leads to."""
    action: Optional[Any]
    state: Any


class Engine(ABC):
    """
    Game logic the search engines run on.

    Scores are never negated: evaluation() is always from the maximizing
    side's point of view and favorable() tells the engines whose turn it is.
    """

    @abstractmethod
    def successors(self, state) -> List[Move]:
        """Every legal move from state, each paired with the state it reaches."""

    @abstractmethod
    def is_terminal(self, state) -> bool:
        ...

    @abstractmethod
    def evaluation(self, state) -> float:
        """Score of a terminal state for the maximizing side."""

    @abstractmethod
    def favorable(self, state) -> bool:
        """Whether the side to move at state is the maximizing side."""
