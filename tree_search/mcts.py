import logging
import math
import time
import weakref
from typing import List, Optional, Tuple

import numpy as np

from .engine import Engine, Move

logger = logging.getLogger(__name__)


class Node:
    """Node in the search tree."""

    __slots__ = ['state', 'action', 'visit_count', 'value', 'children', 'untried', '_parent', '__weakref__']

    def __init__(self, state, parent: Optional['Node'] = None, action=None):
        self.state = state
        self.action = action
        self.visit_count: int = 0
        self.value: float = 0.0
        self.children: List['Node'] = []
        # Successors not yet turned into children (None until first looked at)
        self.untried: Optional[List[Move]] = None
        # Only a back-reference, children are owned by their parent
        self._parent = weakref.ref(parent) if parent is not None else None

    @property
    def parent(self) -> Optional['Node']:
        return self._parent() if self._parent is not None else None

    @property
    def mean_value(self) -> float:
        if self.visit_count == 0:
            return 0.0
        return self.value / self.visit_count

    def ucb_score(self, child: 'Node', c: float) -> float:
        """UCT: Q(child) + c * sqrt(ln(N) / N(child))"""
        if child.visit_count == 0:
            return float('inf')

        exploration = c * math.sqrt(math.log(self.visit_count) / child.visit_count)
        return child.mean_value + exploration

    def select_child_ucb(self, c: float) -> 'Node':
        """Select child with highest UCB score."""
        return max(self.children, key=lambda child: self.ucb_score(child, c))

    def update(self, reward: float):
        self.visit_count += 1
        self.value += reward


class MCTS:
    """
    Monte Carlo tree search with UCT selection and uniformly random playouts.

    Only terminal states are evaluated. Each node's value is kept from the
    point of view of the side choosing at its parent, so selection always
    maximizes; the root keeps the maximizing side's value.
    """

    def __init__(self, engine: Engine, exploration: float = 1.4, rng=None):
        self.engine = engine
        self.exploration = exploration
        self.rng = np.random.default_rng(rng)

    def search(self, state, runs: int, time_limit: Optional[float] = None) -> Node:
        """
        Runs up to runs playouts from a fresh root and returns the root.

        When time_limit (seconds) runs out first the tree built so far is returned.
        """
        root = Node(state)
        deadline = time.monotonic() + time_limit if time_limit is not None else None

        for _ in range(runs):
            if deadline is not None and time.monotonic() >= deadline:
                logger.debug("MCTS stopped after %d of %d runs", root.visit_count, runs)
                break
            self.run_playout(root)

        return root

    def run_playout(self, root: Node) -> float:
        """One selection, expansion, simulation and backpropagation pass."""
        node = self._select(root)
        node = self._expand(node)
        reward = self._simulate(node.state)
        self._backpropagate(node, reward)
        return reward

    def run_playout_debug(self, root: Node) -> List[str]:
        """
        Same as run_playout, but logs and returns what happened at each step
        so a tree can be checked by hand.
        """
        lines = []

        node = self._select(root)
        path = []
        walker = node
        while walker.parent is not None:
            path.append(walker.action)
            walker = walker.parent
        lines.append(f"Selected path: {list(reversed(path))} (untried moves: {len(node.untried)})")

        expanded = self._expand(node)
        if expanded is node:
            lines.append("No expansion (terminal or fully expanded leaf)")
        else:
            lines.append(f"Expanded action {expanded.action}")

        state = expanded.state
        depth = 0
        while not self.engine.is_terminal(state):
            moves = self.engine.successors(state)
            if not moves:
                break
            move = moves[int(self.rng.integers(len(moves)))]
            lines.append(f"Playout step {depth}: action {move.action} of {len(moves)} moves")
            state = move.state
            depth += 1

        reward = self.engine.evaluation(state)
        lines.append(f"Terminal evaluation after {depth} playout steps: {reward}")

        self._backpropagate(expanded, reward)
        for action, visits, mean in self.statistics(root):
            lines.append(f"Root child {action}: visits={visits} mean={mean:.3f}")

        for line in lines:
            logger.info(line)
        return lines

    def _prepare(self, node: Node):
        if node.untried is None:
            if self.engine.is_terminal(node.state):
                node.untried = []
            else:
                node.untried = list(self.engine.successors(node.state))

    def _select(self, node: Node) -> Node:
        while True:
            self._prepare(node)
            if node.untried or not node.children:
                return node
            node = node.select_child_ucb(self.exploration)

    def _expand(self, node: Node) -> Node:
        if not node.untried:
            return node

        move = node.untried.pop(int(self.rng.integers(len(node.untried))))
        child = Node(move.state, parent=node, action=move.action)
        node.children.append(child)
        return child

    def _simulate(self, state) -> float:
        """Random rollout to terminal state."""
        while not self.engine.is_terminal(state):
            moves = self.engine.successors(state)
            if not moves:
                break
            state = moves[int(self.rng.integers(len(moves)))].state

        return self.engine.evaluation(state)

    def _backpropagate(self, node: Node, reward: float):
        while node is not None:
            parent = node.parent
            if parent is None or self.engine.favorable(parent.state):
                node.update(reward)
            else:
                node.update(-reward)
            node = parent

    @staticmethod
    def statistics(root: Node) -> List[Tuple[object, int, float]]:
        return [(child.action, child.visit_count, child.mean_value) for child in root.children]

    @staticmethod
    def best_move(root: Node) -> Move:
        """Most visited child (ties go to the better mean value)."""
        if not root.children:
            return Move(None, root.state)

        best = max(root.children, key=lambda child: (child.visit_count, child.mean_value))
        return Move(best.action, best.state)
