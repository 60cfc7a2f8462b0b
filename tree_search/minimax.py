import math
from typing import Tuple

from .engine import Engine, Move


def minimax(state, engine: Engine) -> Tuple[float, Move]:
    """
    Minimax adversarial search with alpha-beta pruning.

    Returns the value of state under optimal play by both sides and the move
    that achieves it. Terminal states return a move with no action. Only
    practical on small trees, e.g. the last couple of tricks of a hand.
    """
    return _minimax(state, engine, -math.inf, math.inf)


def _minimax(state, engine: Engine, alpha: float, beta: float) -> Tuple[float, Move]:
    if engine.is_terminal(state):
        return engine.evaluation(state), Move(None, state)

    moves = engine.successors(state)
    if not moves:
        return engine.evaluation(state), Move(None, state)

    fav = engine.favorable(state)
    extreme_value = -math.inf if fav else math.inf
    extreme_move = moves[0]

    for move in moves:
        value, _ = _minimax(move.state, engine, alpha, beta)

        # Strict comparison so ties keep the earliest move
        if fav:
            if value > extreme_value:
                extreme_value = value
                extreme_move = move
            alpha = max(alpha, value)
        else:
            if value < extreme_value:
                extreme_value = value
                extreme_move = move
            beta = min(beta, value)

        if beta < alpha:
            break

    return extreme_value, extreme_move
