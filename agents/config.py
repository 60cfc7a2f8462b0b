from dataclasses import dataclass, fields
from typing import Optional


@dataclass(frozen=True)
class SmartConfig:
    """
    Search budgets and confidence thresholds of a SmartPlayer.

    Every decision samples `*_determinizations` deals of the hidden cards and
    runs `*_runs` MCTS playouts on each. The `*_conf` thresholds are average
    net points (searching team minus opponents) a bid must reach before the
    player commits to it; discard_conf is the margin a discard must win by
    to override the heuristic discard.
    """

    pickup_conf: float = 0.6
    call_conf: float = 0.6
    alone_conf: float = 1.2
    discard_conf: float = 0.25

    pickup_runs: int = 5000
    pickup_determinizations: int = 50
    call_runs: int = 5000
    call_determinizations: int = 50
    play_runs: int = 5000
    play_determinizations: int = 50
    alone_runs: int = 5000
    alone_determinizations: int = 50
    discard_runs: int = 1000
    discard_determinizations: int = 20

    exploration: float = 1.4
    # Switch to exact minimax once the player holds this many cards or fewer
    minimax_cards: int = 2
    # Worker processes for determinizations (None: one per CPU, 1: no pool)
    workers: Optional[int] = None
    # Seconds allowed for one determinization's search
    time_limit: Optional[float] = None

    def __post_init__(self):
        for config_field in fields(self):
            if config_field.name.endswith("_runs") or config_field.name.endswith("_determinizations"):
                if getattr(self, config_field.name) < 1:
                    raise ValueError(f"{config_field.name} must be at least 1")
        if self.workers is not None and self.workers < 1:
            raise ValueError("workers must be at least 1")
        if self.minimax_cards < 0:
            raise ValueError("minimax_cards can't be negative")
        if self.time_limit is not None and self.time_limit <= 0:
            raise ValueError("time_limit must be positive")

    @classmethod
    def fast(cls, **overrides):
        """Small budgets for interactive use and tests."""
        budgets = dict(
            pickup_runs=200, pickup_determinizations=8,
            call_runs=200, call_determinizations=8,
            play_runs=200, play_determinizations=8,
            alone_runs=200, alone_determinizations=8,
            discard_runs=100, discard_determinizations=4,
            workers=1,
        )
        budgets.update(overrides)
        return cls(**budgets)
