import argparse
import logging

import numpy as np
from tqdm import tqdm

from agents.config import SmartConfig
from agents.rule import RulePlayer
from agents.smart import SmartPlayer
from euchre.round import Round


def compare_agents(agents, teammates=None, round_count=200, seed=None, progress=True):
    if teammates is None:
        teammates = agents

    rng = np.random.default_rng(seed)

    wins = [0] * 2
    losses = [0] * 2
    ties = 0

    total_points = [0] * 2
    total_trick_wins = [0] * 2

    player_agents = [agents[0], agents[1], teammates[0], teammates[1]]

    for _ in tqdm(range(round_count), disable=not progress):
        round = Round(player_agents, rng=rng)
        round.play()

        trick_wins = round.trick_wins
        round_points = round.round_points

        if sum(round_points) == 0:
            ties += 1
        else:
            if round_points[0] > round_points[1]:
                wins[0] += 1
                losses[1] += 1
            else:
                wins[1] += 1
                losses[0] += 1

            total_trick_wins[0] += trick_wins[0]
            total_trick_wins[1] += trick_wins[1]

            total_points[0] += round_points[0]
            total_points[1] += round_points[1]

    return {
        "wins": wins,
        "losses": losses,
        "ties": ties,
        "total_points": total_points,
        "total_trick_wins": total_trick_wins,
    }


def print_details(agents, results, round_count):
    wins, losses, ties = results["wins"], results["losses"], results["ties"]
    total_points, total_trick_wins = results["total_points"], results["total_trick_wins"]

    print(f"\nComparing {agents[0]} and {agents[1]} over {round_count} rounds:")
    for index in range(2):
        prefix = "First" if index == 0 else "Second"
        other_index = 1 - index
        played = max(wins[index] + losses[index], 1)
        print(f"{prefix} Agent ({agents[index]}):")
        print(f"\t> Win Percentage (Ignoring Ties): {wins[index] / played * 100:.2f}")
        print(f"\t> Tie Percentage: {ties / round_count * 100:.2f}")
        print(f"\t> Average Points (IT): {total_points[index] / played:.3f}")
        print(f"\t> Average Points Minus Opponent Points (IT): {(total_points[index] - total_points[other_index]) / played:.3f}")
        print(f"\t> Average Trick Wins (IT): {total_trick_wins[index] / played:.3f}")
        print()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Compare the smart player against the rule player.")
    parser.add_argument("--rounds", type=int, default=100)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--fast", action="store_true", help="Use small search budgets.")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    config = SmartConfig.fast() if args.fast else SmartConfig()
    agents = [SmartPlayer(config, rng=args.seed), RulePlayer()]
    results = compare_agents(agents, round_count=args.rounds, seed=args.seed)
    print_details(agents, results, args.rounds)
