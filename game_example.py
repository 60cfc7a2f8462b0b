import argparse

from agents.config import SmartConfig
from agents.rule import RulePlayer
from agents.smart import SmartPlayer
from euchre.game import Game
from euchre.text_interface import text_interface
from euchre.round import PLAYING_STATE

# Play a game between smart players (team 0) and rule players (team 1)
# (Players 0 and 2 are on team 0 and players 1 and 3 are on team 1)
parser = argparse.ArgumentParser()
parser.add_argument("--seed", type=int, default=None)
args = parser.parse_args()

smart = SmartPlayer(SmartConfig.fast(), rng=args.seed)
rule = RulePlayer()
game = Game([smart, rule, smart, rule], rng=args.seed)

while not game.finished:
    text_interface(game)

    old_state = game.round.estate
    old_team_points = game.team_points.copy()
    old_action_count = len(game.round.past_actions)
    current_round = game.round

    game.step()

    if len(current_round.past_actions) > old_action_count:
        player, _, decision = current_round.past_actions[-1]
        print(f"\n> {player.name} chose {decision}!")

    if current_round.finished and old_state == PLAYING_STATE:
        print(f"\n> Round finished! Team 0 got {game.team_points[0] - old_team_points[0]} points and team 1 got {game.team_points[1] - old_team_points[1]} points!")

print(f"\n\nThe winning team is team {game.winner}! The scores were team 0 with {game.team_points[0]} points and team 1 with {game.team_points[1]} points!")
