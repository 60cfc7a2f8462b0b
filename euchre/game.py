import numpy as np

from .round import Round

WINNING_POINTS = 10


class Game:
    def __init__(self, players, rng=None):
        self.players = players
        self.rng = np.random.default_rng(rng)
        self.round = Round(players, rng=self.rng)
        self.team_points = [0] * 2
        self.rounds_played = 0

        self.finished = False
        self.winner = None

    def step(self):
        self.round.step()

        if self.round.finished:
            for i in range(2):
                self.team_points[i] += self.round.round_points[i]
            self.rounds_played += 1

            # First to ten points wins
            most_points = max(self.team_points)
            if most_points >= WINNING_POINTS:
                self.finished = True
                self.winner = self.team_points.index(most_points)  # Only one team can get points per round, so can't tie first to ten

            self.round = Round(self.players, last_dealer=self.round.dealer, rng=self.rng)

    def play(self):
        while not self.finished:
            self.step()
        return self.winner

    def get_current_player(self):
        return self.round.get_current_player()
