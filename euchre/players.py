from enum import IntEnum

PLAYERS = ["Player0_Team0", "Player1_Team1", "Player2_Team0", "Player3_Team1"]  # Order is important
PLAYER_COUNT = len(PLAYERS)
EPlayer = IntEnum('EPlayer', [(player, index) for index, player in enumerate(PLAYERS)])

# Any "alone" seat outside [0, 3] means nobody is going alone
NOBODY_ALONE = -1

def are_eplayers_same_team(eplayer1, eplayer2):
    return eplayer_to_team_index(eplayer1) == eplayer_to_team_index(eplayer2)

def eplayer_to_team_index(eplayer):
    return eplayer % 2

def get_other_team_index(team_index):
    assert team_index == 0 or team_index == 1, "Team index is either 0 or 1!"
    return 1 - team_index  # {0: 1, 1: 0}

def get_clockwise_player(eplayer):
    return EPlayer((eplayer + 1) % 4)

def is_going_alone(alone):
    return 0 <= alone < PLAYER_COUNT

def get_sitting_out(alone):
    """The partner of a player going alone sits the hand out (None when nobody is alone)."""
    if not is_going_alone(alone):
        return None
    return (alone + 2) % PLAYER_COUNT

def relative_seat(eplayer, viewer):
    # Seats as seen by viewer: viewer is 0, their partner is 2
    return (eplayer - viewer) % PLAYER_COUNT
