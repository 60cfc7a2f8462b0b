from enum import IntEnum
import numpy as np
from itertools import product

# Define IntEnums for each card, each suit, and each rank used in Euchre
SUITS = ["SPADES", "CLUBS", "HEARTS", "DIAMONDS"]  # Order is important for binary operations
RANKS = ["9", "10", "JACK", "QUEEN", "KING", "ACE"]  # Order is important for int operations
card_enum_strings = [(suit + "_" + rank, index) for index, (suit, rank) in enumerate(product(SUITS, RANKS))]
DECK_SIZE = len(card_enum_strings)
HAND_SIZE = 5
ECard = IntEnum('ECard', card_enum_strings)
ESuit = IntEnum('ESuit', [(suit, index) for index, suit in enumerate(SUITS)])
ERank = IntEnum('ERank', [(rank, index) for index, rank in enumerate(RANKS)])

JACK = ERank["JACK"]
ACE = ERank["ACE"]

# Short tokens used for text input and output, e.g. "10H" or "JS"
SUIT_TOKENS = {"S": ESuit["SPADES"], "C": ESuit["CLUBS"], "H": ESuit["HEARTS"], "D": ESuit["DIAMONDS"]}
RANK_TOKENS = {"9": ERank["9"], "10": ERank["10"], "T": ERank["10"], "J": JACK, "Q": ERank["QUEEN"], "K": ERank["KING"], "A": ACE}
esuit_to_token = {esuit: token for token, esuit in SUIT_TOKENS.items()}
erank_to_token = {ERank["9"]: "9", ERank["10"]: "10", JACK: "J", ERank["QUEEN"]: "Q", ERank["KING"]: "K", ACE: "A"}


def get_ecard_esuit(ecard):
    assert ecard is not None, "ecard is None!"
    return ESuit(int((ecard) / len(RANKS)))

def get_ecard_erank(ecard):
    assert ecard is not None, "ecard is None!"
    return ERank(ecard % len(RANKS))

def make_ecard(esuit, erank):
    return ECard(int(esuit) * len(RANKS) + int(erank))

def get_same_color_esuit(esuit):
    # Gets the other suit with the same color.
    # (Assumes 4 suits and same colors are next to each other)
    return ESuit(esuit ^ 1)

def is_right_bower(ecard, trump_esuit):
    return trump_esuit is not None and get_ecard_erank(ecard) == JACK and get_ecard_esuit(ecard) == trump_esuit

def is_left_bower(ecard, trump_esuit):
    return trump_esuit is not None and get_ecard_erank(ecard) == JACK and get_ecard_esuit(ecard) == get_same_color_esuit(trump_esuit)

def get_adjusted_esuit(ecard, trump_esuit):
    # The left bower counts as a trump card, everything else keeps its printed suit
    if is_left_bower(ecard, trump_esuit):
        return trump_esuit
    return get_ecard_esuit(ecard)

def is_trump(ecard, trump_esuit):
    return trump_esuit is not None and get_adjusted_esuit(ecard, trump_esuit) == trump_esuit


def get_ecard_score(ecard, trump_esuit, led_esuit):
    card_esuit = get_ecard_esuit(ecard)
    card_erank = get_ecard_erank(ecard)

    max_led_score = len(RANKS)
    max_trump_score = max_led_score + len(RANKS)

    # Score bowers
    if is_right_bower(ecard, trump_esuit):
        return max_trump_score + 2
    elif is_left_bower(ecard, trump_esuit):
        return max_trump_score + 1

    # Score non-bower trump suit cards
    if card_esuit == trump_esuit:
        return max_led_score + card_erank

    # Score non-bower, non-trump, led suit cards
    elif card_esuit == led_esuit:
        return int(card_erank) + 1

    # Non-bower, non-trump, and non-led can't win
    return 0


def parse_ecard(token):
    """
    Parse a short card token such as "9H", "10d", "TS" or "js" into an ECard.

    Raises ValueError for anything that is not one of the 24 Euchre cards.
    """
    text = token.strip().upper()
    if len(text) < 2 or text[-1] not in SUIT_TOKENS or text[:-1] not in RANK_TOKENS:
        raise ValueError(f"Invalid card token: {token!r}")
    return make_ecard(SUIT_TOKENS[text[-1]], RANK_TOKENS[text[:-1]])

def format_ecard(ecard):
    return erank_to_token[get_ecard_erank(ecard)] + esuit_to_token[get_ecard_esuit(ecard)]

def parse_esuit(token):
    text = token.strip().upper()
    if text in SUIT_TOKENS:
        return SUIT_TOKENS[text]
    if text in ESuit.__members__:
        return ESuit[text]
    raise ValueError(f"Invalid suit token: {token!r}")


class Deck:
    def __init__(self, rng=None):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.cards = np.ones((DECK_SIZE, 1))
        self.card_count = DECK_SIZE

    def draw_ecards(self, draw_count=1):
        random_cards = self.rng.choice(np.nonzero(self.cards)[0], size=draw_count, replace=False)
        self.cards[random_cards, 0] = 0
        self.card_count -= draw_count
        return [ECard(int(index)) for index in random_cards]
