from collections import Counter
from typing import List, Optional, Tuple

from euchre.deck import ECard, ESuit, ERank, ACE, get_ecard_esuit, get_ecard_erank, get_same_color_esuit, get_adjusted_esuit, get_ecard_score, is_trump, is_right_bower
from euchre.logic import possible, beats, winner_index, seat_order
from euchre.players import are_eplayers_same_team, eplayer_to_team_index

from .base import Player


# Card value rankings for trump suit
# Right bower (Jack of trump) is most valuable, left bower (Jack of same color) is second
TRUMP_CARD_VALUES = {
    ERank["JACK"]: 6,    # Right bower (if trump suit)
    ERank["ACE"]: 5,
    ERank["KING"]: 4,
    ERank["QUEEN"]: 3,
    ERank["10"]: 2,
    ERank["9"]: 1,
}

LEFT_BOWER_VALUE = 5.5  # Left bower (Jack of same color suit) value
OFF_SUIT_ACE_VALUE = 1.0

# Thresholds for bidding decisions
ORDER_UP_THRESHOLD_DEALER = 7.0      # Dealer has advantage (gets to pick up card)
ORDER_UP_THRESHOLD_NON_DEALER = 10.0  # Non-dealer needs stronger hand
CALL_SUIT_THRESHOLD = 5.0            # Threshold for calling suit in second round
GO_ALONE_THRESHOLD = 20.0            # Threshold for going alone


def card_value_for_trump(card: ECard, trump_suit: ESuit) -> float:
    card_suit = get_ecard_esuit(card)
    card_rank = get_ecard_erank(card)

    # Right bower (Jack of trump suit)
    if card_suit == trump_suit and card_rank == ERank["JACK"]:
        return TRUMP_CARD_VALUES[ERank["JACK"]]

    # Left bower (Jack of same color suit)
    elif card_suit == get_same_color_esuit(trump_suit) and card_rank == ERank["JACK"]:
        return LEFT_BOWER_VALUE

    # Other trump cards
    elif card_suit == trump_suit:
        return TRUMP_CARD_VALUES[card_rank]

    # Off-suit aces usually take a trick
    elif card_rank == ACE:
        return OFF_SUIT_ACE_VALUE

    return 0.0


def evaluate_hand_for_trump(hand: List[ECard], trump_suit: ESuit, include_upcard: Optional[ECard] = None) -> float:
    """
    Evaluate the strength of a hand for a given trump suit.

    Args:
        hand: List of cards in hand
        trump_suit: The trump suit to evaluate for
        include_upcard: If dealer, include this card as part of hand evaluation

    Returns:
        Float score representing hand strength (higher is better)
    """
    score = sum(card_value_for_trump(card, trump_suit) for card in hand)

    if include_upcard is not None:
        score += card_value_for_trump(include_upcard, trump_suit)

    return score


def should_order_up(hand: List[ECard], upcard: ECard, dealer: int) -> bool:
    """
    Decide whether to order up the face-up card in first bidding round.

    Args:
        hand: Current hand
        upcard: The face-up card
        dealer: Seat of the dealer relative to the player (0 is the player, 2 the partner)

    Returns:
        True if should order up, False if should pass
    """
    trump_suit = get_ecard_esuit(upcard)

    if dealer == 0:
        # Dealer gets to pick up the card, so evaluate hand including upcard
        score = evaluate_hand_for_trump(hand, trump_suit, include_upcard=upcard)
        return score >= ORDER_UP_THRESHOLD_DEALER

    score = evaluate_hand_for_trump(hand, trump_suit, include_upcard=None)
    if not are_eplayers_same_team(dealer, 0):
        # Penalize slightly since the opposing dealer gets the upcard
        score -= 1.0
    return score >= ORDER_UP_THRESHOLD_NON_DEALER


def choose_best_suit(hand: List[ECard], excluded_suit: Optional[ESuit] = None) -> Tuple[ESuit, float]:
    """
    Choose the best suit to call in second bidding round.

    Args:
        hand: Current hand
        excluded_suit: Suit that cannot be called (typically upcard suit that was turned down)

    Returns:
        Tuple of (best_suit, score)
    """
    best_suit = None
    best_score = -1.0

    for suit in ESuit:
        # Skip excluded suit
        if excluded_suit is not None and suit == excluded_suit:
            continue

        score = evaluate_hand_for_trump(hand, suit, include_upcard=None)

        if score > best_score:
            best_score = score
            best_suit = suit

    return best_suit, best_score


def should_call_suit_second_round(hand: List[ECard], upcard: ECard, dealer: int) -> Optional[ESuit]:
    """
    Decide whether to call a suit in second bidding round.

    Returns:
        The suit to call, or None to pass
    """
    best_suit, best_score = choose_best_suit(hand, excluded_suit=get_ecard_esuit(upcard))

    # The dealer is the last chance before a redeal, so always name something
    if dealer == 0 or best_score >= CALL_SUIT_THRESHOLD:
        return best_suit
    return None


def should_go_alone(hand: List[ECard], trump_suit: ESuit) -> bool:
    score = evaluate_hand_for_trump(hand, trump_suit, include_upcard=None)
    return score >= GO_ALONE_THRESHOLD


def choose_discard(hand: List[ECard], top: ECard) -> ECard:
    """
    Card the dealer drops after picking up top.

    All trump: the lowest trump. Otherwise, with trump in hand, short-suit by
    dropping the lowest singleton off-suit card that isn't an ace; failing
    that (or without trump), the lowest off-suit card.
    """
    trump_suit = get_ecard_esuit(top)
    cards = list(hand) + [top]

    off_suit = [card for card in cards if not is_trump(card, trump_suit)]
    if not off_suit:
        return min(cards, key=lambda card: get_ecard_score(card, trump_suit, trump_suit))

    if any(is_trump(card, trump_suit) for card in hand):
        suit_counts = Counter(get_ecard_esuit(card) for card in off_suit)
        singletons = [card for card in off_suit if suit_counts[get_ecard_esuit(card)] == 1 and get_ecard_erank(card) != ACE]
        if singletons:
            off_suit = singletons

    return min(off_suit, key=get_ecard_erank)


def discard_from(hand: List[ECard], top: ECard, discarded: ECard) -> List[ECard]:
    new_hand = list(hand) + [top]
    new_hand.remove(discarded)
    return new_hand


def choose_play(state) -> ECard:
    """
    Fixed card play heuristic.

    Leading: the makers lead trump from the right bower down, otherwise an
    off-suit ace, otherwise the lowest card. Following: when the partner is
    winning or the trick can't be won, the lowest legal card; otherwise the
    lowest card that wins.
    """
    hand = state.hand
    trump = state.trump
    legal = [hand[i] for i in possible(hand, state.played, trump)]

    if not state.played:
        is_maker = are_eplayers_same_team(state.player, state.setup.caller)
        if is_maker and any(is_right_bower(card, trump) for card in legal):
            return max(legal, key=lambda card: get_ecard_score(card, trump, trump))

        aces = [card for card in legal if get_ecard_erank(card) == ACE and not is_trump(card, trump)]
        if aces:
            return aces[0]
        return min(legal, key=lambda card: (is_trump(card, trump), get_ecard_erank(card)))

    led_suit = get_adjusted_esuit(state.played[0], trump)
    lowest = lambda card: (get_ecard_score(card, trump, led_suit), get_ecard_erank(card))

    high_index = winner_index(state.played, trump)
    high_seat = seat_order(state.leader(), state.alone)[high_index]
    if eplayer_to_team_index(high_seat) == eplayer_to_team_index(state.player):
        return min(legal, key=lowest)

    winning = [card for card in legal if not beats(state.played[high_index], card, trump)]
    if winning:
        return min(winning, key=lowest)
    return min(legal, key=lowest)


class RulePlayer(Player):
    """Baseline player that only uses the fixed heuristics above."""

    def pickup(self, hand, top, dealer):
        return should_order_up(hand, top, dealer)

    def call_trump(self, hand, top, dealer=3):
        return should_call_suit_second_round(hand, top, dealer)

    def discard(self, hand, top):
        discarded = choose_discard(hand, top)
        return discard_from(hand, top, discarded), discarded

    def go_alone(self, hand, trump, dealer=3, top=None, picked_up=False):
        return should_go_alone(hand, trump)

    def play_card(self, state):
        return choose_play(state)
