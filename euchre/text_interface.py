from .deck import format_ecard, parse_ecard, HAND_SIZE
from .round import FIRST_BIDDING_STATE, DEALER_DISCARD_STATE, SECOND_BIDDING_STATE, DECIDING_GOING_ALONE_STATE, PLAYING_STATE


def hand_text(hand):
    return ", ".join(format_ecard(ecard) for ecard in hand)


def text_interface(game):
    if game.finished:
        print("The game is finished!")
        return

    cur_round = game.round
    current_player = cur_round.current_player
    hand = cur_round.hands[current_player]

    print(f"\n--- CURRENT PLAYER: \"{current_player.name}\" ({cur_round.estate.name}) ---\n")

    if cur_round.estate == FIRST_BIDDING_STATE:
        print("> It's the first round of bidding!")
        print(f"\t> Upcard: {format_ecard(cur_round.upcard)}")
        print(f"\t> Hand: {hand_text(hand)}")
        print(f"\t> Dealer: Player {int(cur_round.dealer)}")

    elif cur_round.estate == DEALER_DISCARD_STATE:
        print("> Someone ordered up, so the dealer picks up the upcard and discards!")
        print(f"\t> Upcard: {format_ecard(cur_round.upcard)}")
        print(f"\t> Hand: {hand_text(hand)}")

    elif cur_round.estate == SECOND_BIDDING_STATE:
        print("> It's the second round of bidding! Any suit but the upcard's can be called!")
        print(f"\t> Upcard: {format_ecard(cur_round.upcard)}")
        print(f"\t> Hand: {hand_text(hand)}")
        print(f"\t> Dealer: Player {int(cur_round.dealer)}")

    elif cur_round.estate == DECIDING_GOING_ALONE_STATE:
        print(f"> {cur_round.trump_esuit.name} is trump! Deciding whether to go alone!")
        print(f"\t> Hand: {hand_text(hand)}")

    elif cur_round.estate == PLAYING_STATE:
        print(f"\t> Trump: {cur_round.trump_esuit.name}")
        print(f"\t> Played cards: {hand_text(cur_round.state.played)}")
        print(f"\t> Hand: {hand_text(hand)}")


def prompt_card(message, input_fn=input):
    """Ask until a valid card token is entered."""
    while True:
        token = input_fn(message)
        try:
            return parse_ecard(token)
        except ValueError as error:
            print(f"> {error}, try something like 9H, 10D, JS or AC.")


def prompt_hand(message, input_fn=input, size=HAND_SIZE):
    print(message)
    hand = []
    while len(hand) < size:
        ecard = prompt_card(f"\tCard {len(hand) + 1}: ", input_fn)
        if ecard in hand:
            print(f"> {format_ecard(ecard)} is already in the hand.")
            continue
        hand.append(ecard)
    return hand


def prompt_seat(message, input_fn=input):
    while True:
        token = input_fn(message).strip()
        if token in {"0", "1", "2", "3"}:
            return int(token)
        print("> Enter a seat from 0 to 3.")
