import argparse
import logging

from agents.config import SmartConfig
from agents.rule import RulePlayer
from agents.smart import SmartPlayer
from euchre.deck import format_ecard
from euchre.text_interface import prompt_card, prompt_hand, prompt_seat


def build_player(name, seed=None, fast=False):
    if name == "rule":
        return RulePlayer()
    config = SmartConfig.fast() if fast else SmartConfig()
    return SmartPlayer(config, rng=seed)


def main(argv=None, input_fn=input):
    parser = argparse.ArgumentParser(description="Decide whether to order up the top card.")
    parser.add_argument("--player", choices=["rule", "smart"], default="rule", help="Decision maker to ask.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the smart player's sampling.")
    parser.add_argument("--fast", action="store_true", help="Use small search budgets.")
    parser.add_argument("--verbose", action="store_true", help="Log the smart player's statistics.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    print("Welcome to the Euchre AI!")
    print(f"This is the {args.player} approach to picking up or not")

    dealer = prompt_seat("Did you(0) or your partner(2) or neither(1/3) deal? ", input_fn)
    top = prompt_card("Enter the top card: ", input_fn)
    hand = prompt_hand("Enter your hand to determine your call.", input_fn)

    player = build_player(args.player, args.seed, args.fast)
    if player.pickup(hand, top, dealer):
        print(f"Pick it up! ({format_ecard(top)})")
        return True

    print("Pass...")
    return False


if __name__ == "__main__":
    main()
