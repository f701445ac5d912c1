"""
Stag CLI - Command-line interface for the engine.

Usage:
    stag play Alice Bob [--seed N]     Hot-seat game in the terminal
    stag play Alice Bob --auto         Let random legal moves play it out
    stag cards                         Show the deck composition
"""

import argparse
import json
import random
import sys

from .logging_config import setup_logging
from .game.cards import CardType, DISPLAY_NAMES, card_display_name
from .game.rules import DEFAULT_RULES
from .game.setup import LobbyPlayer, setup_game
from .engine_core.action_generator import legal_actions
from .engine_core.reducer import Reducer
from .api.view import project


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Stag - rules engine for the Stag ante card game",
        prog="stag",
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    play_parser = subparsers.add_parser("play", help="Play a hot-seat game")
    play_parser.add_argument("names", nargs="+", help="Player names, in seat order")
    play_parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible deal")
    play_parser.add_argument("--auto", action="store_true", help="Play random legal moves")
    play_parser.add_argument("--max-actions", type=int, default=2000, help="Stop an auto game after N actions")

    subparsers.add_parser("cards", help="Show the deck composition")

    args = parser.parse_args(argv)
    setup_logging(level=args.log_level or "WARNING")

    if args.command == "play":
        cmd_play(args)
    elif args.command == "cards":
        cmd_cards(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_cards(args):
    """Print the deck composition and stag discard costs."""
    rules = DEFAULT_RULES
    print(f"Deck: {rules.deck_size} cards")
    for type_name, value, copies in rules.deck_composition:
        card_type = CardType(type_name)
        label = DISPLAY_NAMES[card_type]
        if card_type == CardType.STAG:
            cost = rules.discard_cost_for(value)
            print(f"  {copies} x {label} ({value})  discard cost {cost}")
        elif card_type == CardType.HUNT:
            print(f"  {copies} x {label} ({value})")
        else:
            print(f"  {copies} x {label}")


def cmd_play(args):
    """Run a game in the terminal, one seat at a time."""
    lobby = [
        LobbyPlayer(id=f"p{i}", name=name, seat_index=i)
        for i, name in enumerate(args.names)
    ]
    try:
        state = setup_game(lobby, seed=args.seed)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    reducer = Reducer()
    rng = random.Random(args.seed)
    for line in state.log:
        print(line.msg)

    actions_taken = 0
    while not state.is_over:
        pending = state.pending_action
        seat = pending.responder_seat if pending is not None else state.current_seat
        player = state.get_player_by_seat(seat)
        options = legal_actions(state, seat)
        if not options:
            print(f"No legal actions for {player.name}; stopping.")
            sys.exit(1)

        if args.auto:
            if actions_taken >= args.max_actions:
                print(f"Stopped after {actions_taken} actions.")
                return
            chosen = rng.choice(options)
            name, payload = chosen.name, chosen.payload
        else:
            _print_view(state, player.id)
            picked = _prompt(options)
            if picked is None:
                print("Bye.")
                return
            name, payload = picked

        result = reducer.apply(state, player.id, name, payload)
        if not result.success:
            print(f"  ! {result.error} [{result.error_code.value}]")
            continue
        state = result.new_state
        actions_taken += 1
        for msg in result.state_changes:
            print(msg)

    print(f"Game over ({state.win_reason.value}).")


def _print_view(state, player_id):
    view = project(state, player_id)
    print()
    print(f"== {view.current_player_name}'s turn, {view.turn_phase} ==")
    if view.pending_action:
        print(f"Waiting on: {view.pending_action['type']}")
    print("Kingdom: " + (", ".join(card_display_name(c) for c in view.kingdom) or "(empty)"))
    for p in view.players:
        marker = "*" if p.is_me else " "
        status = " (eliminated)" if p.eliminated else ""
        territory = ", ".join(card_display_name(c) for c in p.territory) or "-"
        print(
            f" {marker} {p.name}{status}: {p.hand_count} cards, "
            f"{p.contributions_made} contributed, {p.contributions_remaining} left, "
            f"territory: {territory}"
        )
    print(f"Your hand (limit {view.my_hand_limit}): " + ", ".join(view.my_hand))
    print(f"Deck: {view.deck_count}  Discard: {len(view.discard)}")


def _prompt(options):
    """
    Ask for a move.

    Accepts an option number, or "<actionName> <json payload>" for a move
    not in the suggested list. Returns (name, payload) or None to quit.
    """
    for i, action in enumerate(options):
        payload = json.dumps(action.payload) if action.payload else ""
        print(f"  [{i}] {action.name} {payload}")
    while True:
        try:
            raw = input("> ").strip()
        except EOFError:
            return None
        if raw in {"q", "quit"}:
            return None
        if raw.isdigit() and int(raw) < len(options):
            chosen = options[int(raw)]
            return chosen.name, chosen.payload
        name, _, rest = raw.partition(" ")
        try:
            payload = json.loads(rest) if rest else {}
        except json.JSONDecodeError as e:
            print(f"  ! Bad JSON: {e}")
            continue
        if name:
            return name, payload


if __name__ == "__main__":
    main()
