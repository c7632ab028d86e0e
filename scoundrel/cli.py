"""
Scoundrel CLI - Command-line interface for the engine.

Usage:
    scoundrel play [--seed N]                       Play in the terminal
    scoundrel simulate [--games N] [--policy NAME]  Let a bot play
"""

import argparse
import sys

from .config import EngineConfig, default_seed
from .logging_utils import setup_logging

HELP_TEXT = """Commands:
  p N   play the card in slot N (potion, weapon, or fight with weapon)
  e N   equip the weapon in slot N
  b N   fight the monster in slot N bare-handed
  s     skip (run from) this room
  n     go to the next room
  q     quit"""


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Scoundrel - a dungeon crawl with a deck of cards",
        prog="scoundrel",
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument("--seed", type=int, default=None, help="Shuffle seed")

    from .bots import POLICY_NAMES
    sim_parser = subparsers.add_parser("simulate", help="Let a bot play")
    sim_parser.add_argument("--games", type=int, default=10, help="Number of games")
    sim_parser.add_argument("--policy", choices=POLICY_NAMES, default="greedy")
    sim_parser.add_argument("--seed", type=int, default=None, help="First shuffle seed")
    sim_parser.add_argument("--verbose", "-v", action="store_true", help="Print every turn")

    args = parser.parse_args(argv)

    if args.log_level:
        setup_logging(args.log_level)
    else:
        setup_logging()

    if args.command == "play":
        return cmd_play(args)
    elif args.command == "simulate":
        return cmd_simulate(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_play(args):
    """Interactive terminal game."""
    from .api import GameService
    from .session import SessionManager

    seed = args.seed if args.seed is not None else default_seed()
    service = GameService(SessionManager(EngineConfig.from_env()))
    session = service.create_session(seed=seed)
    session_id = session.session_id

    print("You enter the dungeon.")
    print(HELP_TEXT)
    state = session.state
    while True:
        print_state(state)
        if not state.game_active:
            break

        try:
            line = input("> ").strip().lower()
        except EOFError:
            break
        if not line:
            continue
        if line == "q":
            break
        if line in ("h", "?"):
            print(HELP_TEXT)
            continue

        response = run_command(service, session_id, line)
        if response is None:
            print("Unknown command. Type ? for help.")
            continue
        if not response.success:
            print(f"Can't do that: {response.error}")
            continue

        for event in response.outcome.events:
            print(f"  {event}")
        state = response.state

    service.end_session(session_id)
    return 0


def run_command(service, session_id, line):
    """Map one line of input to a service call. Returns None if not understood."""
    parts = line.split()
    verb = parts[0]
    if verb == "s":
        return service.skip_room(session_id)
    if verb == "n":
        return service.advance_room(session_id)

    if len(parts) != 2 or not parts[1].isdigit():
        return None
    slot = int(parts[1])
    if verb == "p":
        return service.play_card(session_id, slot)
    if verb == "e":
        return service.equip_weapon(session_id, slot)
    if verb == "b":
        return service.fight_bare_handed(session_id, slot)
    return None


def print_state(state):
    """Print a GameStateResponse."""
    print()
    print(f"Room {state.current_round + 1}  Health {state.player_health}/{state.max_health}  "
          f"Deck {state.deck_count}  Discard {state.discard_count}")
    if state.current_weapon:
        stack = ", ".join(c.card_id for c in state.weapon_stack) or "nothing yet"
        print(f"Weapon: {state.current_weapon.card_id} (defeated: {stack})")
    else:
        print("Weapon: none")
    for slot, card in enumerate(state.room_cards):
        print(f"  [{slot}] {card.rank} of {card.suit} ({card.role} {card.value})")
    print(f"Played {state.cards_played_this_room}/3 this room"
          + (", potion used" if state.potion_used_this_room else ""))
    if state.result:
        print(f"\n*** {state.result.upper()} *** Score: {state.score}")


def cmd_simulate(args):
    """Run bot games and print a summary."""
    from .bots import create_policy
    from .session import SessionManager, GameLoop

    first_seed = args.seed if args.seed is not None else default_seed()
    manager = SessionManager(EngineConfig.from_env())
    wins = 0
    scores = []

    for i in range(args.games):
        seed = None if first_seed is None else first_seed + i
        session = manager.create_session(seed=seed)
        policy = create_policy(args.policy, seed=seed)
        report = GameLoop(session, policy).run()
        manager.end_session(session.session_id)

        if args.verbose:
            for turn in report.turns:
                print(f"  {turn.turn:4d} {turn.action:22s} hp={turn.health_after:2d}  "
                      + "; ".join(turn.events))

        outcome = report.result.value if report.result else report.loop_state.value
        print(f"Game {i + 1}: {outcome}, score {report.score}, "
              f"rooms {report.rooms_entered}, turns {len(report.turns)}")
        wins += report.won
        scores.append(report.score)

    if scores:
        print(f"\n{args.policy}: {wins}/{args.games} won, "
              f"average score {sum(scores) / len(scores):.1f}")
    return 0


if __name__ == "__main__":
    main()
