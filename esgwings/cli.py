"""
ESG Wings CLI - Command-line interface for the engine.

Usage:
    esgwings demo [--players N] [--rounds R] [--seed S]   Run a demo game
    esgwings catalog                                      List the cards
    esgwings validate                                     Validate the catalog
    esgwings serve [--host H] [--port P]                  Run the HTTP API
"""

import argparse
import logging
import sys

from .engine_core.metrics import calculate_score
from .engine_core.setup import initialize_game
from .engine_core.state import GameMode
from .games.esg_wings import create_esg_wings_catalog
from .session import DemoLoop
from .spec_schema import describe_effect, validate_catalog


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="ESG Wings - Airline sustainability strategy card game engine",
        prog="esgwings",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Run a demo game to completion")
    demo_parser.add_argument("--players", type=int, default=2, help="Number of airlines (2-4)")
    demo_parser.add_argument("--rounds", type=int, default=5, help="Number of rounds")
    demo_parser.add_argument("--seed", type=int, default=None, help="Shuffle seed")
    demo_parser.add_argument("--quiet", "-q", action="store_true", help="Only print final scores")

    # Catalog command
    subparsers.add_parser("catalog", help="List the card catalog")

    # Validate command
    subparsers.add_parser("validate", help="Validate the built-in catalog")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "demo":
        cmd_demo(args)
    elif args.command == "catalog":
        cmd_catalog(args)
    elif args.command == "validate":
        cmd_validate(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_demo(args):
    """Run an unattended demo game and print the outcome."""
    catalog = create_esg_wings_catalog()
    try:
        state = initialize_game(
            catalog, args.players, args.rounds, GameMode.DEMO, seed=args.seed
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    state = DemoLoop(catalog=catalog).run_to_completion(state)

    print(f"Game {state.game_id} (seed {state.demo_seed})")
    if not args.quiet:
        print("\nLog:")
        for entry in state.logs:
            card = f" {entry.card_id}" if entry.card_id else ""
            diff = f" {entry.diff}" if entry.diff else ""
            print(f"  [R{entry.round} {entry.phase.value}] {entry.actor}: {entry.action}{card}{diff}")

    print("\nFinal scores:")
    for player in state.players:
        metrics = ", ".join(f"{k} {v}" for k, v in player.metrics.as_dict().items())
        print(f"  {player.player_id} {player.name}: {calculate_score(player.metrics)} ({metrics})")

    print(f"\nWinner: {state.winner_id}")
    print(f"Reason: {state.end_reason}")


def cmd_catalog(args):
    """List every card in the built-in catalog."""
    catalog = create_esg_wings_catalog()
    print(f"Catalog: {catalog.catalog_id} ({len(catalog)} cards)")
    for card in catalog.values():
        effects = ", ".join(describe_effect(e) for e in card.effects)
        print(f"  {card.id:<10} {card.card_type.value:<10} cost {card.cost}  {card.name}: {effects}")


def cmd_validate(args):
    """Validate the built-in catalog."""
    result = validate_catalog(create_esg_wings_catalog())

    for w in result.warnings:
        print(f"Warning: {w}")
    for e in result.errors:
        print(f"Error: {e}")

    if not result.valid:
        sys.exit(1)
    print("Catalog is valid")


def cmd_serve(args):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("esgwings.api.app:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
