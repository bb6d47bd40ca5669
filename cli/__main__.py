"""Entry point for the mindforge CLI."""

import argparse
import logging
import os
import sys

import requests

from core.progress import ProgressStore
from server.file_storage import FileStorage
from cli.api_client import MindforgeAPIClient
from cli.console import ConsoleUI


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Mindforge - cognitive training')
    parser.add_argument(
        '--server',
        default=os.environ.get('MINDFORGE_SERVER'),
        help='Server URL to mirror results to (default: $MINDFORGE_SERVER, none)'
    )
    parser.add_argument(
        '--user',
        default='default',
        help='User ID (default: default)'
    )
    parser.add_argument(
        '--state-dir',
        default=None,
        help='Directory for local progress (default: $MINDFORGE_STATE_DIR or ~/.local/share/mindforge)'
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    commands = parser.add_subparsers(dest='command')
    play = commands.add_parser('play', help='Play a game')
    play.add_argument('game_id', help='Game id, e.g. simple-reaction or number-series')
    play.add_argument('--practice', type=int, default=0, help='Unscored practice rounds first')
    commands.add_parser('status', help='Show progress summary')
    commands.add_parser('today', help="Show today's training plan")
    commands.add_parser('achievements', help='List achievements')
    commands.add_parser('reset', help='Erase all local progress')
    commands.add_parser('remote', help='Show the progress stored on --server')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    # Results are mirrored only when a server session is configured
    sink = None
    if args.server:
        sink = MindforgeAPIClient(base_url=args.server, user_id=args.user, background=False)

    store = ProgressStore(storage=FileStorage(args.state_dir), user_id=args.user, sink=sink)
    store.load()
    ui = ConsoleUI(store)

    try:
        if args.command == 'play':
            ui.play(args.game_id, practice_rounds=args.practice)
        elif args.command == 'today':
            ui.print_today()
        elif args.command == 'achievements':
            ui.print_achievements()
        elif args.command == 'remote':
            if sink is None:
                print('No server configured. Use --server or set MINDFORGE_SERVER.')
                sys.exit(1)
            try:
                ui.print_remote(sink)
            except requests.RequestException as e:
                print(f'Could not reach {sink.base_url}: {e}')
                sys.exit(1)
        elif args.command == 'reset':
            if ui.ask('Erase all progress? [y/N] ').strip().lower() == 'y':
                store.reset_progress()
                print('Progress reset.')
        else:
            ui.print_status()
    except (KeyboardInterrupt, EOFError):
        print('\nGoodbye!')
        sys.exit(0)


if __name__ == '__main__':
    main()
