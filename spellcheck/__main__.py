"""
Spellcheck command line.

    python -m spellcheck check notes.txt --dict words.txt --user-dict mine.txt
    python -m spellcheck serve --dict words.txt --user-dict mine.txt
"""

import argparse
import dataclasses
import json
import sys
from typing import List, Optional

from config_logging import get_config as get_app_config, DictionaryError
from .config import get_config, load_config
from .engine import SpellcheckEngine

EXIT_CLEAN = 0
EXIT_MISSPELLED = 1
EXIT_DICTIONARY = 2
EXIT_CONFIG = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='spellcheck', description='Dictionary spell checker')
    parser.add_argument('--config', help='Path to spellcheck_config.json')
    parser.add_argument('--dict', dest='main_dictionary', help='Main dictionary (required unless configured)')
    parser.add_argument('--user-dict', dest='user_dictionary', help='User dictionary (created on save)')

    sub = parser.add_subparsers(dest='command', required=True)

    check = sub.add_parser('check', help='Check a file, or stdin with -')
    check.add_argument('path', help="Text file to check, or '-' for stdin")
    check.add_argument('--learn', action='append', default=[], metavar='WORD',
                       help='Add WORD to the user dictionary and save it')
    check.add_argument('--ignore', action='append', default=[], metavar='WORD',
                       help='Ignore WORD for this run')
    check.add_argument('--no-suggest', action='store_true', help='Skip suggestions')
    check.add_argument('--json', action='store_true', help='Print results as JSON')

    serve = sub.add_parser('serve', help='Run the HTTP API')
    serve.add_argument('--host', help='Bind address')
    serve.add_argument('--port', type=int, help='Bind port')

    return parser


def _read_text(path: str) -> str:
    if path == '-':
        return sys.stdin.read()
    with open(path, 'r', encoding='utf-8', errors='replace') as f:
        return f.read()


def run_check(engine: SpellcheckEngine, args, user_dictionary: Optional[str]) -> int:
    for word in args.learn:
        engine.learn(word)
    if args.learn and user_dictionary:
        engine.save_user_dictionary(user_dictionary)
    for word in args.ignore:
        engine.ignore(word)

    misspelled = engine.check(_read_text(args.path))
    suggest = engine.suggestions_enabled and not args.no_suggest

    results = []
    for entry in misspelled:
        item = entry.to_dict()
        if suggest:
            item['suggestions'] = engine.suggestions(entry.word)
        results.append(item)

    if args.json:
        print(json.dumps({'count': len(results), 'misspelled': results}, indent=2))
    else:
        for item in results:
            line = f"{item['start']}-{item['end']}: {item['word']}"
            if item.get('suggestions'):
                line += f" -> {', '.join(item['suggestions'])}"
            print(line)

    return EXIT_MISSPELLED if results else EXIT_CLEAN


def run_serve(engine: SpellcheckEngine, args, user_dictionary: Optional[str]) -> int:
    from .routes import create_app

    app_config = get_app_config()
    valid, errors = app_config.validate()
    if not valid:
        for error in errors:
            print(f"error: {error}", file=sys.stderr)
        return EXIT_CONFIG

    app = create_app(engine, user_dictionary)
    app.run(
        host=args.host or app_config.host,
        port=args.port or app_config.port,
        debug=app_config.debug,
    )
    return EXIT_CLEAN


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # flags apply to a copy; the shared config stays as loaded
    if args.config:
        config = load_config(args.config)
    else:
        config = dataclasses.replace(get_config())
    if args.main_dictionary:
        config.main_dictionary = args.main_dictionary
    if args.user_dictionary:
        config.user_dictionary = args.user_dictionary

    try:
        engine = SpellcheckEngine.from_config(config)
    except DictionaryError as e:
        print(f"error: {e.message}: {config.main_dictionary}", file=sys.stderr)
        return EXIT_DICTIONARY

    with engine:
        if args.command == 'serve':
            return run_serve(engine, args, config.user_dictionary)
        return run_check(engine, args, config.user_dictionary)


if __name__ == "__main__":
    sys.exit(main())
