"""findit-build: compile the symbol database from Unicode/CLDR sources."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from findit.build.compiler import build_database, write_database
from findit.build.config import BuildConfig
from findit.build.errors import BuildError

logger = logging.getLogger("findit.build")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="findit-build",
        description="Build the Find It! symbol database from emoji-test.txt and CLDR annotations.",
    )
    parser.add_argument("--cache-dir", type=Path, help="Directory for downloaded sources")
    parser.add_argument("--output", type=Path, help="Where to write symbols.json")
    parser.add_argument("--locales", help="Comma-separated CLDR locales (default: en,vi)")
    parser.add_argument("--spacy-model", help="spaCy model with word vectors")
    parser.add_argument("--offline", action="store_true", help="Use cached sources only")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> BuildConfig:
    config = BuildConfig()
    if args.cache_dir is not None:
        config.cache_dir = args.cache_dir
    if args.output is not None:
        config.output_path = args.output
    if args.locales:
        config.locales = tuple(loc.strip() for loc in args.locales.split(",") if loc.strip())
    if args.spacy_model:
        config.spacy_model = args.spacy_model
    if args.offline:
        config.offline = True
    return config


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = config_from_args(args)
    logger.info("Build config: %s", config.to_dict())

    try:
        database = build_database(config)
        write_database(database, config.output_path)
    except BuildError as exc:
        logger.error("Build failed: %s", exc)
        return 1

    public = database.public_categories()
    logger.info(
        "Done: %d symbols, %d public categories, %d names, %d suggestions",
        len(database),
        len(public),
        len(database.name_to_symbol),
        len(database.shortest_names),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
