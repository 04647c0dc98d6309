#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from .client import NewsApiClient
from .config import CATEGORIES, load_config, resolve_api_key, setup_logging
from .controller import SearchController
from .exceptions import ValidationError
from . import query
from .rendering import HtmlRenderer
from .themes import Theme, ThemeStore

logger = logging.getLogger("news_search")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="NewsAPI search client")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--theme",
        choices=[t.value for t in Theme],
        help="Set theme for this run without saving it",
    )
    parser.add_argument("--api-key", help="NewsAPI key (overrides NEWSAPI_KEY and config)")
    parser.add_argument(
        "--html",
        metavar="PATH",
        help="Run one search and write the results page to PATH instead of starting the UI",
    )
    parser.add_argument("--query", default="", help="Search text for --html mode")
    parser.add_argument(
        "--category", default="", choices=("",) + CATEGORIES, help="Category for --html mode"
    )
    parser.add_argument("--page", type=int, default=1, help="Page number for --html mode")
    return parser


def export_html(
    api_key: str,
    path: str,
    text: str = "",
    category: str = "",
    page: int = 1,
    theme: Theme = Theme.LIGHT,
    client: Optional[NewsApiClient] = None,
) -> bool:
    """Run a single search and write the rendered page. Returns False on failure."""
    renderer = HtmlRenderer(theme=theme.value)
    controller = SearchController(client or NewsApiClient(), renderer, api_key)

    state = query.change_category(controller.state, category)
    if text.strip():
        try:
            state = query.submit_search(controller.state, text, category)
        except ValidationError as e:
            renderer.render_error(e.message)
            state = None

    ok = False
    if state is not None:
        page_result = controller.search(replace(state, page=page))
        ok = page_result is not None

    with open(path, "w", encoding="utf-8") as f:
        f.write(renderer.to_html())
    logger.info("Wrote results page to %s", path)
    return ok


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    debug_path = setup_logging(args.debug)
    if debug_path:
        print(f"Debug logging enabled: {debug_path}", file=sys.stderr)

    if args.page < 1:
        parser.error("--page must be 1 or greater")

    config = load_config()
    api_key = resolve_api_key(args.api_key, config)
    theme_override = Theme(args.theme) if args.theme else None

    if args.html:
        if not api_key:
            print("No NewsAPI key configured.", file=sys.stderr)
            return 2
        theme = theme_override or ThemeStore().load()
        ok = export_html(
            api_key, args.html, args.query, args.category, args.page, theme
        )
        if not ok:
            print(f"Search failed; see {args.html} for details.", file=sys.stderr)
        return 0 if ok else 1

    # Imported here so --html mode does not pay for Textual start-up
    from .app import NewsApp

    logger.info("Starting UI (theme override: %s)", theme_override)
    try:
        app = NewsApp(api_key=api_key, theme_override=theme_override)
        app.run()
    except Exception as e:
        logger.exception("Application crashed: %s", e)
        print(f"Application crashed: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
