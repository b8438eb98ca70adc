from __future__ import annotations

import argparse
import json
from pathlib import Path
import sys

from loguru import logger
import requests

from app.bootstrap import bootstrap
from infrastructure.hooks import HookRegistry
from infrastructure.logging import init_logging
from infrastructure.settings import JsonSettings, ProviderConfig
from infrastructure.unsplash_client import UnsplashClient

BASE_DIR = Path(__file__).parent


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Browse or search Unsplash as media records.")
    parser.add_argument("--search", "-s", default=None, help="free-text search term")
    parser.add_argument("--page", type=int, default=1)
    parser.add_argument("--per-page", type=int, default=30)
    parser.add_argument("--order", choices=("asc", "desc"), default="desc")
    parser.add_argument("--settings", default=str(BASE_DIR / "settings.json"))
    parser.add_argument("--log-dir", default=None)
    parser.add_argument("--track", metavar="PHOTO_ID", default=None, help="report a download")
    return parser


def main(
    argv: list[str] | None = None,
    session: requests.Session | None = None,
    tracker_session: requests.Session | None = None,
) -> int:
    args = _build_parser().parse_args(argv)
    settings = JsonSettings(args.settings)
    init_logging(args.log_dir or settings.get("logging.dir"), settings.get("logging.level", "INFO"))

    config = ProviderConfig.from_settings(settings)
    client = UnsplashClient(config, session=session, tracker_session=tracker_session)
    hooks = HookRegistry()
    plugin = bootstrap(hooks, settings, config=config, client=client)
    hooks.do_action("plugins_loaded")
    provider = hooks.apply_filters("amf/provider", None)
    if not plugin.config.api_key:
        logger.warning("No Unsplash API key configured; requests will be rejected")

    try:
        if args.track:
            hooks.do_action("amf/inserted_attachment", None, {}, {"unsplash_id": args.track})
            return 0

        query = {
            "paged": args.page,
            "posts_per_page": args.per_page,
            "orderby": "date",
            "order": args.order,
        }
        if args.search:
            query["s"] = args.search
        items = provider.query(query)
        json.dump([item.to_dict() for item in items], sys.stdout, indent=2)
        sys.stdout.write("\n")
        return 0
    finally:
        provider.client.close()


if __name__ == "__main__":
    raise SystemExit(main())
