import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from studio_eighty7.adapters.http_client import build_async_client
from studio_eighty7.app_shell.config import ConfigurationError, Settings, validate_ops_rules
from studio_eighty7.components.content import ContentBatch, ContentFetcher
from studio_eighty7.domain.entities import CONTENT_RESOURCES, ContentResource
from studio_eighty7.rules.loader import load_rules
from studio_eighty7.rules.models import Rules

logger = logging.getLogger("cli")


def get_rules(settings: Settings) -> Rules:
    if not Path(settings.rules_path).exists():
        logger.error(f"Rules file {settings.rules_path} not found.")
        sys.exit(1)
    return load_rules(settings.rules_path)


def handle_serve(settings: Settings, args: argparse.Namespace) -> None:
    import uvicorn

    from studio_eighty7.api.main import create_app

    app = create_app(settings)
    uvicorn.run(app, host=args.host, port=args.port or settings.port)


def handle_check_config(settings: Settings, args: argparse.Namespace) -> None:
    rules = get_rules(settings)
    try:
        validate_ops_rules(rules, settings.environ)
    except ConfigurationError as e:
        logger.error(f"FATAL: {e}")
        sys.exit(1)
    print(f"Configuration Validated (rules v{rules.project.rules_version}).")


async def fetch_batch(
    resource: ContentResource, rules: Rules, source_url: str | None, debug: bool
) -> ContentBatch:
    async with build_async_client() as client:
        fetcher = ContentFetcher(client, rules=rules.content, base_url=source_url, debug=debug)
        return await fetcher.fetch(resource)


def handle_fetch(settings: Settings, args: argparse.Namespace) -> None:
    rules = get_rules(settings)
    source_url = args.source or settings.content_source_url
    batch = asyncio.run(fetch_batch(args.resource, rules, source_url, args.debug))

    print(f"# {batch.resource}: {len(batch.items)} items ({batch.provenance})", file=sys.stderr)
    print(json.dumps([item.model_dump(by_alias=True) for item in batch.items], indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Studio Eighty7 backend CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (default: $PORT or 3001)")

    # fetch
    fetch_parser = subparsers.add_parser("fetch", help="Fetch content the way the site does")
    fetch_parser.add_argument("resource", choices=CONTENT_RESOURCES)
    fetch_parser.add_argument("--source", help="Content source URL override")
    fetch_parser.add_argument("--debug", action="store_true", help="Log fallback decisions")

    # check-config
    subparsers.add_parser("check-config", help="Validate rules and required environment")

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    try:
        settings = Settings()
    except ConfigurationError as e:
        logger.error(f"FATAL: {e}")
        sys.exit(1)

    if args.command == "serve":
        handle_serve(settings, args)
    elif args.command == "fetch":
        handle_fetch(settings, args)
    elif args.command == "check-config":
        handle_check_config(settings, args)


if __name__ == "__main__":
    main()
