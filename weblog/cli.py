from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .app import configure_logging, create_app
from .config import WeblogConfig, load_config
from .dispatch import dispatch
from .repository import ContentRootError, PostRepository


def build_config(args: argparse.Namespace, data: dict) -> WeblogConfig:
    config_path = Path(args.config).resolve()
    overrides = {
        key: value
        for key, value in {
            "weblog_dir": args.weblog_dir,
            "domain": args.domain,
            "line_width": args.line_width,
            "prefix_length": args.prefix_length,
        }.items()
        if value is not None
    }
    return WeblogConfig.from_mapping({**data, **overrides}, base_dir=config_path.parent)


def render_command(args: argparse.Namespace, config: WeblogConfig) -> int:
    request_config = config.for_request(args.url, mobile=args.mobile)
    repository = PostRepository(config.weblog_dir)
    try:
        result = dispatch(args.go, repository, request_config)
    except ContentRootError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    if result.location is not None:
        print(f"{result.status} -> {result.location}")
        return 0
    sys.stdout.write(result.body)
    return 0 if result.status == 200 else 1


def serve_command(args: argparse.Namespace, config: WeblogConfig) -> int:
    if not config.weblog_dir.is_dir():
        print(f"Posts directory not found: {config.weblog_dir}", file=sys.stderr)
        return 1
    configure_logging(args.debug)
    app = create_app(config)
    app.run(args.host, args.port, debug=args.debug)
    return 0


def main(argv: list[str] | None = None) -> int:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="weblog.toml",
        help="Path to weblog config file (TOML/YAML/INI/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args(argv)
    data = load_config(Path(pre_args.config))

    parser = argparse.ArgumentParser(description="Plain-text weblog.")
    parser.add_argument("--version", action="version", version=f"Weblog v{__version__}")
    parser.add_argument("--config", default=pre_args.config, help="Path to weblog config file (TOML/YAML/INI/JSON).")
    parser.add_argument("--weblog-dir", default=None, help="Directory containing .txt posts.")
    parser.add_argument("--domain", default=None, help="Domain used to build absolute links.")
    parser.add_argument("--line-width", default=None, type=int, help="Width of a text line in columns.")
    parser.add_argument("--prefix-length", default=None, type=int, help="Indentation of paragraph lines.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    render_parser = subparsers.add_parser("render", help="Print the page for a request path.")
    render_parser.add_argument("go", nargs="?", default="", help="Request path, e.g. '', 'rss', '2024/01', 'my-post'.")
    render_parser.add_argument(
        "--mobile",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Render the narrow layout served to mobile clients.",
    )
    render_parser.add_argument("--url", default=None, help="Base URL override, e.g. https://example.org.")

    serve_parser = subparsers.add_parser("serve", help="Run the development HTTP server.")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", default=8000, type=int, help="Port to listen on.")
    serve_parser.add_argument(
        "--debug",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Enable Flask debug mode and debug logging.",
    )

    args = parser.parse_args(argv)
    config = build_config(args, data)
    if args.command == "render":
        return render_command(args, config)
    return serve_command(args, config)
