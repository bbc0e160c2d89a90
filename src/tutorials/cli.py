"""Command-line entry point for the Tutorials server."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Optional, Sequence


def cmd_serve(args: argparse.Namespace) -> None:
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn is required. Install with: pip install tutorials[server]", file=sys.stderr)
        sys.exit(1)

    from tutorials.server.config import settings

    uvicorn.run(
        "tutorials.server.app:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        log_level=settings.log_level.lower(),
    )


def cmd_openapi(args: argparse.Namespace) -> None:
    from tutorials.server.app import app

    document = json.dumps(app.openapi(), indent=2, ensure_ascii=False)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(document)
            f.write("\n")
        print(f"Wrote OpenAPI document to {args.output}")
    else:
        print(document)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tutorials",
        description="Tutorials — in-memory tutorial catalogue REST server",
    )
    sub = parser.add_subparsers(dest="command")

    # serve
    p = sub.add_parser("serve", help="Run the HTTP server")
    p.add_argument("--host", default=None, help="Bind address (or HOST)")
    p.add_argument("--port", type=int, default=None, help="Bind port (or PORT)")

    # openapi
    p = sub.add_parser("openapi", help="Write the OpenAPI document as JSON")
    p.add_argument("-o", "--output", default=None, help="Output file path")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    handlers = {
        "serve": cmd_serve,
        "openapi": cmd_openapi,
    }
    handlers[args.command](args)


if __name__ == "__main__":
    main()
