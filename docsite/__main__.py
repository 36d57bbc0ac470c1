"""Command line entry point.

``python -m docsite check`` runs one parse cycle and reports ``OK`` or the
error, which is what content authors run before publishing.
``python -m docsite serve`` starts the HTTP server.
"""

import argparse
import sys
from typing import List, Optional

from docsite.config import Settings
from docsite.errors import ContentError
from docsite.services.content import build_model


def _check(settings: Settings) -> int:
    try:
        model = build_model(settings.content_dir, settings.legacy_suffixes, settings.module_suffixes)
    except ContentError as exc:
        print(f"ERR: {exc}")
        return 1

    report = model.report
    for dangling in report.dangling:
        print(f"WARN: {dangling.route} extends unknown type '{dangling.extends}'")
    for route in report.unresolved:
        print(f"WARN: {route} is part of an extension cycle")
    print("OK")
    return 0


def _serve(host: str, port: int) -> int:
    import uvicorn

    uvicorn.run("docsite.main:app", host=host, port=port)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="docsite", description="Documentation content server.")
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Parse the content directory and report errors.")
    check.add_argument("--content-dir", help="Content directory (default: $DOCSITE_CONTENT_DIR or /www).")

    serve = sub.add_parser("serve", help="Run the documentation server.")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=80)

    args = parser.parse_args(argv)

    if args.command == "check":
        settings = Settings.from_env()
        if args.content_dir:
            settings = settings.model_copy(update={"content_dir": args.content_dir})
        return _check(settings)

    return _serve(args.host, args.port)


if __name__ == "__main__":
    sys.exit(main())
