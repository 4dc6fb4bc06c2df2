from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from dotenv import load_dotenv

from recall.config_loader import load_settings
from recall.content import FileSystemContentSource, IndexPipeline, ScanIOError
from recall.content.scanner import DocumentScannerConfig
from recall.content.tree import NavigationIndex, NavigationTreeConfig
from recall.server.settings import Settings


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    if Path(".env").exists():
        load_dotenv(".env", override=False)
    parser = argparse.ArgumentParser(description="Scan a content root and export the navigation tree as JSON.")
    parser.add_argument("content_root", type=Path, nargs="?", help="Content directory (default: CONTENT_ROOT)")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Where to write the JSON export (default: stdout)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional YAML/TOML/JSON settings file layered over the environment",
    )
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2)")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when any entry was skipped or renamed during the build.",
    )
    return parser.parse_args(argv)


def export_payload(index: NavigationIndex, settings: Settings) -> Dict[str, Any]:
    return {
        "site": {"title": settings.site_title, "description": settings.site_description},
        "navigation": index.root.to_dict(),
        "routes": [list(route) for route in index.routes()],
        "issues": [{"type": type(issue).__name__, "message": str(issue)} for issue in index.issues],
    }


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    settings = load_settings(args.config) if args.config else Settings()
    logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    content_root = args.content_root or settings.content_root
    pipeline = IndexPipeline(
        FileSystemContentSource(content_root),
        scanner_config=DocumentScannerConfig(
            document_extensions=tuple(settings.document_extensions),
            max_depth=settings.max_scan_depth,
        ),
        tree_config=NavigationTreeConfig(
            title_from_heading=settings.title_from_heading,
            root_title=settings.site_title,
        ),
    )
    try:
        index = pipeline.build(generation=1)
    except ScanIOError as exc:
        print(f"Navigation build failed: {exc}", file=sys.stderr)
        return 2

    rendered = json.dumps(export_payload(index, settings), indent=args.indent, ensure_ascii=False)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(rendered + "\n", encoding="utf-8")
        print(
            "Navigation export complete",
            {
                "topics": len(index.routes()),
                "issues": len(index.issues),
                "output": str(args.output),
            },
        )
    else:
        print(rendered)

    if args.strict and index.issues:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
