from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from dotenv import load_dotenv

from genapi.adapters.mock_adapter import MockAdapter
from genapi.config import load_settings
from genapi.document import load_document
from genapi.errors import GenApiError
from genapi.service import GenApi
from genapi.utils.io import read_text, write_json


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Answer an OpenAPI operation with a language model")
    parser.add_argument("--spec", required=True, help="OpenAPI document (YAML or JSON)")
    parser.add_argument("--path", required=True)
    parser.add_argument("--method", default="post")
    parser.add_argument("--data", default="{}", help="Request payload as JSON, or @file")
    parser.add_argument("--mode", choices=["mock", "live"], default="live")
    parser.add_argument("--model", default=None)
    parser.add_argument("--max-output-tokens", type=int, default=None)
    parser.add_argument("--validate-requests", action="store_true")
    parser.add_argument("--out", default=None, help="Also write the result to this JSON file")
    return parser


def _read_payload(value: str) -> Any:
    if value.startswith("@"):
        value = read_text(Path(value[1:]))
    return json.loads(value)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv(Path.cwd() / ".env")
    settings = load_settings()
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    try:
        payload = _read_payload(args.data)
    except (OSError, json.JSONDecodeError) as exc:
        print(f"error: could not read --data: {exc}", file=sys.stderr)
        return 1

    try:
        genapi = GenApi(
            load_document(Path(args.spec)),
            args.model or settings.model,
            settings.api_key,
            args.max_output_tokens or settings.max_tokens,
            adapter=MockAdapter() if args.mode == "mock" else None,
            validate_requests=args.validate_requests or settings.validate_requests,
        )
        result = asyncio.run(genapi.process_request(args.path, args.method, payload))
    except (GenApiError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    if args.out:
        write_json(Path(args.out), result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
