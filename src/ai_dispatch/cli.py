"""Command line entrypoint."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from dotenv import load_dotenv

from .config import environment_snapshot
from .formatting import JSON, RAW, SUMMARY, render
from .llm.dispatcher import dispatch
from .llm.providers import PROFILES
from .llm.types import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, DispatchError, DispatchRequest

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ai-dispatch",
        description="Send one prompt to an AI text-generation API and print the reply.",
    )
    parser.add_argument("--provider", "-p", help=f"One of: {', '.join(PROFILES)}")
    parser.add_argument("--prompt", help="Prompt text, or '-' to read from stdin")
    parser.add_argument("--api-key", help="API key (overrides config file and environment)")
    parser.add_argument("--model", help="Model id (defaults per provider)")
    parser.add_argument("--max-tokens", type=int, default=DEFAULT_MAX_TOKENS)
    parser.add_argument("--temperature", type=float, default=DEFAULT_TEMPERATURE)
    parser.add_argument("--system-prompt", help="Optional system instruction")
    parser.add_argument("--endpoint", help="Endpoint URL (required for Azure)")
    parser.add_argument("--config-file", help="JSON/YAML file keyed by provider name")
    parser.add_argument("--list-providers", action="store_true", help="Print provider defaults and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    output = parser.add_mutually_exclusive_group()
    output.add_argument("--raw", dest="output", action="store_const", const=RAW, help="Print only the response text")
    output.add_argument("--json", dest="output", action="store_const", const=JSON, help="Print the full result as JSON")
    parser.set_defaults(output=SUMMARY)
    return parser


def _list_providers() -> str:
    rows = []
    for name, profile in PROFILES.items():
        endpoint = profile.default_endpoint or "(endpoint required)"
        rows.append(f"{name:<12} {profile.env_var:<22} {profile.default_model:<28} {endpoint}")
    return "\n".join(rows)


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list_providers:
        print(_list_providers())
        return EXIT_OK
    if not args.provider or args.prompt is None:
        parser.error("--provider and --prompt are required")

    prompt = sys.stdin.read() if args.prompt == "-" else args.prompt
    request = DispatchRequest(
        provider=args.provider,
        prompt=prompt,
        api_key=args.api_key,
        model=args.model,
        max_tokens=args.max_tokens,
        temperature=args.temperature,
        system_prompt=args.system_prompt,
        endpoint=args.endpoint,
        config_file=args.config_file,
    )

    try:
        result = dispatch(request, env=environment_snapshot())
    except DispatchError as exc:
        print(f"{exc.error_type}: {exc}", file=sys.stderr)
        return EXIT_USAGE

    if args.output == RAW and not result.ok:
        print(f"{result.error_type}: {result.error}", file=sys.stderr)
        return EXIT_FAILED
    print(render(result, args.output))
    return EXIT_OK if result.ok else EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
