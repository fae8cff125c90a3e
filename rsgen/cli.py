import argparse
import json
import logging
import sys
from pathlib import Path

from .errors import RenderError
from .spec import build_scope


def _read_spec(source: str) -> dict:
    text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("scope description must be a JSON object")
    return data


def cmd_render(args: argparse.Namespace) -> int:
    try:
        scope = build_scope(_read_spec(args.spec))
        code = scope.to_string(indent=" " * args.indent)
    except (OSError, ValueError, KeyError, TypeError, RenderError) as e:
        print(f"rsgen: {e}", file=sys.stderr)
        return 2

    if args.output:
        Path(args.output).write_text(code + "\n", encoding="utf-8")
        print(f"Wrote {args.output}", file=sys.stderr)
    else:
        print(code)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser("rsgen")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(required=True)

    s = sub.add_parser("render", help="Render a JSON scope description to source code")
    s.add_argument("spec", help="Path to the JSON description, or - for stdin")
    s.add_argument("-o", "--output", help="Write to this file instead of stdout")
    s.add_argument("--indent", type=int, default=4, help="Spaces per indentation level")
    s.set_defaults(func=cmd_render)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
