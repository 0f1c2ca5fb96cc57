"""CLI interface for social-text.

Usage:
    # Extract tokens (stdin: text, stdout: JSON lists)
    echo 'check #Foo and @Bar at http://example.com' | social-text extract

    # Annotations a widget would render (stdin: text, stdout: JSON array)
    echo 'see #docs' | social-text annotate --disable hyperlink

    # Replay typing char by char (stdin: text, stdout: JSON lines of
    # live hashtag/mention changes); \\b or DEL in the input is a backspace
    printf '#ab\\bc' | social-text type
"""

from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import Any

from .config import create_social_text, load_config, load_from_yaml, parse_flags
from .engine import describe
from .host import TextBuffer
from .social import SocialText
from .types import HASHTAG, MENTION

_BACKSPACE = {"\b", "\x7f"}


def _load(args: argparse.Namespace) -> dict[str, Any]:
    cfg = load_from_yaml(args.config) if args.config else load_config({})
    if args.disable:
        cfg["flags"] &= ~parse_flags(args.disable)
    return cfg


def _build(args: argparse.Namespace, text: str = "") -> tuple[TextBuffer, SocialText]:
    buf = TextBuffer(text)
    return buf, create_social_text(buf, _load(args))


def _read_stdin() -> str:
    return sys.stdin.read().rstrip("\n")


def cmd_extract(args: argparse.Namespace) -> None:
    """Print hashtags, mentions and hyperlinks found in stdin."""
    _, social = _build(args, _read_stdin())
    output = {
        "hashtags": social.hashtags,
        "mentions": social.mentions,
        "hyperlinks": social.hyperlinks,
    }
    json.dump(output, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")


def cmd_annotate(args: argparse.Namespace) -> None:
    """Print the annotations applied to stdin's text."""
    _, social = _build(args, _read_stdin())
    json.dump([describe(a) for a in social.annotations], sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")


def cmd_type(args: argparse.Namespace) -> None:
    """Type stdin into an empty buffer, printing each live change."""
    buf, social = _build(args)

    def on_changed(kind: str):
        def listener(view: SocialText, text: str) -> None:
            json.dump({"kind": kind, "text": text}, sys.stdout, ensure_ascii=False)
            sys.stdout.write("\n")
        return listener

    social.set_on_changed_listener(HASHTAG, on_changed(HASHTAG))
    social.set_on_changed_listener(MENTION, on_changed(MENTION))

    for ch in _read_stdin():
        if ch in _BACKSPACE:
            buf.backspace()
        else:
            buf.append(ch)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="social-text",
        description="Hashtag, mention and hyperlink spans for editable text",
    )
    parser.add_argument("--config", default=None, help="YAML config file")
    parser.add_argument("--disable", default="", help="Comma-separated kinds to disable")
    parser.add_argument("--debug", action="store_true", help="Debug logging on stderr")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("extract", help="Extract tokens (text stdin)")
    sub.add_parser("annotate", help="Print annotations (text stdin)")
    sub.add_parser("type", help="Replay typing and print live changes (text stdin)")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    cmds = {
        "extract": cmd_extract,
        "annotate": cmd_annotate,
        "type": cmd_type,
    }
    cmds[args.command](args)


if __name__ == "__main__":
    main()
