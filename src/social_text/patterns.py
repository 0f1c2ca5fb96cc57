"""Token patterns — one compiled regex per kind.

Hashtags and mentions default to a symbol followed by word characters;
hyperlinks default to a web-URL pattern (optional scheme and user-info,
dotted host or IPv4 address, optional port and path).  Any of them can be
replaced by a caller-supplied pattern.
"""

from __future__ import annotations
import re

from .types import HASHTAG, HYPERLINK, MENTION, TokenMatch

DEFAULT_HASHTAG = re.compile(r"#(\w+)")
DEFAULT_MENTION = re.compile(r"@(\w+)")

_SCHEME = r"(?:https?|rtsp|ftp)://"
_USERINFO_CHAR = r"(?:[a-zA-Z0-9$\-_.+!*'(),;?&=]|%[0-9a-fA-F]{2})"
_USERINFO = rf"(?:{_USERINFO_CHAR}{{1,64}}(?::{_USERINFO_CHAR}{{1,25}})?@)?"
_LABEL = r"[^\W_](?:[\w\-]{0,61}[^\W_])?"
_HOST = (
    rf"(?:(?:{_LABEL}\.)+[^\W\d_]{{2,63}}"
    r"|(?:\d{1,3}\.){3}\d{1,3})"
)
_PORT = r"(?::\d{1,5})?"
_PATH = r"(?:[/?#](?:[\w;/?:@&=#~\-.+!*'(),$]|%[0-9a-fA-F]{2})*)?"

DEFAULT_HYPERLINK = re.compile(
    rf"(?:{_SCHEME}{_USERINFO})?{_HOST}{_PORT}{_PATH}(?:\b|$)"
)

DEFAULT_PATTERNS: dict[str, re.Pattern] = {
    HASHTAG: DEFAULT_HASHTAG,
    MENTION: DEFAULT_MENTION,
    HYPERLINK: DEFAULT_HYPERLINK,
}


class PatternSet:
    """Exactly one pattern per kind; empty overrides fall back to the default."""

    __slots__ = ("_patterns",)

    def __init__(self, overrides: dict[str, re.Pattern | str | None] | None = None) -> None:
        self._patterns: dict[str, re.Pattern] = dict(DEFAULT_PATTERNS)
        for kind, pattern in (overrides or {}).items():
            self.set(kind, pattern)

    def __getitem__(self, kind: str) -> re.Pattern:
        return self._patterns[kind]

    def set(self, kind: str, pattern: re.Pattern | str | None) -> bool:
        """Replace the pattern for a kind.  Returns True if it changed."""
        if kind not in self._patterns:
            raise KeyError(f"unknown token kind: {kind!r}")
        if pattern is None or (isinstance(pattern, str) and not pattern):
            compiled = DEFAULT_PATTERNS[kind]
        elif isinstance(pattern, str):
            compiled = re.compile(pattern)
        else:
            compiled = pattern
        if compiled == self._patterns[kind]:
            return False
        self._patterns[kind] = compiled
        return True

    def reset(self, kind: str) -> bool:
        return self.set(kind, None)

    def is_default(self, kind: str) -> bool:
        return self._patterns[kind] == DEFAULT_PATTERNS[kind]


def scan(text: str, pattern: re.Pattern, kind: str) -> list[TokenMatch]:
    """Scan text left to right.  Returns non-overlapping, non-empty matches."""
    matches: list[TokenMatch] = []
    for m in pattern.finditer(text):
        if m.end() == m.start():
            continue
        matches.append(TokenMatch(
            kind=kind,
            start=m.start(),
            end=m.end(),
            text=m.group(),
            value=_logical_value(m, kind),
        ))
    return matches


def extract(text: str, pattern: re.Pattern, kind: str) -> list[str]:
    """Logical token values in order of appearance."""
    return [m.value for m in scan(text, pattern, kind)]


def _logical_value(m: re.Match, kind: str) -> str:
    # hashtag and mention drop their symbol via group 1, when the pattern has one
    if kind != HYPERLINK and m.re.groups >= 1 and m.group(1) is not None:
        return m.group(1)
    return m.group()
