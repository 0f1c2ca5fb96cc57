"""Core types."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Union

# Token kinds, in the fixed order every recompute pass walks them
HASHTAG = "hashtag"
MENTION = "mention"
HYPERLINK = "hyperlink"
KINDS: tuple[str, ...] = (HASHTAG, MENTION, HYPERLINK)

# Symbol that opens a composable token → its kind
SYMBOLS: dict[str, str] = {"#": HASHTAG, "@": MENTION}

FLAG_HASHTAG = 1
FLAG_MENTION = 2
FLAG_HYPERLINK = 4
FLAG_ALL = FLAG_HASHTAG | FLAG_MENTION | FLAG_HYPERLINK
FLAGS: dict[str, int] = {
    HASHTAG: FLAG_HASHTAG,
    MENTION: FLAG_MENTION,
    HYPERLINK: FLAG_HYPERLINK,
}

# listener(view, text)
OnClickListener = Callable[[Any, str], None]
OnChangedListener = Callable[[Any, str], None]


@dataclass(frozen=True, slots=True)
class TokenMatch:
    """A single pattern match in the text."""
    kind: str
    start: int
    end: int
    text: str              # full matched text, symbol included
    value: str             # logical token: "#Foo" → "Foo", URLs unchanged


@dataclass(frozen=True, slots=True)
class Style:
    """Resolved render style of an annotation."""
    color: int             # ARGB
    underline: bool = False


@dataclass(frozen=True, slots=True)
class ClickAction:
    kind: str
    text: str
    listener: OnClickListener


@dataclass(frozen=True, slots=True)
class Colored:
    """Plain colored span."""
    style: Style


@dataclass(frozen=True, slots=True)
class Clickable:
    """Colored span that can be activated."""
    style: Style
    action: ClickAction


Span = Union[Colored, Clickable]


@dataclass(frozen=True, slots=True)
class Annotation:
    """A range-tagged span applied to the host over [start, end)."""
    kind: str
    start: int
    end: int
    text: str
    span: Span

    @property
    def clickable(self) -> bool:
        return isinstance(self.span, Clickable)


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """Live partial token under construction, e.g. ("hashtag", "#ab")."""
    kind: str
    text: str
