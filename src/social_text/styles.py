"""State-dependent colors for spans.

A ``ColorStates`` maps view states ("pressed", "focused", ...) to ARGB
colors and always carries a default.  The engine only ever needs the
default color; the state lookups exist for hosts that render pressed or
focused spans differently.
"""

from __future__ import annotations

from .types import HASHTAG, HYPERLINK, MENTION, Style


def parse_color(value: int | str) -> int:
    """Parse ``0xAARRGGBB`` ints or ``#RGB`` / ``#RRGGBB`` / ``#AARRGGBB`` strings."""
    if isinstance(value, bool):
        raise ValueError(f"invalid color: {value!r}")
    if isinstance(value, int):
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValueError(f"color out of range: {value:#x}")
        return value
    if not isinstance(value, str) or not value.startswith("#"):
        raise ValueError(f"invalid color: {value!r}")
    digits = value[1:]
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    if len(digits) == 6:
        digits = "ff" + digits
    if len(digits) != 8:
        raise ValueError(f"invalid color: {value!r}")
    try:
        return int(digits, 16)
    except ValueError:
        raise ValueError(f"invalid color: {value!r}") from None


class ColorStates:
    """Immutable state → color mapping with a default."""

    __slots__ = ("_default", "_states")

    def __init__(self, default: int | str, states: dict[str, int | str] | None = None) -> None:
        self._default = parse_color(default)
        self._states = {k: parse_color(v) for k, v in (states or {}).items()}

    @classmethod
    def value_of(cls, color: int | str) -> ColorStates:
        """Single-color descriptor."""
        return cls(color)

    @property
    def default_color(self) -> int:
        return self._default

    def resolve_default_color(self) -> int:
        return self._default

    def color_for(self, *states: str) -> int:
        """First color whose state is active, else the default."""
        for state in states:
            if state in self._states:
                return self._states[state]
        return self._default

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColorStates):
            return NotImplemented
        return self._default == other._default and self._states == other._states

    def __hash__(self) -> int:
        return hash((self._default, tuple(sorted(self._states.items()))))

    def __repr__(self) -> str:
        return f"ColorStates(default={self._default:#010x}, states={self._states!r})"


DEFAULT_COLORS: dict[str, ColorStates] = {
    HASHTAG: ColorStates("#1DA1F2"),
    MENTION: ColorStates("#1DA1F2"),
    HYPERLINK: ColorStates("#0B57D0"),
}


def style_for(kind: str, colors: ColorStates) -> Style:
    """Hyperlinks are underlined; hashtags and mentions are color only."""
    return Style(color=colors.resolve_default_color(), underline=kind == HYPERLINK)
