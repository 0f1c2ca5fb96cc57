"""Editing-state tracker — follows the token being typed, edit by edit.

The tracker is fed the same before/after events a text watcher receives:

    #      →  composing-hashtag
    #a     →  notify ("hashtag", "#a")
    #ab    →  notify ("hashtag", "#ab")
    #ab_   →  idle  (space, or any non letter/digit, breaks the token)

State cannot be derived from a text snapshot: it depends on the order
of the edits, so it lives here and nowhere else.
"""

from __future__ import annotations
import logging
from typing import Callable

from .types import HASHTAG, MENTION, SYMBOLS, ChangeEvent

logger = logging.getLogger(__name__)

IDLE = "idle"
COMPOSING_HASHTAG = "composing-hashtag"
COMPOSING_MENTION = "composing-mention"

_MODE_FOR_KIND = {HASHTAG: COMPOSING_HASHTAG, MENTION: COMPOSING_MENTION}
_KIND_FOR_MODE = {COMPOSING_HASHTAG: HASHTAG, COMPOSING_MENTION: MENTION}


def is_token_char(ch: str) -> bool:
    return ch.isalnum()


def previous_boundary(text: str, end: int) -> int:
    """Index of the last non letter/digit char before ``end``, or -1 at buffer start."""
    i = end - 1
    while i >= 0 and is_token_char(text[i]):
        i -= 1
    return i


def find_token_start(text: str, end: int) -> int:
    """Start of the token ending at ``end``, including its ``#``/``@`` if any."""
    boundary = previous_boundary(text, end)
    if boundary >= 0 and text[boundary] in SYMBOLS:
        return boundary
    return boundary + 1


class EditingTracker:
    """idle / composing-hashtag / composing-mention state machine."""

    __slots__ = ("_notify", "mode", "token_start")

    def __init__(self, notify: Callable[[ChangeEvent], None] | None = None) -> None:
        self._notify = notify
        self.mode = IDLE
        self.token_start: int | None = None

    @property
    def composing(self) -> bool:
        return self.mode != IDLE

    @property
    def kind(self) -> str | None:
        """Kind of the token being composed, if any."""
        return _KIND_FOR_MODE.get(self.mode)

    def reset(self) -> None:
        self._set_mode(IDLE, None)

    def before_change(self, text: str, start: int, count: int, after: int) -> None:
        """Pre-mutation pass: ``count`` chars at ``start`` are about to go.

        The character left in front of the edit decides the state; while
        composing, the partial token that survives the deletion is emitted.
        """
        if count <= 0 or start <= 0:
            return
        ch = text[start - 1]
        if ch in SYMBOLS:
            self._set_mode(_MODE_FOR_KIND[SYMBOLS[ch]], start - 1)
        elif not is_token_char(ch):
            self._set_mode(IDLE, None)
        elif self.composing:
            self._emit(text, start)

    def after_change(self, text: str, start: int, before: int, count: int) -> None:
        """Post-mutation pass: ``count`` chars were inserted at ``start``.

        A multi-character insert is handled as one edit: the last non
        letter/digit char inside it decides the state.
        """
        if not text or count <= 0 or start >= len(text):
            return
        end = min(start + count, len(text))
        boundary = previous_boundary(text, end)
        if boundary >= start:
            ch = text[boundary]
            if ch in SYMBOLS:
                self._set_mode(_MODE_FOR_KIND[SYMBOLS[ch]], boundary)
            else:
                self._set_mode(IDLE, None)
                return
            if boundary == end - 1:
                # the symbol itself was just typed
                return
        if self.composing:
            self._emit(text, end)

    def _set_mode(self, mode: str, token_start: int | None) -> None:
        if mode != self.mode:
            logger.debug("editing state: %s -> %s", self.mode, mode)
        self.mode = mode
        self.token_start = token_start

    def _emit(self, text: str, end: int) -> None:
        start = find_token_start(text, end)
        symbol = text[start:start + 1]
        if symbol not in SYMBOLS:
            # the edit left the cursor outside any #/@ token
            self._set_mode(IDLE, None)
            return
        self._set_mode(_MODE_FOR_KIND[SYMBOLS[symbol]], start)
        event = ChangeEvent(kind=_KIND_FOR_MODE[self.mode], text=text[start:end])
        if self._notify is not None:
            self._notify(event)
