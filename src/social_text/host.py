"""Annotation host — the mutable styled text the spans live on.

``AnnotationHost`` is the boundary a UI widget adapter implements.
``TextBuffer`` is an in-memory host used by the CLI and tests:

    buf = TextBuffer("hello ")
    social = SocialText(buf)
    buf.type_text("#world")
    [a.text for a in buf.annotations]     # ["#world"]
"""

from __future__ import annotations
from typing import Protocol, runtime_checkable

from .types import Annotation, Clickable


class NotAnnotatableError(RuntimeError):
    """Raised when the hosted text cannot carry range annotations."""


@runtime_checkable
class AnnotationHost(Protocol):
    """What the engine needs from the text buffer."""

    def get_text(self) -> str:
        ...

    def is_annotatable(self) -> bool:
        ...

    def clear_annotations(self) -> None:
        ...

    def add_annotation(self, annotation: Annotation) -> None:
        ...

    def enable_activation(self) -> None:
        ...


class TextWatcher(Protocol):
    """Receives every mutation, before and after it is applied."""

    def before_text_changed(self, text: str, start: int, count: int, after: int) -> None:
        """``count`` chars at ``start`` are about to be replaced by ``after`` chars."""
        ...

    def on_text_changed(self, text: str, start: int, before: int, count: int) -> None:
        """``before`` chars at ``start`` were replaced by ``count`` chars."""
        ...


class TextBuffer:
    """In-memory annotation host with watcher callbacks."""

    __slots__ = ("_text", "_annotations", "_watchers", "spannable", "activation_enabled")

    def __init__(self, text: str = "", *, spannable: bool = True) -> None:
        self._text = text
        self._annotations: list[Annotation] = []
        self._watchers: list[TextWatcher] = []
        self.spannable = spannable
        self.activation_enabled = False

    # ------------------------------------------------------------------
    # AnnotationHost
    # ------------------------------------------------------------------

    def get_text(self) -> str:
        return self._text

    def is_annotatable(self) -> bool:
        return self.spannable

    def clear_annotations(self) -> None:
        self._annotations.clear()

    def add_annotation(self, annotation: Annotation) -> None:
        if not 0 <= annotation.start <= annotation.end <= len(self._text):
            raise IndexError(
                f"annotation [{annotation.start}, {annotation.end}) "
                f"outside text of length {len(self._text)}"
            )
        self._annotations.append(annotation)

    def enable_activation(self) -> None:
        self.activation_enabled = True

    # ------------------------------------------------------------------
    # Watchers
    # ------------------------------------------------------------------

    def add_watcher(self, watcher: TextWatcher) -> None:
        if watcher not in self._watchers:
            self._watchers.append(watcher)

    def remove_watcher(self, watcher: TextWatcher) -> None:
        if watcher in self._watchers:
            self._watchers.remove(watcher)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def replace(self, start: int, end: int, new: str) -> None:
        """Replace ``text[start:end]`` with ``new``, notifying watchers."""
        if not 0 <= start <= end <= len(self._text):
            raise IndexError(f"range [{start}, {end}) outside text of length {len(self._text)}")
        count, after = end - start, len(new)
        if count == 0 and after == 0:
            return
        for w in list(self._watchers):
            w.before_text_changed(self._text, start, count, after)
        self._text = self._text[:start] + new + self._text[end:]
        self._shift_annotations(start, end, after - count)
        for w in list(self._watchers):
            w.on_text_changed(self._text, start, count, after)

    def insert(self, offset: int, text: str) -> None:
        self.replace(offset, offset, text)

    def append(self, text: str) -> None:
        self.replace(len(self._text), len(self._text), text)

    def delete(self, start: int, end: int) -> None:
        self.replace(start, end, "")

    def backspace(self, offset: int | None = None) -> None:
        """Delete the character before ``offset`` (default: end of text)."""
        offset = len(self._text) if offset is None else offset
        if offset > 0:
            self.delete(offset - 1, offset)

    def set_text(self, text: str) -> None:
        self.replace(0, len(self._text), text)

    def type_text(self, text: str, offset: int | None = None) -> None:
        """Insert ``text`` one character at a time, as a keyboard would."""
        offset = len(self._text) if offset is None else offset
        for ch in text:
            self.insert(offset, ch)
            offset += 1

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @property
    def annotations(self) -> list[Annotation]:
        return list(self._annotations)

    def annotations_at(self, offset: int) -> list[Annotation]:
        return [a for a in self._annotations if a.start <= offset < a.end]

    def clickable_at(self, offset: int) -> list[Annotation]:
        """Activatable annotations under an offset; empty until activation is enabled."""
        if not self.activation_enabled:
            return []
        return [a for a in self.annotations_at(offset) if isinstance(a.span, Clickable)]

    def __len__(self) -> int:
        return len(self._text)

    def __str__(self) -> str:
        return self._text

    def _shift_annotations(self, start: int, end: int, delta: int) -> None:
        # exclusive-exclusive: edits touching a span's edge do not grow it
        kept: list[Annotation] = []
        for a in self._annotations:
            if a.end <= start:
                kept.append(a)
            elif a.start >= end:
                kept.append(Annotation(a.kind, a.start + delta, a.end + delta, a.text, a.span))
        self._annotations = kept
