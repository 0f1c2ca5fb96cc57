"""Click dispatch — maps an activated annotation back to its listener."""

from __future__ import annotations
import logging
from typing import Any, Mapping

from .types import HYPERLINK, Annotation, Clickable, OnClickListener

logger = logging.getLogger(__name__)


def resolve_text(kind: str, text: str) -> str:
    """Text handed to a click listener: ``#Foo`` → ``Foo``, URLs unchanged."""
    if kind == HYPERLINK:
        return text
    return text[1:]


class ClickDispatcher:
    """Invokes ``listener(view, text)`` for activated annotations."""

    __slots__ = ("_listeners", "_view")

    def __init__(self, listeners: Mapping[str, OnClickListener], view: Any = None) -> None:
        self._listeners = listeners
        self._view = view

    def activate(self, annotation: Annotation) -> None:
        if not isinstance(annotation.span, Clickable):
            return
        listener = self._listeners.get(annotation.kind)
        if listener is None:
            return
        text = resolve_text(annotation.kind, annotation.span.action.text)
        logger.debug("click %s: %r", annotation.kind, text)
        listener(self._view, text)
