"""Span extraction engine — rebuilds every annotation on a host in one pass.

Usage:
    from social_text import SocialConfig, TextBuffer, recompute

    buf = TextBuffer("ping @ana about #release")
    config = SocialConfig()
    recompute(buf, config)
    [(a.kind, a.text) for a in buf.annotations]
    # [("hashtag", "#release"), ("mention", "@ana")]

The pass is all-or-nothing: the host precondition is checked before the
host is touched, then annotations are cleared once and re-added in kind
order (hashtag, mention, hyperlink).
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any

from .host import AnnotationHost, NotAnnotatableError
from .patterns import PatternSet, scan
from .styles import DEFAULT_COLORS, ColorStates, style_for
from .types import (
    FLAG_ALL, FLAGS, KINDS,
    Annotation, Clickable, ClickAction, Colored,
    OnChangedListener, OnClickListener, Span, TokenMatch,
)

logger = logging.getLogger(__name__)


@dataclass
class SocialConfig:
    """Configuration and listener state for one text buffer."""
    flags: int = FLAG_ALL
    patterns: PatternSet = field(default_factory=PatternSet)
    colors: dict[str, ColorStates] = field(default_factory=lambda: dict(DEFAULT_COLORS))
    click_listeners: dict[str, OnClickListener] = field(default_factory=dict)
    # hashtag and mention only
    changed_listeners: dict[str, OnChangedListener] = field(default_factory=dict)

    def is_enabled(self, kind: str) -> bool:
        return (self.flags | FLAGS[kind]) == self.flags

    def set_enabled(self, kind: str, enabled: bool) -> bool:
        """Toggle a kind.  Returns True if the flags changed."""
        if enabled == self.is_enabled(kind):
            return False
        self.flags = self.flags | FLAGS[kind] if enabled else self.flags & ~FLAGS[kind]
        return True

    def colors_for(self, kind: str) -> ColorStates:
        return self.colors.get(kind) or DEFAULT_COLORS[kind]


def build_annotations(text: str, config: SocialConfig) -> list[Annotation]:
    """Annotations for every enabled kind, in kind order, without touching a host."""
    annotations: list[Annotation] = []
    for kind in KINDS:
        if not config.is_enabled(kind):
            continue
        for match in scan(text, config.patterns[kind], kind):
            annotations.append(Annotation(
                kind=kind,
                start=match.start,
                end=match.end,
                text=match.text,
                span=_make_span(match, config),
            ))
    return annotations


def recompute(host: AnnotationHost, config: SocialConfig) -> list[Annotation]:
    """Clear the host's annotations and apply a fresh set.

    Raises NotAnnotatableError, before any mutation, if the host cannot
    carry range annotations.
    """
    if not host.is_annotatable():
        raise NotAnnotatableError(
            "Attached text cannot carry annotations; "
            "host it in an annotatable (spannable) buffer."
        )
    text = host.get_text()
    annotations = build_annotations(text, config)

    host.clear_annotations()
    for annotation in annotations:
        host.add_annotation(annotation)

    logger.debug(
        "recompute: %d chars, flags=%d, %d annotations",
        len(text), config.flags, len(annotations),
    )
    return annotations


def _make_span(match: TokenMatch, config: SocialConfig) -> Span:
    style = style_for(match.kind, config.colors_for(match.kind))
    listener = config.click_listeners.get(match.kind)
    if listener is None:
        return Colored(style)
    return Clickable(style, ClickAction(kind=match.kind, text=match.text, listener=listener))


def describe(annotation: Annotation) -> dict[str, Any]:
    """JSON-friendly view of an annotation."""
    return {
        "kind": annotation.kind,
        "start": annotation.start,
        "end": annotation.end,
        "text": annotation.text,
        "color": f"#{annotation.span.style.color:08X}",
        "underline": annotation.span.style.underline,
        "clickable": annotation.clickable,
    }
