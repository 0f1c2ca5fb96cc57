"""Tests for the span extraction engine."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from social_text.engine import SocialConfig, build_annotations, describe, recompute
from social_text.host import NotAnnotatableError, TextBuffer
from social_text.styles import ColorStates
from social_text.types import (
    FLAG_ALL, FLAG_HASHTAG, HASHTAG, HYPERLINK, MENTION,
    Annotation, Clickable, Colored, Style,
)


SAMPLE = "check #Foo and @Bar at http://example.com"


class RecordingBuffer(TextBuffer):
    """TextBuffer that logs every host call the engine makes."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = []

    def clear_annotations(self):
        self.calls.append("clear")
        super().clear_annotations()

    def add_annotation(self, annotation):
        self.calls.append("add")
        super().add_annotation(annotation)


def _spans(annotations):
    return [(a.kind, a.start, a.end) for a in annotations]


# ── Recompute ────────────────────────────────────────────────────────

def test_recompute_annotates_every_kind_in_order():
    buf = TextBuffer(SAMPLE)
    result = recompute(buf, SocialConfig())
    assert [(a.kind, a.text) for a in result] == [
        (HASHTAG, "#Foo"),
        (MENTION, "@Bar"),
        (HYPERLINK, "http://example.com"),
    ]
    assert buf.annotations == result


def test_recompute_clears_once_before_adding():
    buf = RecordingBuffer(SAMPLE)
    recompute(buf, SocialConfig())
    assert buf.calls == ["clear", "add", "add", "add"]


def test_recompute_is_idempotent():
    buf = TextBuffer(SAMPLE)
    config = SocialConfig()
    first = recompute(buf, config)
    second = recompute(buf, config)
    assert _spans(first) == _spans(second)
    assert len(buf.annotations) == 3


def test_recompute_replaces_stale_annotations():
    buf = TextBuffer("#old")
    config = SocialConfig()
    recompute(buf, config)
    buf.set_text("plain text")
    recompute(buf, config)
    assert buf.annotations == []


def test_disabled_kind_not_annotated():
    buf = TextBuffer(SAMPLE)
    config = SocialConfig(flags=FLAG_ALL & ~FLAG_HASHTAG)
    result = recompute(buf, config)
    assert HASHTAG not in {a.kind for a in result}
    assert {a.kind for a in result} == {MENTION, HYPERLINK}


def test_not_annotatable_fails_before_touching_host():
    buf = RecordingBuffer("#x", spannable=False)
    existing = Annotation(HASHTAG, 0, 2, "#x", Colored(Style(0xFF000000)))
    buf.add_annotation(existing)
    buf.calls.clear()
    with pytest.raises(NotAnnotatableError):
        recompute(buf, SocialConfig())
    assert buf.calls == []
    assert buf.annotations == [existing]


# ── Spans ────────────────────────────────────────────────────────────

def test_colored_span_without_listener():
    [a] = build_annotations("#Foo", SocialConfig())
    assert isinstance(a.span, Colored)
    assert not a.clickable


def test_clickable_span_captures_listener_and_text():
    def listener(view, text):
        pass

    config = SocialConfig(click_listeners={HASHTAG: listener})
    [a] = build_annotations("see #Foo", config)
    assert isinstance(a.span, Clickable)
    assert a.span.action.kind == HASHTAG
    assert a.span.action.text == "#Foo"
    assert a.span.action.listener is listener


def test_hyperlink_style_is_underlined():
    config = SocialConfig(colors={HYPERLINK: ColorStates("#FF0000"), HASHTAG: ColorStates("#00FF00")})
    tag, link = build_annotations("#t http://x.com", config)
    assert link.kind == HYPERLINK and tag.kind == HASHTAG
    assert link.span.style == Style(color=0xFFFF0000, underline=True)
    assert tag.span.style == Style(color=0xFF00FF00, underline=False)


def test_custom_pattern_used_for_annotations():
    config = SocialConfig()
    config.patterns.set(HASHTAG, r"\$(\w+)")
    result = build_annotations("#not $yes", config)
    assert [(a.kind, a.text) for a in result] == [(HASHTAG, "$yes")]


def test_describe():
    [a] = build_annotations("#Foo", SocialConfig(colors={HASHTAG: ColorStates(0xFF112233)}))
    assert describe(a) == {
        "kind": HASHTAG, "start": 0, "end": 4, "text": "#Foo",
        "color": "#FF112233", "underline": False, "clickable": False,
    }


# ── Flags ────────────────────────────────────────────────────────────

def test_set_enabled_reports_changes():
    config = SocialConfig()
    assert config.set_enabled(MENTION, True) is False
    assert config.set_enabled(MENTION, False) is True
    assert not config.is_enabled(MENTION)
    assert config.set_enabled(MENTION, False) is False
    assert config.set_enabled(MENTION, True) is True
    assert config.flags == FLAG_ALL


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
