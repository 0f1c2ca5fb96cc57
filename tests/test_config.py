"""Tests for config loading, color parsing and the CLI."""

import io
import json
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from social_text import TextBuffer, create_social_text, load_config, load_from_yaml
from social_text.cli import main
from social_text.config import parse_colors, parse_flags
from social_text.styles import DEFAULT_COLORS, ColorStates, parse_color
from social_text.types import FLAG_ALL, FLAG_HASHTAG, FLAG_MENTION, HASHTAG, HYPERLINK, MENTION


YAML_CONFIG = """\
social_text:
  flags: [hashtag, mention]
  colors:
    hashtag: "#FF0000"
    hyperlink:
      default: "#00FF00"
      pressed: "#0000FF"
  patterns:
    mention: "@([a-z]+)"
    hyperlink: null
"""


# ── Colors ───────────────────────────────────────────────────────────

def test_parse_color_formats():
    assert parse_color("#abc") == 0xFFAABBCC
    assert parse_color("#1DA1F2") == 0xFF1DA1F2
    assert parse_color("#80FF0000") == 0x80FF0000
    assert parse_color(0x12345678) == 0x12345678


@pytest.mark.parametrize("bad", ["red", "#12345", "#GGGGGG", True, -1, None])
def test_parse_color_rejects(bad):
    with pytest.raises(ValueError):
        parse_color(bad)


def test_color_states():
    colors = ColorStates("#000000", {"pressed": "#FFFFFF"})
    assert colors.default_color == 0xFF000000
    assert colors.resolve_default_color() == 0xFF000000
    assert colors.color_for("focused", "pressed") == 0xFFFFFFFF
    assert colors.color_for("focused") == 0xFF000000
    assert colors == ColorStates(0xFF000000, {"pressed": 0xFFFFFFFF})
    assert ColorStates.value_of("#000") == ColorStates("#000000")


def test_parse_colors_mapping_needs_default():
    with pytest.raises(ValueError):
        parse_colors({"pressed": "#FFF"})


# ── Flags ────────────────────────────────────────────────────────────

def test_parse_flags_forms():
    assert parse_flags(5) == 5
    assert parse_flags(["hashtag", "mention"]) == FLAG_HASHTAG | FLAG_MENTION
    assert parse_flags("mention, hyperlink") == 6
    assert parse_flags({"hashtag": True, "mention": False}) == FLAG_HASHTAG
    assert parse_flags([]) == 0


@pytest.mark.parametrize("bad", [8, -1, True, ["emoji"], 1.5])
def test_parse_flags_rejects(bad):
    with pytest.raises(ValueError):
        parse_flags(bad)


# ── load_config ──────────────────────────────────────────────────────

def test_load_config_defaults():
    cfg = load_config({})
    assert cfg == {"flags": FLAG_ALL, "colors": {}, "patterns": {}}
    assert load_config(None) == cfg
    assert load_config({"social_text": None}) == cfg


def test_load_config_flat_and_nested_agree():
    flat = {"flags": ["hashtag"], "colors": {"mention": "#FFF"}}
    assert load_config(flat) == load_config({"social_text": flat})


def test_load_config_is_idempotent():
    cfg = load_config({"flags": ["mention"], "colors": {"hashtag": "#F00"}, "patterns": {"hashtag": ""}})
    assert load_config(cfg) == cfg
    assert cfg["patterns"] == {"hashtag": None}


def test_load_config_unknown_kind():
    with pytest.raises(ValueError):
        load_config({"colors": {"emoji": "#FFF"}})
    with pytest.raises(ValueError):
        load_config({"patterns": ["#x"]})


def test_load_from_yaml(tmp_path):
    path = tmp_path / "social.yaml"
    path.write_text(YAML_CONFIG)
    cfg = load_from_yaml(path)
    assert cfg["flags"] == FLAG_HASHTAG | FLAG_MENTION
    assert cfg["colors"][HASHTAG] == ColorStates("#FF0000")
    assert cfg["colors"][HYPERLINK].color_for("pressed") == 0xFF0000FF
    assert cfg["patterns"] == {MENTION: "@([a-z]+)", HYPERLINK: None}


# ── create_social_text ───────────────────────────────────────────────

def test_create_social_text_from_yaml(tmp_path):
    path = tmp_path / "social.yaml"
    path.write_text(YAML_CONFIG)
    buf = TextBuffer("#Hi @bob @Ann http://x.com")
    social = create_social_text(buf, load_from_yaml(path))
    assert not social.hyperlink_enabled
    assert social.mentions == ["bob"]
    assert social.hyperlinks == ["http://x.com"]
    assert [(a.kind, a.text) for a in buf.annotations] == [(HASHTAG, "#Hi"), (MENTION, "@bob")]
    assert social.hashtag_color == 0xFFFF0000
    assert social.mention_colors == DEFAULT_COLORS[MENTION]


def test_create_social_text_with_raw_dict():
    buf = TextBuffer("#a")
    social = create_social_text(buf, {"social_text": {"flags": "mention"}})
    assert social.flags == FLAG_MENTION
    assert buf.annotations == []


def test_create_social_text_defaults():
    buf = TextBuffer("#a")
    social = create_social_text(buf)
    assert social.flags == FLAG_ALL
    assert len(buf.annotations) == 1


# ── CLI ──────────────────────────────────────────────────────────────

def _run(monkeypatch, capsys, argv, stdin):
    monkeypatch.setattr(sys, "stdin", io.StringIO(stdin))
    main(argv)
    return capsys.readouterr().out


def test_cli_extract(monkeypatch, capsys):
    out = _run(monkeypatch, capsys, ["extract"], "check #Foo and @Bar at http://example.com\n")
    assert json.loads(out) == {
        "hashtags": ["Foo"],
        "mentions": ["Bar"],
        "hyperlinks": ["http://example.com"],
    }


def test_cli_annotate_with_disable(monkeypatch, capsys):
    out = _run(monkeypatch, capsys, ["--disable", "hyperlink", "annotate"], "see #docs at http://x.com\n")
    [annotation] = json.loads(out)
    assert annotation["kind"] == HASHTAG
    assert annotation["text"] == "#docs"
    assert (annotation["start"], annotation["end"]) == (4, 9)


def test_cli_annotate_with_config(monkeypatch, capsys, tmp_path):
    path = tmp_path / "social.yaml"
    path.write_text(YAML_CONFIG)
    out = _run(monkeypatch, capsys, ["--config", str(path), "annotate"], "#a http://x.com\n")
    assert [a["text"] for a in json.loads(out)] == ["#a"]
    assert json.loads(out)[0]["color"] == "#FFFF0000"


def test_cli_type_replays_live_changes(monkeypatch, capsys):
    out = _run(monkeypatch, capsys, ["type"], "#ab\bc d @x\n")
    events = [json.loads(line) for line in out.splitlines()]
    assert events == [
        {"kind": "hashtag", "text": "#a"},
        {"kind": "hashtag", "text": "#ab"},
        {"kind": "hashtag", "text": "#a"},
        {"kind": "hashtag", "text": "#ac"},
        {"kind": "mention", "text": "@x"},
    ]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
