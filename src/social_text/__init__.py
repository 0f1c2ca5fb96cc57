"""social-text — live hashtag, mention and hyperlink spans for editable text."""

from .types import (
    HASHTAG, MENTION, HYPERLINK, KINDS,
    FLAG_HASHTAG, FLAG_MENTION, FLAG_HYPERLINK, FLAG_ALL,
    Annotation, ChangeEvent, ClickAction, Clickable, Colored, Style, TokenMatch,
)
from .patterns import PatternSet, DEFAULT_HASHTAG, DEFAULT_MENTION, DEFAULT_HYPERLINK
from .styles import ColorStates
from .host import AnnotationHost, NotAnnotatableError, TextBuffer
from .engine import SocialConfig, build_annotations, recompute
from .tracker import EditingTracker
from .dispatcher import ClickDispatcher
from .social import SocialText
from .config import create_social_text, load_config, load_from_yaml

__all__ = [
    "HASHTAG", "MENTION", "HYPERLINK", "KINDS",
    "FLAG_HASHTAG", "FLAG_MENTION", "FLAG_HYPERLINK", "FLAG_ALL",
    "Annotation", "ChangeEvent", "ClickAction", "Clickable", "Colored", "Style", "TokenMatch",
    "PatternSet", "DEFAULT_HASHTAG", "DEFAULT_MENTION", "DEFAULT_HYPERLINK",
    "ColorStates",
    "AnnotationHost", "NotAnnotatableError", "TextBuffer",
    "SocialConfig", "build_annotations", "recompute",
    "EditingTracker",
    "ClickDispatcher",
    "SocialText",
    "create_social_text", "load_config", "load_from_yaml",
]
__version__ = "0.1.0"
