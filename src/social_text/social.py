"""SocialText — hashtag, mention and hyperlink spans for one text buffer.

Usage:
    from social_text import SocialText, TextBuffer

    buf = TextBuffer()
    social = SocialText(buf)
    social.set_on_changed_listener("hashtag", lambda view, text: print(text))
    social.set_on_click_listener("mention", lambda view, text: open_profile(text))

    buf.type_text("hi @bob #py")   # prints "#p", then "#py"
    social.mentions                # ["bob"]
    social.click(4)                # open_profile("bob")

Every text edit and every configuration change ends in exactly one
recompute of the buffer's annotations.  Edits and changes made while an
event is being handled (e.g. from inside a listener) are queued and run
after it, never nested.
"""

from __future__ import annotations
import logging
import re
from collections import deque
from typing import Any, Callable

from .dispatcher import ClickDispatcher
from .engine import SocialConfig, recompute
from .host import AnnotationHost
from .patterns import extract
from .styles import ColorStates
from .tracker import EditingTracker
from .types import (
    HASHTAG, HYPERLINK, KINDS, MENTION,
    Annotation, ChangeEvent, Clickable, OnChangedListener, OnClickListener,
)

logger = logging.getLogger(__name__)


class SocialText:
    """Keeps a host's annotations in sync with its text and configuration."""

    def __init__(
        self,
        host: AnnotationHost,
        config: SocialConfig | None = None,
        *,
        view: Any = None,
    ) -> None:
        self._host = host
        self._config = config or SocialConfig()
        self._view = self if view is None else view
        self._tracker = EditingTracker(self._deliver_change)
        self._dispatcher = ClickDispatcher(self._config.click_listeners, self._view)
        self._pending: deque[tuple[Callable[..., None], tuple]] = deque()
        self._busy = False
        self._activation_requested = False
        self._annotations: list[Annotation] = []

        # fails here, before the host is touched, for a non-annotatable buffer
        self._recompute()
        if self._config.click_listeners:
            self._ensure_activation()
        add_watcher = getattr(host, "add_watcher", None)
        if add_watcher is not None:
            add_watcher(self)

    def detach(self) -> None:
        """Stop following the host's edits."""
        remove_watcher = getattr(self._host, "remove_watcher", None)
        if remove_watcher is not None:
            remove_watcher(self)

    # ------------------------------------------------------------------
    # Text watcher
    # ------------------------------------------------------------------

    def before_text_changed(self, text: str, start: int, count: int, after: int) -> None:
        self._submit(self._tracker.before_change, text, start, count, after)

    def on_text_changed(self, text: str, start: int, before: int, count: int) -> None:
        self._submit(self._handle_text_changed, text, start, before, count)

    def _handle_text_changed(self, text: str, start: int, before: int, count: int) -> None:
        self._recompute()
        self._tracker.after_change(text, start, before, count)

    # ------------------------------------------------------------------
    # Flags
    # ------------------------------------------------------------------

    @property
    def flags(self) -> int:
        return self._config.flags

    @flags.setter
    def flags(self, value: int) -> None:
        if value != self._config.flags:
            self._config.flags = value
            self._request_recompute()

    def is_enabled(self, kind: str) -> bool:
        return self._config.is_enabled(kind)

    def set_enabled(self, kind: str, enabled: bool) -> None:
        if self._config.set_enabled(kind, enabled):
            self._request_recompute()

    @property
    def hashtag_enabled(self) -> bool:
        return self.is_enabled(HASHTAG)

    @hashtag_enabled.setter
    def hashtag_enabled(self, enabled: bool) -> None:
        self.set_enabled(HASHTAG, enabled)

    @property
    def mention_enabled(self) -> bool:
        return self.is_enabled(MENTION)

    @mention_enabled.setter
    def mention_enabled(self, enabled: bool) -> None:
        self.set_enabled(MENTION, enabled)

    @property
    def hyperlink_enabled(self) -> bool:
        return self.is_enabled(HYPERLINK)

    @hyperlink_enabled.setter
    def hyperlink_enabled(self, enabled: bool) -> None:
        self.set_enabled(HYPERLINK, enabled)

    # ------------------------------------------------------------------
    # Patterns
    # ------------------------------------------------------------------

    def get_pattern(self, kind: str) -> re.Pattern:
        return self._config.patterns[kind]

    def set_pattern(self, kind: str, pattern: re.Pattern | str | None) -> None:
        """Replace a kind's pattern; ``None`` or ``""`` restores the default."""
        if self._config.patterns.set(kind, pattern):
            self._request_recompute()

    @property
    def hashtag_pattern(self) -> re.Pattern:
        return self.get_pattern(HASHTAG)

    @hashtag_pattern.setter
    def hashtag_pattern(self, pattern: re.Pattern | str | None) -> None:
        self.set_pattern(HASHTAG, pattern)

    @property
    def mention_pattern(self) -> re.Pattern:
        return self.get_pattern(MENTION)

    @mention_pattern.setter
    def mention_pattern(self, pattern: re.Pattern | str | None) -> None:
        self.set_pattern(MENTION, pattern)

    @property
    def hyperlink_pattern(self) -> re.Pattern:
        return self.get_pattern(HYPERLINK)

    @hyperlink_pattern.setter
    def hyperlink_pattern(self, pattern: re.Pattern | str | None) -> None:
        self.set_pattern(HYPERLINK, pattern)

    # ------------------------------------------------------------------
    # Colors
    # ------------------------------------------------------------------

    def get_colors(self, kind: str) -> ColorStates:
        return self._config.colors_for(kind)

    def set_colors(self, kind: str, colors: ColorStates | int | str) -> None:
        if not isinstance(colors, ColorStates):
            colors = ColorStates.value_of(colors)
        if colors != self._config.colors_for(kind):
            self._config.colors[kind] = colors
            self._request_recompute()

    def get_color(self, kind: str) -> int:
        return self.get_colors(kind).default_color

    @property
    def hashtag_colors(self) -> ColorStates:
        return self.get_colors(HASHTAG)

    @hashtag_colors.setter
    def hashtag_colors(self, colors: ColorStates) -> None:
        self.set_colors(HASHTAG, colors)

    @property
    def mention_colors(self) -> ColorStates:
        return self.get_colors(MENTION)

    @mention_colors.setter
    def mention_colors(self, colors: ColorStates) -> None:
        self.set_colors(MENTION, colors)

    @property
    def hyperlink_colors(self) -> ColorStates:
        return self.get_colors(HYPERLINK)

    @hyperlink_colors.setter
    def hyperlink_colors(self, colors: ColorStates) -> None:
        self.set_colors(HYPERLINK, colors)

    @property
    def hashtag_color(self) -> int:
        return self.get_color(HASHTAG)

    @hashtag_color.setter
    def hashtag_color(self, color: int | str) -> None:
        self.set_colors(HASHTAG, color)

    @property
    def mention_color(self) -> int:
        return self.get_color(MENTION)

    @mention_color.setter
    def mention_color(self, color: int | str) -> None:
        self.set_colors(MENTION, color)

    @property
    def hyperlink_color(self) -> int:
        return self.get_color(HYPERLINK)

    @hyperlink_color.setter
    def hyperlink_color(self, color: int | str) -> None:
        self.set_colors(HYPERLINK, color)

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def set_on_click_listener(self, kind: str, listener: OnClickListener | None) -> None:
        """Make a kind's spans clickable (or plain again with ``None``)."""
        if kind not in KINDS:
            raise ValueError(f"unknown token kind: {kind!r}")
        if listener is not None:
            self._ensure_activation()
        listeners = self._config.click_listeners
        if listeners.get(kind) == listener:
            return
        if listener is None:
            del listeners[kind]
        else:
            listeners[kind] = listener
        self._request_recompute()

    def set_on_changed_listener(self, kind: str, listener: OnChangedListener | None) -> None:
        """Receive the partial hashtag or mention while it is being typed."""
        if kind not in (HASHTAG, MENTION):
            raise ValueError(f"live changes are only tracked for hashtags and mentions, not {kind!r}")
        if listener is None:
            self._config.changed_listeners.pop(kind, None)
        else:
            self._config.changed_listeners[kind] = listener

    def set_on_hashtag_click_listener(self, listener: OnClickListener | None) -> None:
        self.set_on_click_listener(HASHTAG, listener)

    def set_on_mention_click_listener(self, listener: OnClickListener | None) -> None:
        self.set_on_click_listener(MENTION, listener)

    def set_on_hyperlink_click_listener(self, listener: OnClickListener | None) -> None:
        self.set_on_click_listener(HYPERLINK, listener)

    def set_hashtag_changed_listener(self, listener: OnChangedListener | None) -> None:
        self.set_on_changed_listener(HASHTAG, listener)

    def set_mention_changed_listener(self, listener: OnChangedListener | None) -> None:
        self.set_on_changed_listener(MENTION, listener)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def extract(self, kind: str) -> list[str]:
        """Fresh scan of the current text, regardless of the kind's flag."""
        return extract(self._host.get_text(), self._config.patterns[kind], kind)

    @property
    def hashtags(self) -> list[str]:
        return self.extract(HASHTAG)

    @property
    def mentions(self) -> list[str]:
        return self.extract(MENTION)

    @property
    def hyperlinks(self) -> list[str]:
        return self.extract(HYPERLINK)

    @property
    def annotations(self) -> list[Annotation]:
        """Annotations applied by the last recompute."""
        return list(self._annotations)

    @property
    def editing_state(self) -> str:
        return self._tracker.mode

    @property
    def config(self) -> SocialConfig:
        return self._config

    # ------------------------------------------------------------------
    # Activation
    # ------------------------------------------------------------------

    def activate(self, annotation: Annotation) -> None:
        self._dispatcher.activate(annotation)

    def click(self, offset: int) -> bool:
        """Activate the clickable annotation under ``offset``.  Returns True if one fired."""
        if not self._activation_requested:
            return False
        for annotation in self._annotations:
            if annotation.start <= offset < annotation.end and isinstance(annotation.span, Clickable):
                self._dispatcher.activate(annotation)
                return True
        return False

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ensure_activation(self) -> None:
        if not self._activation_requested:
            self._host.enable_activation()
            self._activation_requested = True

    def _deliver_change(self, event: ChangeEvent) -> None:
        listener = self._config.changed_listeners.get(event.kind)
        if listener is not None:
            listener(self._view, event.text)

    def _recompute(self) -> None:
        self._annotations = recompute(self._host, self._config)

    def _request_recompute(self) -> None:
        self._submit(self._recompute)

    def _submit(self, handler: Callable[..., None], *args: Any) -> None:
        # one FIFO per buffer; the outermost caller drains it
        self._pending.append((handler, args))
        if self._busy:
            logger.debug("queued %s behind the running event", handler.__name__)
            return
        self._busy = True
        try:
            while self._pending:
                handler, args = self._pending.popleft()
                handler(*args)
        except BaseException:
            # queued edits already reached the host; resync its spans to its text
            self._pending.clear()
            try:
                self._recompute()
            except Exception:
                logger.warning("resync after a failed event also failed", exc_info=True)
            raise
        finally:
            self._busy = False
