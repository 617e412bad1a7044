"""Turning text plus formatting ranges into styled output."""

import logging
import sys
from dataclasses import dataclass
from itertools import groupby
from typing import Callable, Iterable, Optional, TextIO

import blessed

from .formatting import FormattingKind, FormattingRange, sorted_kinds
from .model import EditorState, StateView
from .style import PLAIN, FontScale, StyleDescriptor, resolve_style

logger = logging.getLogger(__name__)

StyleResolver = Callable[[FormattingKind], StyleDescriptor]


@dataclass(frozen=True)
class StyledSegment:
    """A run of consecutive characters sharing one style."""
    text: str
    style: StyleDescriptor = PLAIN


StyledText = tuple[StyledSegment, ...]


def compose_styled_text(text: str, ranges: Iterable[FormattingRange],
                        resolver: StyleResolver = resolve_style) -> StyledText:
    """Split text into styled runs according to the formatting ranges.

    Ranges that are empty, inverted or reach past the end of the text are
    skipped; the rest of the text still renders.

    Returns:
        Segments covering the whole text, in order, with neighbouring
        characters of identical style merged into one segment.
    """
    styles = [PLAIN] * len(text)
    for r in ranges:
        if r.start < 0 or r.start >= r.end or r.start >= len(text) or r.end > len(text):
            logger.debug(f"Skipping range {r.start}..{r.end} ({r.kind.value}) for text of length {len(text)}")
            continue
        style = resolver(r.kind)
        for i in range(r.start, r.end):
            styles[i] = styles[i].merge(style)

    segments = []
    pos = 0
    for style, group in groupby(styles):
        run = len(list(group))
        segments.append(StyledSegment(text[pos:pos + run], style))
        pos += run
    return tuple(segments)


def plain_text(styled: StyledText) -> str:
    return "".join(segment.text for segment in styled)


class TerminalRenderer:
    """Paints styled text with terminal attributes via Blessed.

    A terminal cannot change font size, so headings are painted bold.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        self.term = terminal or blessed.Terminal()

    def paint_segment(self, segment: StyledSegment) -> str:
        style = segment.style
        attributes = []
        if style.bold or style.font_scale is not FontScale.NORMAL:
            attributes.append(self.term.bold)
        if style.italic:
            attributes.append(self.term.italic)
        if style.underline:
            attributes.append(self.term.underline)
        if not attributes:
            return segment.text
        return "".join(attributes) + segment.text + self.term.normal

    def render(self, styled: StyledText) -> str:
        return "".join(self.paint_segment(segment) for segment in styled)


def describe_pending(kinds) -> str:
    """Short label for a pending formatting set, e.g. 'heading1+bold'."""
    return "+".join(kind.value for kind in sorted_kinds(kinds))


class TerminalStateView(StateView):
    """Writes the styled text and pending formatting after each transition."""

    def __init__(self, renderer: Optional[TerminalRenderer] = None,
                 stream: Optional[TextIO] = None,
                 resolver: StyleResolver = resolve_style):
        self.renderer = renderer or TerminalRenderer()
        self.stream = stream or sys.stdout
        self.resolver = resolver

    def render(self, state: EditorState):
        styled = compose_styled_text(state.text, state.ranges, self.resolver)
        self.stream.write(self.renderer.render(styled) + "\n")
        selection = state.selection
        self.stream.write(
            f"[{selection.start}:{selection.end}] pending={describe_pending(state.pending_formatting)}\n"
        )
