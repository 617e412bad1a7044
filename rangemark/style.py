"""Presentation styles for formatting kinds."""

from dataclasses import dataclass
from enum import Enum

from .constants import EditorConstants
from .formatting import FormattingKind


class FontScale(Enum):
    """Relative text size; values order from smallest to largest."""
    NORMAL = 0
    H3 = 1
    H2 = 2
    H1 = 3

    @property
    def factor(self) -> float:
        return EditorConstants.FONT_SCALE_FACTORS[self.name.lower()]


@dataclass(frozen=True)
class StyleDescriptor:
    bold: bool = False
    italic: bool = False
    underline: bool = False
    font_scale: FontScale = FontScale.NORMAL

    @property
    def is_plain(self) -> bool:
        return self == PLAIN

    def merge(self, other: "StyleDescriptor") -> "StyleDescriptor":
        """Combine two styles; the larger font scale wins."""
        return StyleDescriptor(
            bold=self.bold or other.bold,
            italic=self.italic or other.italic,
            underline=self.underline or other.underline,
            font_scale=max(self.font_scale, other.font_scale, key=lambda s: s.value),
        )


PLAIN = StyleDescriptor()

_STYLES = {
    FormattingKind.BODY: PLAIN,
    FormattingKind.BOLD: StyleDescriptor(bold=True),
    FormattingKind.ITALIC: StyleDescriptor(italic=True),
    FormattingKind.UNDERLINE: StyleDescriptor(underline=True),
    FormattingKind.HEADING1: StyleDescriptor(font_scale=FontScale.H1),
    FormattingKind.HEADING2: StyleDescriptor(font_scale=FontScale.H2),
    FormattingKind.HEADING3: StyleDescriptor(font_scale=FontScale.H3),
}


def resolve_style(kind: FormattingKind) -> StyleDescriptor:
    """Style for a formatting kind. BODY maps to the plain default."""
    return _STYLES[kind]
