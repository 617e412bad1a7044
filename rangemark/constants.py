"""Constants and configuration for the rangemark engine."""

from .formatting import FormattingKind


class EditorConstants:
    """Central configuration constants for the editor."""

    # Text
    LINE_BREAK = "\n"  # Character that ends a paragraph

    # Block formatting
    DEFAULT_BLOCK_KIND = FormattingKind.BODY  # Block kind when no block range applies
    TITLE_BLOCK_KIND = FormattingKind.HEADING1  # Pending block kind of a title first line
    # Precedence when several block ranges overlap one position (highest first)
    BLOCK_PRECEDENCE = (
        FormattingKind.HEADING1,
        FormattingKind.HEADING2,
        FormattingKind.HEADING3,
        FormattingKind.BODY,
    )

    # Relative font sizes for host renderers that can scale text
    FONT_SCALE_FACTORS = {
        "normal": 1.0,
        "h3": 1.125,
        "h2": 1.25,
        "h1": 1.5,
    }

    # Settings storage
    CONFIG_APP_NAME = "rangemark"
    CONFIG_APP_AUTHOR = "rangemark"
    SETTINGS_FILENAME = "settings.json"
