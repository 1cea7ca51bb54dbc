"""Constants and configuration for the plainpad editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Screen layout
    HEADER_HEIGHT = 3  # Title, document name and rule above the body
    FOOTER_HEIGHT = 3  # Rule, key help and status line below the body
    LINE_NUMBER_WIDTH = 9  # Left margin reserved for line numbers
    SCREEN_WIDTH = 150  # Preferred width; narrower terminals truncate lines

    # Paging
    DEFAULT_PAGE_SIZE = 20  # Lines of text visible at once

    # File operations
    ATOMIC_SAVE_PREFIX = "."  # Prefix for temporary save files
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files
    DEFAULT_ENCODING = "utf-8"
    ENCODING_SAMPLE_SIZE = 64 * 1024  # Bytes handed to chardet
    ENCODING_MIN_CONFIDENCE = 0.75  # Below this chardet's guess is only a fallback

    # Status messages
    HELP_TEXT = "Ctrl-S Save | Esc Quit"
    SAVED_MESSAGE = "Saved to {}"
    SAVE_FAILED_MESSAGE = "Error: Cannot save to {}"
