"""Constants and configuration defaults for the rowedit editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Rendering
    TAB_EXPANSION = "  "  # Each tab cluster is drawn as two spaces
    EMPTY_ROW_MARKER = "~"  # Drawn on rows past the end of the buffer
    WELCOME_MESSAGE = "Rowedit editor -- version {}"
    STATUS_NAME_WIDTH = 20  # File name is truncated to this many characters
    NO_NAME = "[No Name]"

    # Status bar colors (RGB)
    STATUS_FG_COLOR = (63, 63, 63)
    STATUS_BG_COLOR = (239, 239, 239)

    # Screen layout
    RESERVED_BOTTOM_ROWS = 2  # Status bar + message bar

    # Session defaults (overridable through settings)
    QUIT_TIMES = 3  # Ctrl-Q presses needed to quit with unsaved changes
    STATUS_MESSAGE_SECONDS = 5.0  # How long a status message stays visible

    # File operations
    LINE_TERMINATOR = "\n"
    FILE_ENCODING = "utf-8"
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Status messages
    HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit"
    OPEN_FAILED_MESSAGE = "ERR: Could not open file: {}"
    SAVE_PROMPT = "Save as: "
    SAVE_ABORTED_MESSAGE = "Save aborted."
    SAVE_OK_MESSAGE = "File saved!"
    SAVE_FAILED_MESSAGE = "Error writing file!"
    QUIT_WARNING_MESSAGE = (
        "WARNING! File has unsaved changes. Press Ctrl-Q {} more times to quit."
    )
