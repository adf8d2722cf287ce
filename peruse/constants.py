"""Constants and configuration for the peruse pager."""

class PagerConstants:
    """Central configuration constants for the pager."""

    PROGRAM_NAME = "peruse"

    # Pane layout: the document pane is the terminal minus these margins
    # (one blank row above the status bar, the status bar itself)
    PANE_MARGIN_X = 2
    PANE_MARGIN_Y = 2

    # Input stream
    READ_CHUNK_SIZE = 64 * 1024  # Bytes read from the input per ready select()
    INPUT_ENCODING = "utf-8"

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Status bar
    STATUS_TEXT = "[peruse] q to exit, hjkl to scroll/pan, ? for help"
    HELP_STATUS_TEXT = "[peruse] help: q to return, hjkl to scroll/pan"

    # Logging
    LOG_ENV_VAR = "PERUSE_LOG"
    LOG_FILE_NAME = "peruse.log"
    LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    # Error messages
    NO_INPUT_MESSAGE = "requires file or pipe"
    OPEN_FAILED_MESSAGE = "Could not open `{}' for reading"

    HELP_LINES = (
        "PERUSE HELP",
        "",
        "NAVIGATION",
        "  j           Scroll down one line",
        "  k           Scroll up one line",
        "  h           Pan left one column",
        "  l           Pan right one column",
        "  Space       Next half page",
        "  PgDn        Next half page",
        "  PgUp        Previous half page",
        "",
        "OTHER",
        "  ?           Show this help",
        "  q, Q        Close help / quit",
        "",
        "Input keeps streaming in while this screen is shown.",
    )
