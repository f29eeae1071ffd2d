"""Constants for tail display."""

# Nord color palette
NORD_GREEN = "#a3be8c"
NORD_RED = "#bf616a"
NORD_BLUE = "#88c0d0"
NORD_CYAN = "#8fbcbb"
NORD_YELLOW = "#ebcb8b"
NORD_ORANGE = "#d08770"
NORD_PURPLE = "#b48ead"
NORD_GRAY = "#4c566a"
NORD_LIGHT = "#eceff4"

# Kinds are assigned one of these by a stable hash of their name
KIND_PALETTE = (
    NORD_GREEN,
    NORD_BLUE,
    NORD_CYAN,
    NORD_YELLOW,
    NORD_ORANGE,
    NORD_PURPLE,
    NORD_RED,
)
