from typing import Literal

ORDER_STEP = 10
"""Distance between the order keys of two successive substantive lines."""
COMMENT_PREFIX = "#"
KEY_VALUE_DELIMITER = "="
GROUP_HEADER_OPEN = "["
GROUP_HEADER_CLOSE = "]"
LINE_TERMINATOR = "\n"
DUMMY_GROUP_NAME = ""
"""Name of the group holding key-value lines that appear before any header."""
DUMMY_GROUP_HEADER = f"{GROUP_HEADER_OPEN}{DUMMY_GROUP_NAME}{GROUP_HEADER_CLOSE}"
VALID_MARKERS = Literal[
    "!",
    '"',
    "%",
    "&",
    "/",
    ":",
    ";",
    "#",
    "'",
    "*",
    ">",
    "<",
    "=",
]
"""Valid characters for markers (key-value delimiter or comment prefix)."""
