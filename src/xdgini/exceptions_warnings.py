"""xdgini-specific exceptions and warnings"""

# ---------- #
# Exceptions
# ---------- #


class ExtractionError(Exception):
    """Raised when a line could not be extracted as the requested entity."""


# ---------- #
# Warnings
# ---------- #


class IniStructureWarning(Warning):
    """Raised when the text violates the desktop-entry structure but is tolerated."""


class DuplicateEntityWarning(IniStructureWarning):
    """Raised when an entity appears more than once where it should be unique."""


class DuplicateGroupWarning(DuplicateEntityWarning):
    """Raised when a group header names a group that was already opened."""


class DuplicateEntryWarning(DuplicateEntityWarning):
    """Raised when a key is defined more than once within the same group. The first
    value is kept."""


class MalformedLineWarning(IniStructureWarning):
    """Raised when a line is malformed but could still be interpreted."""


class UnclosedGroupHeaderWarning(MalformedLineWarning):
    """Raised when a group header lacks its closing bracket."""


class MissingDelimiterWarning(MalformedLineWarning):
    """Raised when a key-value line has no delimiter. The line is read as a key with an
    empty value."""
