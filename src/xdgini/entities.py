"""Desktop-entry entities are either a group, an entry or a position record (RawLine)
tying one of the former to the physical line that defined it."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from .exceptions_warnings import ExtractionError
from .globals import (
    GROUP_HEADER_OPEN,
    GROUP_HEADER_CLOSE,
    KEY_VALUE_DELIMITER,
)

type GroupName = str
"""A group's name. The empty string names the dummy group."""
type EntryKey = str
"""An entry's key."""
type EntryValue = str
"""An entry's value."""


@dataclass(slots=True)
class RawLine:
    """Position record of a group header or an entry.

    Args:
        order (int): Order key. Output is sorted by it.
        line (str | None): The original line including its terminator. None if the
            record was not parsed from text and its line has to be synthesized.
        leading_comments (list[str]): Comment and blank lines right before the line.
        trailing_comments (list[str]): Blank lines right after the line.
    """

    order: int
    line: str | None = None
    leading_comments: list[str] = field(default_factory=list)
    trailing_comments: list[str] = field(default_factory=list)


def extract_group_name(line: str) -> GroupName:
    """Extract the group name of a group header line.

    A single leading "[" and, if present, a single trailing "]" are removed from the
    line (trailing whitespace ignored). A missing "]" is tolerated.

    Args:
        line (str): The line to extract from.

    Raises:
        ExtractionError: If the line is not a group header.

    Returns:
        GroupName: The group name.
    """
    trimmed = line.rstrip()
    if not trimmed.startswith(GROUP_HEADER_OPEN):
        raise ExtractionError(f"{line!r} is not a group header.")
    return trimmed.removeprefix(GROUP_HEADER_OPEN).removesuffix(GROUP_HEADER_CLOSE)


def extract_key_value(
    line: str, delimiter: str = KEY_VALUE_DELIMITER
) -> tuple[EntryKey, EntryValue]:
    """Extract key and value of a key-value line.

    The line is split at the first delimiter and both sides are stripped. A line
    without delimiter is read as a key with an empty value.

    Args:
        line (str): The line to extract from.
        delimiter (str, optional): The key-value delimiter. Defaults to "=".

    Returns:
        tuple[EntryKey, EntryValue]: Key and value.
    """
    key, found, value = line.rstrip().partition(delimiter)
    if not found:
        return key.strip(), ""
    return key.strip(), value.strip()


class Entry:
    """Entry object holding a key's current value and the lines that defined it."""

    def __init__(
        self, value: EntryValue = "", raws: list[RawLine] | None = None
    ) -> None:
        """
        Args:
            value (EntryValue, optional): The current value. Defaults to "".
            raws (list[RawLine] | None, optional): One position record per line that
                defined the key, in source order. Defaults to None (entry not present
                in any source text).
        """
        self._value = value
        self.raws: list[RawLine] = [] if raws is None else raws

    @property
    def value(self) -> EntryValue:
        return self._value

    @value.setter
    def value(self, value: EntryValue) -> None:
        self.set_value(value)

    def set_value(self, value: EntryValue) -> None:
        """Replace the current value. Position records are kept so the entry stays
        where it was.

        Args:
            value (EntryValue): The new value.
        """
        self._value = value

    def is_stale(self, delimiter: str = KEY_VALUE_DELIMITER) -> bool:
        """Whether the entry's first line no longer encodes its current value.

        Args:
            delimiter (str, optional): The key-value delimiter. Defaults to "=".

        Returns:
            bool: True if the entry has a position record whose line has to be
                synthesized, False if its lines can be reused or it has none.
        """
        if not self.raws:
            return False
        first = self.raws[0].line
        return first is None or extract_key_value(first, delimiter)[1] != self._value

    def __repr__(self) -> str:
        return f"Entry({self._value!r}, lines={len(self.raws)})"


class Group(Mapping[EntryKey, Entry]):
    """Group object holding entries by key and the header lines that named it."""

    def __init__(
        self,
        entries: dict[EntryKey, Entry] | None = None,
        raws: list[RawLine] | None = None,
    ) -> None:
        """
        Args:
            entries (dict[EntryKey, Entry] | None, optional): Entries by key.
                Defaults to None.
            raws (list[RawLine] | None, optional): One position record per header
                line naming the group. Defaults to None (header not present in any
                source text).
        """
        self._entries: dict[EntryKey, Entry] = {} if entries is None else entries
        self.raws: list[RawLine] = [] if raws is None else raws

    def get_or_create_entry(self, key: EntryKey, value: EntryValue) -> Entry:
        """Get the entry with the given key or create it.

        Args:
            key (EntryKey): The entry key.
            value (EntryValue): Value for a newly created entry. An existing entry
                keeps its value.

        Returns:
            Entry: The existing or new entry.
        """
        if (entry := self._entries.get(key)) is None:
            entry = self._entries[key] = Entry(value)
        return entry

    def _add_entry(self, key: EntryKey, value: EntryValue, raw: RawLine) -> bool:
        """Add a parsed key-value line. Returns False if the key already existed, in
        which case only the line is recorded."""
        if (entry := self._entries.get(key)) is not None:
            entry.raws.append(raw)
            return False
        self._entries[key] = Entry(value, [raw])
        return True

    def __getitem__(self, key: EntryKey) -> Entry:
        return self._entries[key]

    def __iter__(self) -> Iterator[EntryKey]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Group({list(self._entries)!r}, headers={len(self.raws)})"


def with_order(*orders: int) -> list[RawLine]:
    """Create header position records without source text.

    Useful for building a configuration from scratch, e.g.
    `Group(entries, raws=with_order(1))`.

    Args:
        *orders (int): One order key per header line.

    Returns:
        list[RawLine]: The position records.
    """
    return [RawLine(order) for order in orders]


def ordered_value(value: EntryValue, order: int) -> Entry:
    """Create an entry that will be written at the given order key.

    Args:
        value (EntryValue): The entry value.
        order (int): The order key.

    Returns:
        Entry: The entry.
    """
    return Entry(value, with_order(order))
