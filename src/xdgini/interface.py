"""Parse desktop-entry text into a Configuration and render it back."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
import warnings
from charset_normalizer import from_bytes as read_from_bytes
from .args import Parameters
from .entities import (
    Entry,
    EntryKey,
    Group,
    GroupName,
    RawLine,
    extract_group_name,
    extract_key_value,
)
from .exceptions_warnings import (
    DuplicateEntryWarning,
    DuplicateGroupWarning,
    ExtractionError,
    MissingDelimiterWarning,
    UnclosedGroupHeaderWarning,
)
from .globals import (
    DUMMY_GROUP_HEADER,
    DUMMY_GROUP_NAME,
    GROUP_HEADER_CLOSE,
    GROUP_HEADER_OPEN,
    LINE_TERMINATOR,
)
from .utils import copy_doc, split_lines


class Configuration(Mapping[GroupName, Group]):
    """A parsed (or built) desktop-entry file. Maps group names to groups.

    Iteration follows insertion order, the rendered order is derived from the position
    records only.
    """

    def __init__(
        self,
        groups: dict[GroupName, Group] | None = None,
        end: RawLine | None = None,
        parameters: Parameters | None = None,
    ) -> None:
        """
        Args:
            groups (dict[GroupName, Group] | None, optional): Groups by name.
                Defaults to None.
            end (RawLine | None, optional): End-of-file marker holding the comment and
                blank lines after the last substantive line. If None, the end-of-file
                order key is derived from the content. Defaults to None.
            parameters (Parameters | None, optional): Parameters for rendering.
                Defaults to None (default parameters).
        """
        self._groups: dict[GroupName, Group] = {} if groups is None else groups
        self.end = end
        self.parameters = Parameters() if parameters is None else parameters

    @property
    def end_order(self) -> int:
        """Order key given to content that was not parsed from text."""
        if self.end is not None:
            return self.end.order
        orders = [
            raw.order
            for group in self._groups.values()
            for raws in (group.raws, *(entry.raws for entry in group.values()))
            for raw in raws
        ]
        return max(orders, default=0) + self.parameters.order_step

    def get_or_create_group(self, name: GroupName) -> Group:
        """Get the group with the given name or create it. A new group's header is
        written after all parsed content.

        Args:
            name (GroupName): The group name.

        Returns:
            Group: The existing or new group.
        """
        if (group := self._groups.get(name)) is None:
            group = self._groups[name] = Group()
        return group

    def render(self) -> str:
        """Render the configuration to text. Parsed lines whose group or value didn't
        change are reproduced verbatim, new or changed content is synthesized.

        Returns:
            str: The text.
        """
        return _RenderConfig(self).text

    @staticmethod
    def read_file(
        path: str | Path,
        parameters: Parameters | None = None,
        encoding: str | None = None,
    ) -> "Configuration":
        """Read and parse a file. A missing file is read as empty text.

        Args:
            path (str | Path): Path to the file.
            parameters (Parameters | None, optional): Parameters for parsing and
                rendering. Defaults to None (default parameters).
            encoding (str | None, optional): Encoding of the file. If None, the
                encoding is detected. Defaults to None.

        Returns:
            Configuration: The parsed configuration.
        """
        try:
            content = Path(path).read_bytes()
        except FileNotFoundError:
            content = b""

        if not content:
            text = ""
        elif encoding is not None:
            text = content.decode(encoding)
        elif (best := read_from_bytes(content).best()) is not None:
            text = str(best)
        else:
            text = content.decode("utf-8")

        return parse(text, parameters)

    def write_file(self, path: str | Path, encoding: str = "utf-8") -> bool:
        """Write the rendered configuration to a file, unless the file already holds
        exactly that content.

        Args:
            path (str | Path): Path to the file.
            encoding (str, optional): Encoding to write with. Defaults to "utf-8".

        Returns:
            bool: Whether the file was written.
        """
        path = Path(path)
        content = self.render().encode(encoding)
        if path.is_file() and path.read_bytes() == content:
            return False
        path.write_bytes(content)
        return True

    def __getitem__(self, name: GroupName) -> Group:
        return self._groups[name]

    def __iter__(self) -> Iterator[GroupName]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Configuration({list(self._groups)!r})"


def parse(text: str, parameters: Parameters | None = None) -> Configuration:
    """Parse desktop-entry text. Never fails: malformed lines are kept as they are and
    reported as IniStructureWarning.

    Args:
        text (str): The text to parse.
        parameters (Parameters | None, optional): Parameters for parsing and
            rendering. Defaults to None (default parameters).

    Returns:
        Configuration: The parsed configuration.
    """
    return _ParseConfig(text, parameters).configuration


@copy_doc(Configuration.read_file)
def read_config(
    path: str | Path,
    parameters: Parameters | None = None,
    encoding: str | None = None,
) -> Configuration:
    return Configuration.read_file(path, parameters, encoding)


class _ParseConfig:

    def __init__(self, text: str, parameters: Parameters | None = None) -> None:
        """Parse text into self.configuration. For more info cf. parse."""
        self.parameters = Parameters() if parameters is None else parameters
        self.groups: dict[GroupName, Group] = {}

        # ----
        # define variables for parse process
        # ----
        self.order = self.parameters.order_step
        self.current_group: Group | None = None
        self.last_raw: RawLine | None = None
        """Substantive line before the current one that takes trailing blank lines.
        None after a comment line."""
        self.pending_comments: list[str] = []
        self.line_number = 0
        # ----

        for self.line_number, line in enumerate(split_lines(text), start=1):
            trimmed = line.rstrip()
            if not trimmed and self.last_raw is not None:
                self.last_raw.trailing_comments.append(line)
            elif not trimmed or trimmed.startswith(self.parameters.comment_prefixes):
                self.last_raw = None
                self.pending_comments.append(line)
            elif trimmed.startswith(GROUP_HEADER_OPEN):
                self._handle_group_header(line, trimmed)
            else:
                self._handle_key_value(line, trimmed)

        self.configuration = Configuration(
            self.groups,
            RawLine(self.order, trailing_comments=self.pending_comments),
            self.parameters,
        )

    def _next_raw(self, line: str) -> RawLine:
        """Create the position record of a substantive line and make it the one taking
        trailing blank lines."""
        raw = RawLine(self.order, line, leading_comments=self.pending_comments)
        self.order += self.parameters.order_step
        self.pending_comments = []
        self.last_raw = raw
        return raw

    def _handle_group_header(self, line: str, trimmed: str) -> None:
        name = extract_group_name(line)
        if not trimmed.endswith(GROUP_HEADER_CLOSE):
            warnings.warn(
                f"Line {self.line_number}: group header {trimmed!r} is missing "
                f"'{GROUP_HEADER_CLOSE}', reading it as group {name!r}.",
                UnclosedGroupHeaderWarning,
            )
        if (group := self.groups.get(name)) is None:
            group = self.groups[name] = Group()
        else:
            warnings.warn(
                f"Line {self.line_number}: group {name!r} is opened again. Its entries"
                " are merged into the first occurrence.",
                DuplicateGroupWarning,
            )
        group.raws.append(self._next_raw(line))
        self.current_group = group

    def _handle_key_value(self, line: str, trimmed: str) -> None:
        delimiter = self.parameters.key_value_delimiter
        key, value = extract_key_value(line, delimiter)
        if delimiter not in trimmed:
            warnings.warn(
                f"Line {self.line_number}: {trimmed!r} has no '{delimiter}', reading it"
                " as a key with an empty value.",
                MissingDelimiterWarning,
            )
        if self.current_group is None:
            # content before any header, the dummy header takes no text
            self.current_group = self.groups[DUMMY_GROUP_NAME] = Group(
                raws=[RawLine(self.order, "")]
            )
            self.order += self.parameters.order_step
        if not self.current_group._add_entry(key, value, self._next_raw(line)):
            warnings.warn(
                f"Line {self.line_number}: key {key!r} is defined again. Keeping the"
                f" first value {self.current_group[key].value!r}.",
                DuplicateEntryWarning,
            )


@dataclass(slots=True)
class _GroupItem:
    """One line of a group: a header (entry is None) or an entry line."""

    order: int
    line: str
    raw: RawLine | None = None
    entry: Entry | None = None

    @property
    def sort_key(self) -> tuple[int, int, str]:
        if self.entry is None:
            return (self.order, 0, "")
        return (self.order, 1, self.entry.value)

    def lines(self) -> list[str]:
        if self.raw is None:
            return [self.line]
        return [*self.raw.leading_comments, self.line, *self.raw.trailing_comments]


@dataclass(slots=True)
class _Chunk:
    """A header and the group lines following it up to the next header."""

    order: int
    name: GroupName
    lines: list[str] = field(default_factory=list)


class _RenderConfig:

    def __init__(self, configuration: Configuration) -> None:
        """Render configuration into self.text. For more info cf.
        Configuration.render."""
        self.configuration = configuration
        self.delimiter = configuration.parameters.key_value_delimiter
        self.end_order = configuration.end_order

        chunks: list[_Chunk] = []
        for name, group in configuration.items():
            chunks.extend(self._chunks(name, self._group_items(name, group)))
        chunks.sort(key=lambda chunk: (chunk.order, chunk.name))

        lines: list[str] = []
        for index, chunk in enumerate(chunks):
            if index > 0 and chunk.lines and chunk.lines[0] == "":
                # dummy group no longer leads the output
                chunk.lines[0] = DUMMY_GROUP_HEADER + LINE_TERMINATOR
            lines.extend(chunk.lines)
        if configuration.end is not None:
            lines.extend(configuration.end.trailing_comments)

        self.text = "".join(
            (
                line + LINE_TERMINATOR
                if index < len(lines) - 1
                and line
                and not line.endswith(LINE_TERMINATOR)
                else line
            )
            for index, line in enumerate(lines)
        )

    def _header_line(self, name: GroupName) -> str:
        return f"{GROUP_HEADER_OPEN}{name}{GROUP_HEADER_CLOSE}{LINE_TERMINATOR}"

    def _entry_line(self, key: EntryKey, entry: Entry) -> str:
        return f"{key}{self.delimiter}{entry.value}{LINE_TERMINATOR}"

    @staticmethod
    def _names_group(line: str | None, name: GroupName) -> bool:
        """Whether a header line can be reused for the group name."""
        if line is None:
            return False
        try:
            return extract_group_name(line) == name
        except ExtractionError:
            # the parsed dummy header has no text
            return name == DUMMY_GROUP_NAME and not line

    def _group_items(self, name: GroupName, group: Group) -> list[_GroupItem]:
        items = [
            _GroupItem(
                raw.order,
                raw.line if self._names_group(raw.line, name) else self._header_line(name),
                raw,
            )
            for raw in group.raws
        ]
        if not group.raws:
            items.append(_GroupItem(self.end_order, self._header_line(name)))

        for key, entry in group.items():
            if not entry.raws:
                items.append(
                    _GroupItem(self.end_order, self._entry_line(key, entry), entry=entry)
                )
            elif entry.is_stale(self.delimiter):
                first = entry.raws[0]
                items.append(
                    _GroupItem(first.order, self._entry_line(key, entry), first, entry)
                )
            else:
                items.extend(
                    _GroupItem(raw.order, raw.line, raw, entry) for raw in entry.raws
                )

        items.sort(key=lambda item: item.sort_key)
        # every entry has to follow a header
        first_header = next(i for i, item in enumerate(items) if item.entry is None)
        items.insert(0, items.pop(first_header))
        return items

    def _chunks(self, name: GroupName, items: list[_GroupItem]) -> list[_Chunk]:
        chunks: list[_Chunk] = []
        for item in items:
            if item.entry is None:
                chunks.append(_Chunk(item.order, name))
            chunks[-1].lines.extend(item.lines())
        return chunks
