"""Reading and rewriting the SearchPaths block of gameinfo.gi.

gameinfo.gi is hand-authored KeyValues text. Only the SearchPaths block
is ever touched: the file is handled as a list of lines (each keeping its
own line ending), the block's line span is located by marker, and on
write the span is replaced while every other line is kept verbatim.

Each call re-reads the file; nothing is cached and no lock is held. An
external edit landing between the read and the write of a patch is lost.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import vdf

from citadelctl.core.errors import CitadelctlError, GamePathNotFoundError
from citadelctl.core.paths import get_gameinfo_path
from citadelctl.gameinfo.models import (
    MODDED_SEARCH_PATHS,
    VANILLA_SEARCH_PATHS,
    SearchPaths,
    SearchPathsState,
    classify_search_paths,
)

logger = logging.getLogger(__name__)

SEARCH_PATHS_MARKER = "SearchPaths"
BLOCK_END = "}"

GAME_KEY = "Game"
MOD_KEY = "Mod"
WRITE_KEY = "Write"


class SearchPathsError(CitadelctlError):
    """Base exception for gameinfo.gi errors."""


class GameInfoReadError(SearchPathsError):
    """Raised when gameinfo.gi cannot be read."""


class GameInfoWriteError(SearchPathsError):
    """Raised when gameinfo.gi cannot be written."""


class SearchPathsParseError(SearchPathsError):
    """Raised when the SearchPaths block is missing or malformed."""


@dataclass(frozen=True, slots=True)
class SearchPathsSpan:
    """Location of the SearchPaths block within a list of lines.

    Attributes:
        indices: Line indices belonging to the block, in match order.
            When the marker matches more than once, the spans of every
            match are concatenated here.
        tab_level: Leading tab count of the first marker line.
        match_count: Number of lines that contained the marker.
    """

    indices: tuple[int, ...]
    tab_level: int
    match_count: int

    @property
    def first(self) -> int:
        """Index of the first marker line."""
        return self.indices[0]


def split_lines(content: str) -> list[str]:
    """Split text into lines that keep their line endings.

    Only ``\\n`` separates lines, so ``\\r\\n`` endings and any other
    control characters stay part of the line they belong to.
    """
    parts = content.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def _line_ending(line: str) -> str:
    if line.endswith("\r\n"):
        return "\r\n"
    if line.endswith("\n"):
        return "\n"
    return ""


def locate_search_paths(lines: list[str]) -> SearchPathsSpan:
    """Find the line span of the SearchPaths block.

    Every line containing the marker starts a span that runs up to and
    including the first following line containing a closing brace. All
    spans are collected into one.

    Args:
        lines: File contents as returned by split_lines().

    Returns:
        The located span.

    Raises:
        SearchPathsParseError: If no marker is found, or a span is not closed.
    """
    indices: list[int] = []
    tab_level = 0
    match_count = 0

    for i, line in enumerate(lines):
        if SEARCH_PATHS_MARKER not in line:
            continue

        if match_count == 0:
            tab_level = len(line) - len(line.lstrip("\t"))
        match_count += 1
        indices.append(i)

        j = i + 1
        while True:
            if j >= len(lines):
                msg = f"{SEARCH_PATHS_MARKER} block starting at line {i + 1} is never closed"
                raise SearchPathsParseError(msg)
            indices.append(j)
            if BLOCK_END in lines[j]:
                break
            j += 1

    if not indices:
        raise SearchPathsParseError(f"No {SEARCH_PATHS_MARKER} block found")

    if match_count > 1:
        logger.warning(
            "Found %d %s markers; their blocks are merged into one",
            match_count,
            SEARCH_PATHS_MARKER,
        )

    return SearchPathsSpan(indices=tuple(indices), tab_level=tab_level, match_count=match_count)


def parse_search_paths(text: str) -> SearchPaths:
    """Parse a SearchPaths block from KeyValues text.

    Platform conditionals such as `[$WIN64]` are dropped by the KeyValues
    parser, so a block using them may classify as vanilla and is rewritten
    without them.

    Args:
        text: The block's lines joined with newlines.

    Returns:
        Parsed block contents.

    Raises:
        SearchPathsParseError: If the text is not a single well-formed block.
    """
    try:
        data = vdf.loads(text, mapper=vdf.VDFDict, merge_duplicate_keys=False)
    except SyntaxError as e:
        raise SearchPathsParseError(f"Invalid {SEARCH_PATHS_MARKER} block: {e}") from e

    roots = list(data.items())
    if len(roots) != 1 or isinstance(roots[0][1], str):
        msg = f"Expected a single {SEARCH_PATHS_MARKER} block, found {len(roots)} top-level keys"
        raise SearchPathsParseError(msg)

    entries: list[str] = []
    mod_values: list[str] = []
    write_values: list[str] = []

    for key, value in roots[0][1].items():
        if key == GAME_KEY:
            target = entries
        elif key == MOD_KEY:
            target = mod_values
        elif key == WRITE_KEY:
            target = write_values
        else:
            continue

        if not isinstance(value, str):
            raise SearchPathsParseError(f"'{key}' must be a value, not a block")
        target.append(value)

    if not entries:
        raise SearchPathsParseError(f"{SEARCH_PATHS_MARKER} block has no '{GAME_KEY}' entries")
    for key, values in ((MOD_KEY, mod_values), (WRITE_KEY, write_values)):
        if len(values) > 1:
            raise SearchPathsParseError(f"Duplicate '{key}' key in {SEARCH_PATHS_MARKER}")

    return SearchPaths(
        entries=tuple(entries),
        mod_key=mod_values[0] if mod_values else None,
        write_key=write_values[0] if write_values else None,
    )


def serialize_search_paths(search_paths: SearchPaths, tab_level: int = 0) -> list[str]:
    """Serialize a SearchPaths block in gameinfo.gi style.

    The KeyValues serializer quotes every token; gameinfo.gi does not, so
    quotes are stripped. Every line is indented by ``tab_level`` tabs.

    Args:
        search_paths: Block contents to serialize.
        tab_level: Indentation of the block's key line.

    Returns:
        Serialized lines without line endings.
    """
    block = vdf.VDFDict()
    for entry in search_paths.entries:
        block[GAME_KEY] = entry
    if search_paths.mod_key is not None:
        block[MOD_KEY] = search_paths.mod_key
    if search_paths.write_key is not None:
        block[WRITE_KEY] = search_paths.write_key

    root = vdf.VDFDict()
    root[SEARCH_PATHS_MARKER] = block

    text = vdf.dumps(root, pretty=True).replace('"', "").rstrip("\n")
    tabs = "\t" * tab_level
    return [f"{tabs}{line}" for line in text.split("\n")]


def replace_span(lines: list[str], span: SearchPathsSpan, block_lines: list[str]) -> list[str]:
    """Replace a located span with new block lines.

    The first marker line is replaced by the block; every other line of
    the span is dropped. Lines outside the span are returned unchanged
    and in their original order. Inserted lines take the line ending of
    the first marker line; the last one takes the ending of the last
    span line so a file without a trailing newline keeps it that way.

    Args:
        lines: File contents as returned by split_lines().
        span: Span located in ``lines``.
        block_lines: Replacement lines without line endings.

    Returns:
        New list of lines.
    """
    span_indices = set(span.indices)
    newline = _line_ending(lines[span.first]) or "\n"
    last_ending = _line_ending(lines[max(span_indices)])

    replacement = [line + newline for line in block_lines[:-1]]
    replacement.append(block_lines[-1] + last_ending)

    result: list[str] = []
    for i, line in enumerate(lines):
        if i == span.first:
            result.extend(replacement)
        elif i not in span_indices:
            result.append(line)
    return result


class SearchPathsPatcher:
    """Reads, classifies and rewrites the SearchPaths block of gameinfo.gi.

    Attributes:
        gameinfo_path: Location of gameinfo.gi.
    """

    def __init__(self, game_path: Path | None) -> None:
        """Initialize the patcher for a game installation.

        Args:
            game_path: Root of the game installation, None if not located.

        Raises:
            GamePathNotFoundError: If game_path is None.
        """
        if game_path is None:
            raise GamePathNotFoundError()
        self.gameinfo_path = get_gameinfo_path(game_path)

    def _read_lines(self) -> list[str]:
        try:
            with open(self.gameinfo_path, encoding="utf-8", newline="") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise GameInfoReadError(f"Could not read gameinfo.gi: {e}") from e
        return split_lines(content)

    def read(self) -> SearchPaths:
        """Read and parse the current SearchPaths block.

        Returns:
            Parsed block contents.

        Raises:
            GameInfoReadError: If the file cannot be read.
            SearchPathsParseError: If the block is missing or malformed.
        """
        lines = self._read_lines()
        span = locate_search_paths(lines)
        text = "\n".join(lines[i].rstrip("\r\n") for i in span.indices)
        return parse_search_paths(text)

    def get_state(self) -> SearchPathsState:
        """Classify the current SearchPaths block."""
        return classify_search_paths(self.read())

    def write(self, search_paths: SearchPaths) -> None:
        """Replace the SearchPaths block, keeping the rest of the file intact.

        The file is rewritten in a single write without a temporary file.

        Args:
            search_paths: New block contents.

        Raises:
            GameInfoReadError: If the file cannot be read.
            SearchPathsParseError: If no block can be located.
            GameInfoWriteError: If the file cannot be written.
        """
        lines = self._read_lines()
        span = locate_search_paths(lines)
        block_lines = serialize_search_paths(search_paths, span.tab_level)
        content = "".join(replace_span(lines, span, block_lines))

        try:
            with open(self.gameinfo_path, "w", encoding="utf-8", newline="") as f:
                f.write(content)
        except OSError as e:
            raise GameInfoWriteError(f"Could not write gameinfo.gi: {e}") from e

        logger.info("Wrote %s block to %s", SEARCH_PATHS_MARKER, self.gameinfo_path)

    def mod(self) -> SearchPathsState:
        """Adapt a vanilla block for addon loading.

        Modded and custom blocks are left untouched.

        Returns:
            State after the call.
        """
        state = self.get_state()
        if state != SearchPathsState.VANILLA:
            logger.debug("SearchPaths already %s, not modifying", state.value)
            return state

        self.write(MODDED_SEARCH_PATHS)
        return SearchPathsState.MODDED

    def reset(self) -> None:
        """Write the vanilla block, whatever the current state."""
        self.write(VANILLA_SEARCH_PATHS)
