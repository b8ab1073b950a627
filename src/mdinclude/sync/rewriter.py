"""
Rewrite `<!-- INCLUDE-RUST: path -->` blocks in a Markdown document.

A marker line names a source file. The first ```rust fenced block after the
marker has its contents replaced with that file, and the document is written
back only when something actually changed.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple, Union

from loguru import logger

from mdinclude.sync.errors import MalformedMarkerError, MissingInputError, MissingReferenceError
from mdinclude.sync.writer import atomic_write_text

MARKER_PREFIX = "<!-- INCLUDE-RUST: "
MARKER_PATTERN = re.compile(r"<!-- INCLUDE-RUST: (?P<path>.*) -->")
OPENING_FENCE = "```rust"
CLOSING_FENCE = "```"
# "//" or "//!" followed only by whitespace
EMPTY_COMMENT_PATTERN = re.compile(r"^(//!?)[ \t]+$")


class ScanState(Enum):
    OUTSIDE = "outside"
    INSIDE_INCLUDE = "inside_include"
    INSIDE_CODE_BLOCK = "inside_code_block"


@dataclass
class SyncResult:
    """Outcome of synchronizing one document."""

    path: Path
    changed: bool
    includes: List[str] = field(default_factory=list)


def split_lines(text: str) -> List[str]:
    """Split text into lines, each keeping its terminator. A final line without one stays bare."""
    pieces = text.split("\n")
    lines = [piece + "\n" for piece in pieces[:-1]]
    if pieces[-1]:
        lines.append(pieces[-1])
    return lines


def _split_terminator(line: str) -> Tuple[str, str]:
    if line.endswith("\r\n"):
        return line[:-2], "\r\n"
    if line.endswith("\n"):
        return line[:-1], "\n"
    return line, ""


def find_marker(line: str, document: Optional[str] = None, line_number: Optional[int] = None) -> Optional[str]:
    """
    Return the path named by an include marker, or None if the line has no marker.
    Raises:
        MalformedMarkerError: if the line carries the marker prefix but names no file
    """
    body, _ = _split_terminator(line)
    if MARKER_PREFIX not in body:
        return None
    match = MARKER_PATTERN.search(body)
    if not match or not match.group("path"):
        raise MalformedMarkerError(body.strip(), document=document, line_number=line_number)
    return match.group("path")


def normalize_line(line: str) -> str:
    """Strip trailing whitespace from empty `//` and `//!` comment lines."""
    body, terminator = _split_terminator(line)
    return EMPTY_COMMENT_PATTERN.sub(r"\1", body) + terminator


def _resolve(reference: str, base_dir: Optional[Path]) -> Path:
    path = Path(reference)
    if base_dir is not None and not path.is_absolute():
        path = Path(base_dir) / path
    return path


def _read_reference(reference: str, base_dir: Optional[Path], document: str, line_number: int) -> str:
    path = _resolve(reference, base_dir)
    try:
        with path.open("r", encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise MissingReferenceError(path, document=document, line_number=line_number, reason=str(e)) from e


def rewrite_lines(lines: List[str], base_dir: Optional[Path] = None, document: str = "<document>") -> Tuple[List[str], List[str]]:
    """
    Run the include scan over a document's lines.

    Lines inside the target ```rust block are dropped and replaced by the
    referenced file's content, with trailing newlines collapsed to a single
    terminator. Every output line then goes through normalize_line.
    Args:
        lines: Document lines, each with its terminator
        base_dir: Directory for resolving relative referenced paths (defaults to the working directory)
        document: Name used in log and error messages
    Returns:
        Tuple of (output_lines, injected_references)
    Raises:
        MissingReferenceError: as soon as a marker names a file that cannot be read
    """
    state = ScanState.OUTSIDE
    output: List[str] = []
    injected: List[str] = []
    reference = None
    content = None

    for line_number, line in enumerate(lines, start=1):
        body, terminator = _split_terminator(line)

        if state is ScanState.OUTSIDE and MARKER_PREFIX in body:
            reference = find_marker(line, document=document, line_number=line_number)
            logger.info(f"Processing '{document}' include block for: {reference}")
            content = _read_reference(reference, base_dir, document, line_number)
            output.append(line)
            state = ScanState.INSIDE_INCLUDE
        elif state is ScanState.INSIDE_INCLUDE and body == OPENING_FENCE:
            block_terminator = terminator or "\n"
            output.append(body + block_terminator)
            output.extend(split_lines(content.rstrip("\n") + block_terminator))
            injected.append(reference)
            state = ScanState.INSIDE_CODE_BLOCK
        elif state is ScanState.INSIDE_CODE_BLOCK and body == CLOSING_FENCE:
            output.append(line)
            state = ScanState.OUTSIDE
        elif state is not ScanState.INSIDE_CODE_BLOCK:
            if state is ScanState.INSIDE_INCLUDE and MARKER_PREFIX in body:
                logger.warning(f"{document}:{line_number}: include marker found before the '{OPENING_FENCE}' block of '{reference}', ignoring it")
            output.append(line)

    if state is ScanState.INSIDE_INCLUDE:
        logger.warning(f"{document}: no '{OPENING_FENCE}' block found after include marker for '{reference}'")
    elif state is ScanState.INSIDE_CODE_BLOCK:
        logger.warning(f"{document}: '{OPENING_FENCE}' block for '{reference}' is never closed")

    return [normalize_line(line) for line in output], injected


def render(text: str, base_dir: Optional[Path] = None, document: str = "<document>") -> str:
    """Return the document text with every include block refreshed."""
    output, _ = rewrite_lines(split_lines(text), base_dir=base_dir, document=document)
    return "".join(output)


def sync_document(path: Union[str, Path], base_dir: Optional[Path] = None) -> SyncResult:
    """
    Refresh the include blocks of a document on disk.
    Args:
        path: Document to process
        base_dir: Directory for resolving relative referenced paths (defaults to the working directory)
    Returns:
        SyncResult describing whether the file was rewritten
    Raises:
        MissingInputError, MissingReferenceError, WriteFailureError
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8", newline="") as f:
            original = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise MissingInputError(path, str(e)) from e

    output, injected = rewrite_lines(split_lines(original), base_dir=base_dir, document=str(path))
    updated = "".join(output)

    if updated == original:
        logger.debug(f"'{path}' is already up to date")
        return SyncResult(path=path, changed=False, includes=injected)

    atomic_write_text(path, updated)
    logger.debug(f"Updated '{path}' ({len(injected)} include block(s))")
    return SyncResult(path=path, changed=True, includes=injected)
