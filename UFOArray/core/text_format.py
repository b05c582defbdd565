"""Reader and writer for the class block text format.

A block looks like::

    (Animals)
    {
    	"cat": 4,
    	"dog": 3
    }

Several blocks may follow each other in one file.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Generic, Iterable, Iterator, Mapping, TypeVar

from UFOArray.core.codec import ValueCodec
from UFOArray.errors import ValueCodecError

logger = logging.getLogger(__name__)

T = TypeVar("T")

HEADER_RE = re.compile(r"^[ \t]*\((?P<name>.*)\)[ \t]*$")
ENTRY_RE = re.compile(
    r'^[ \t]*"(?P<key>[^"\r\n]*)":[ \t]*(?P<value>.*?),?[ \t]*$'
)


@dataclass(frozen=True)
class ParsedEntry(Generic[T]):
    category: str
    key: str
    value: T


def render_block(name: str, entries: Mapping[str, T], codec: ValueCodec[T]) -> str:
    """Render one class as a block, keys in ascending order."""
    lines = [f'\t"{key}": {codec.encode(entries[key])}' for key in sorted(entries)]
    return f"({name})\n{{\n" + ",\n".join(lines) + "\n}"


def parse_lines(lines: Iterable[str], codec: ValueCodec[T]) -> Iterator[ParsedEntry[T]]:
    """Yield entries in read order; lines that fit no pattern are skipped."""
    category: str | None = None
    for lineno, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        header = HEADER_RE.match(line)
        if header:
            category = header.group("name")
            continue
        entry = ENTRY_RE.match(line)
        if not entry:
            continue
        if category is None:
            logger.debug("Line %d: entry before any class header, skipped", lineno)
            continue
        text = entry.group("value")
        if not text:
            logger.debug("Line %d: entry without value, skipped", lineno)
            continue
        try:
            value = codec.decode(text)
        except ValueCodecError as exc:
            logger.warning("Line %d: %s", lineno, exc)
            continue
        yield ParsedEntry(category=category, key=entry.group("key"), value=value)
