"""Class-partitioned key-value store with a text file round trip."""

from __future__ import annotations

import bisect
import logging
from pathlib import Path
from typing import Any, Dict, Generic, List, Tuple, TypeVar

from UFOArray.config.settings import StoreSettings
from UFOArray.core.codec import StrCodec, ValueCodec, check_key, get_codec
from UFOArray.core.text_format import parse_lines, render_block
from UFOArray.errors import ClassNotFoundError, IndexOutOfRangeError, StoreIOError
from UFOArray.integrations.viewer import DefaultViewer, Viewer

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _ClassEntries(Generic[T]):
    """Key/value pairs of one class, with keys kept in ascending order."""

    def __init__(self) -> None:
        self.values: Dict[str, T] = {}
        self.keys: List[str] = []

    def put(self, key: str, value: T) -> None:
        if key not in self.values:
            bisect.insort(self.keys, key)
        self.values[key] = value

    def item(self, index: int) -> Tuple[str, T]:
        key = self.keys[index]
        return key, self.values[key]

    def as_dict(self) -> Dict[str, T]:
        return {key: self.values[key] for key in self.keys}

    def __len__(self) -> int:
        return len(self.keys)


class CategoryCursor(Generic[T]):
    """Explicit handle on the class that insertions target.

    Returned by `ClassStore.set_category`. Insertions through a cursor always
    go to the class it was created for; the store holds no selected class.
    """

    def __init__(self, store: "ClassStore[T]", name: str) -> None:
        self.store = store
        self.name = name

    def set_category(self, name: str) -> "CategoryCursor[T]":
        return self.store.set_category(name)

    def add(self, key: str, value: T, *pairs: Any) -> "CategoryCursor[T]":
        self.store.add_to(self.name, key, value, *pairs)
        return self

    def to_string(self) -> str:
        return self.store.to_string(self.name)

    def save(self, path: str | Path, append: bool | None = None) -> None:
        self.store.save(path, self.name, append=append)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"CategoryCursor(name={self.name!r})"


class ClassStore(Generic[T]):
    """Values of one type grouped by class name, then by key."""

    def __init__(
        self,
        codec: ValueCodec[T] | None = None,
        viewer: Viewer | None = None,
        *,
        encoding: str = "utf-8",
        append: bool = True,
    ) -> None:
        self.codec: ValueCodec[T] = codec if codec is not None else StrCodec()  # type: ignore[assignment]
        self.viewer: Viewer = viewer if viewer is not None else DefaultViewer()
        self.encoding = encoding
        self.append = append
        self._classes: Dict[str, _ClassEntries[T]] = {}

    @classmethod
    def from_settings(cls, settings: StoreSettings, viewer: Viewer | None = None) -> "ClassStore":
        return cls(
            get_codec(settings.codec),
            viewer,
            encoding=settings.encoding,
            append=settings.append,
        )

    # Mutation

    def set_category(self, name: str) -> CategoryCursor[T]:
        """Select a class for insertions. Nothing is allocated until `add`."""
        return CategoryCursor(self, name)

    def add(self, key: str, value: T, *pairs: Any) -> CategoryCursor[T]:
        """Insert into the unnamed ("") class, as when no class was selected."""
        return self.set_category("").add(key, value, *pairs)

    def add_to(self, name: str, key: str, value: T, *pairs: Any) -> None:
        """Insert key/value pairs left to right, overwriting existing keys."""
        if len(pairs) % 2:
            raise TypeError("add() expects key/value pairs; got an odd number of arguments")
        items = [(key, value)] + [(pairs[i], pairs[i + 1]) for i in range(0, len(pairs), 2)]
        for item_key, item_value in items:
            check_key(item_key)
            self.codec.encode(item_value)
        entries = self._classes.get(name)
        if entries is None:
            entries = self._classes[name] = _ClassEntries()
        for item_key, item_value in items:
            entries.put(item_key, item_value)

    def clear(self) -> None:
        self._classes.clear()

    # Text format

    def to_string(self, name: str) -> str:
        entries = self._classes.get(name)
        if entries is None:
            raise ClassNotFoundError(f"Class not found: {name!r}", details={"class": name})
        return render_block(name, entries.values, self.codec)

    def save(self, path: str | Path, name: str, append: bool | None = None) -> None:
        """Write the block of one class to `path`.

        Only the named class is written; call once per class, or use
        `save_all`, to persist the whole store.
        """
        if append is None:
            append = self.append
        block = self.to_string(name)
        self._write(path, block + "\n", append)
        logger.info("Saved class %r (%d entries) to %s", name, len(self._classes[name]), path)

    def save_all(self, path: str | Path, append: bool = False) -> None:
        """Write every class, in ascending class-name order."""
        text = "".join(self.to_string(name) + "\n" for name in self.class_names())
        self._write(path, text, append)
        logger.info("Saved %d classes to %s", len(self._classes), path)

    def _write(self, path: str | Path, text: str, append: bool) -> None:
        mode = "a" if append else "w"
        try:
            with open(path, mode, encoding=self.encoding) as handle:
                handle.write(text)
        except OSError as exc:
            raise StoreIOError(
                f"Cannot open {path} for writing",
                details={"path": str(path), "mode": mode},
            ) from exc

    def load(self, path: str | Path) -> None:
        """Replace the whole store with the blocks read from `path`.

        Undecodable bytes are dropped, so the lines holding them parse as
        malformed and are skipped. The store is only replaced once the whole
        file has been read.
        """
        try:
            handle = open(path, "r", encoding=self.encoding, errors="ignore")
        except OSError as exc:
            raise StoreIOError(
                f"Cannot open {path} for reading",
                details={"path": str(path)},
            ) from exc
        classes: Dict[str, _ClassEntries[T]] = {}
        count = 0
        try:
            with handle:
                for entry in parse_lines(handle, self.codec):
                    entries = classes.get(entry.category)
                    if entries is None:
                        entries = classes[entry.category] = _ClassEntries()
                    entries.put(entry.key, entry.value)
                    count += 1
        except OSError as exc:
            raise StoreIOError(
                f"Cannot read {path}",
                details={"path": str(path)},
            ) from exc
        self._classes = classes
        logger.info("Loaded %d entries in %d classes from %s", count, len(classes), path)

    # Queries

    def get_all_by_class(self, name: str) -> Dict[str, T]:
        entries = self._classes.get(name)
        if entries is None:
            raise ClassNotFoundError(f"Class not found: {name!r}", details={"class": name})
        return entries.as_dict()

    def get_first_by_class(self, name: str) -> Tuple[str, T]:
        entries = self._classes.get(name)
        if not entries:
            raise ClassNotFoundError(f"No entries in class {name!r}", details={"class": name})
        return entries.item(0)

    def get_last_by_class(self, name: str) -> Tuple[str, T]:
        entries = self._classes.get(name)
        if not entries:
            raise ClassNotFoundError(f"No entries in class {name!r}", details={"class": name})
        return entries.item(-1)

    def get_by_index_and_class(self, name: str, index: int) -> Tuple[str, T]:
        entries = self._classes.get(name)
        if entries is None or not 0 <= index < len(entries):
            raise IndexOutOfRangeError(
                f"Index {index} out of range or class {name!r} not found",
                details={"class": name, "index": index},
            )
        return entries.item(index)

    def class_names(self) -> List[str]:
        return sorted(self._classes)

    def has_class(self, name: str) -> bool:
        return name in self._classes

    def __contains__(self, name: object) -> bool:
        return name in self._classes

    def __len__(self) -> int:
        return len(self._classes)

    # Collaborators

    def open_file(self, path: str | Path) -> None:
        """Hand `path` to the viewer; its outcome is not reported back."""
        self.viewer.open(path)
