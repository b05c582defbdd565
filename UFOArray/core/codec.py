"""Value codecs: the encode/decode pair each stored value type must provide."""

from __future__ import annotations

from typing import Dict, Generic, TypeVar

from UFOArray.errors import ConfigError, ValueCodecError

T = TypeVar("T")

_FORBIDDEN_KEY_CHARS = ('"', "\n", "\r")


def check_key(key: str) -> str:
    """Reject keys the `"key": value` line shape cannot carry."""
    if not isinstance(key, str):
        raise ValueCodecError(
            f"Key must be a string, got {type(key).__name__}",
            details={"key": key},
        )
    for char in _FORBIDDEN_KEY_CHARS:
        if char in key:
            raise ValueCodecError(
                f"Key contains unsupported character {char!r}",
                details={"key": key},
            )
    return key


class ValueCodec(Generic[T]):
    """Converts values of one type to and from their text form.

    Subclasses implement `_to_text` and `_from_text`. `encode` checks the
    produced text against what the line format can hold, since the format
    has no quoting or escaping.
    """

    name = "base"

    def encode(self, value: T) -> str:
        text = self._to_text(value)
        if not text:
            raise ValueCodecError("Value encodes to empty text", details={"value": value})
        if "\n" in text or "\r" in text:
            raise ValueCodecError("Value text contains a line break", details={"value": value})
        if text != text.strip():
            raise ValueCodecError(
                "Value text has leading or trailing whitespace",
                details={"value": value},
            )
        if text.endswith(","):
            raise ValueCodecError("Value text ends with a comma", details={"value": value})
        return text

    def decode(self, text: str) -> T:
        try:
            return self._from_text(text)
        except ValueCodecError:
            raise
        except (TypeError, ValueError) as exc:
            raise ValueCodecError(
                f"Cannot decode {text!r} with {self.name} codec",
                details={"text": text, "codec": self.name},
            ) from exc

    def _to_text(self, value: T) -> str:
        raise NotImplementedError

    def _from_text(self, text: str) -> T:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class StrCodec(ValueCodec[str]):
    name = "str"

    def _to_text(self, value: str) -> str:
        if not isinstance(value, str):
            raise ValueCodecError(
                f"Expected str, got {type(value).__name__}",
                details={"value": value},
            )
        return value

    def _from_text(self, text: str) -> str:
        return text


class IntCodec(ValueCodec[int]):
    name = "int"

    def _to_text(self, value: int) -> str:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueCodecError(
                f"Expected int, got {type(value).__name__}",
                details={"value": value},
            )
        return str(value)

    def _from_text(self, text: str) -> int:
        return int(text)


class FloatCodec(ValueCodec[float]):
    name = "float"

    def _to_text(self, value: float) -> str:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueCodecError(
                f"Expected float, got {type(value).__name__}",
                details={"value": value},
            )
        # repr is the shortest text that reads back to the same float
        return repr(float(value))

    def _from_text(self, text: str) -> float:
        return float(text)


class BoolCodec(ValueCodec[bool]):
    name = "bool"

    def _to_text(self, value: bool) -> str:
        if not isinstance(value, bool):
            raise ValueCodecError(
                f"Expected bool, got {type(value).__name__}",
                details={"value": value},
            )
        return "true" if value else "false"

    def _from_text(self, text: str) -> bool:
        lowered = text.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        raise ValueError(f"not a boolean: {text!r}")


CODECS: Dict[str, type] = {
    StrCodec.name: StrCodec,
    IntCodec.name: IntCodec,
    FloatCodec.name: FloatCodec,
    BoolCodec.name: BoolCodec,
}


def get_codec(name: str) -> ValueCodec:
    """Return a codec instance by its registered name."""
    codec_cls = CODECS.get(str(name).strip().lower())
    if codec_cls is None:
        raise ConfigError(
            f"Unknown value codec: {name!r}",
            details={"available": sorted(CODECS)},
        )
    return codec_cls()
