from collections.abc import Hashable, Sequence
from typing import Any


class SynthesizerError(Exception):
    pass


class InvalidSynthesizerKeyError(SynthesizerError):
    def __init__(self, key: str, path: Sequence[Hashable] = ()) -> None:
        self.key = key
        self.path = tuple(path)
        location = ".".join(str(p) for p in self.path) or "<root>"
        super().__init__(f"invalid synthesizer key '{key}' at {location}")


class TooManyFieldValuesError(SynthesizerError):
    def __init__(self, field: str, count: int, path: Sequence[Hashable] = ()) -> None:
        self.field = field
        self.count = count
        self.path = tuple(path)
        super().__init__(
            f"too many values for field '{field}': expected at most 1, got {count}"
        )


class InvalidDeclarationPathError(SynthesizerError):
    def __init__(self, key: str, segment: Any) -> None:
        self.key = key
        self.segment = segment
        super().__init__(
            f"declaration '{key}' got an argument that can not be used as a "
            f"manifest key: {segment!r}"
        )


class SynthesizerUsageError(SynthesizerError):
    pass


class SynthesizerSourceError(SynthesizerError):
    def __init__(self, msg: str, lineno: int | None = None) -> None:
        self.lineno = lineno
        if lineno is not None:
            msg = f"line {lineno}: {msg}"
        super().__init__(msg)
