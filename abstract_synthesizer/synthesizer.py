from collections.abc import (
    Callable,
    Iterable,
    Sequence,
)
from typing import Any

from abstract_synthesizer.dsl import (
    DeclarationCall,
    Path,
    SynthesisContext,
    SynthesisSession,
)
from abstract_synthesizer.exceptions import (
    InvalidDeclarationPathError,
    InvalidSynthesizerKeyError,
    TooManyFieldValuesError,
)
from abstract_synthesizer.source import parse_source
from abstract_synthesizer.utils.data_structures import (
    bury,
    restore_mappings,
    snapshot_mappings,
)

Block = Callable[[SynthesisContext], Any] | str | Iterable[DeclarationCall]


class Synthesizer:
    """
    Collects the calls of a synthesis block into a nested dict (the manifest).

    Declarations (calls entered with `with`) may only use names from the
    vocabulary `keys`; their name and arguments extend the declaration path.
    Any other call assigns a single value under the current path.

    An instance is not thread safe. Use one synthesizer per thread.
    """

    def __init__(self, name: str, keys: Iterable[str]) -> None:
        if isinstance(keys, str):
            raise ValueError("keys must be a collection of names, not a string")
        vocabulary = frozenset(keys)
        if not vocabulary:
            raise ValueError(f"synthesizer {name} needs at least one key")
        for key in vocabulary:
            if not isinstance(key, str) or not key:
                raise ValueError(f"invalid synthesizer key {key!r}")
        self.name = name
        self._keys = vocabulary
        self._manifest: dict[Any, Any] = {}

    @property
    def keys(self) -> frozenset[str]:
        return self._keys

    @property
    def synthesis(self) -> dict[Any, Any]:
        return self._manifest

    def accepts_block(self, name: str, path: Path) -> bool:
        return name in self._keys

    def enter_declaration(self, path: Path, name: str, args: Sequence[Any]) -> Path:
        if not self.accepts_block(name, path):
            raise InvalidSynthesizerKeyError(name, path)
        for arg in args:
            try:
                hash(arg)
            except TypeError:
                raise InvalidDeclarationPathError(name, arg) from None
        return (*path, name, *args)

    def assign_field(self, path: Path, name: str, args: Sequence[Any]) -> None:
        if len(args) > 1:
            raise TooManyFieldValuesError(name, len(args), path)
        value = args[0] if args else None
        bury(self._manifest, *path, name, value=value)

    def synthesize(self, block: Block) -> dict[Any, Any]:
        """
        Evaluate a block against this synthesizer and return the manifest.

        block is a callable receiving the root SynthesisContext, DSL source
        text, or an iterable of DeclarationCall records. On error the manifest
        is restored to what it was before the call and the error is re-raised.
        """
        snapshot = snapshot_mappings(self._manifest)
        try:
            if isinstance(block, str):
                self._interpret(parse_source(block), ())
            elif callable(block):
                SynthesisSession(self).run(block)
            else:
                self._interpret(block, ())
        except Exception:
            restore_mappings(snapshot)
            raise
        return self._manifest

    def _interpret(self, calls: Iterable[DeclarationCall], path: Path) -> None:
        for call in calls:
            if call.body is not None:
                self._interpret(call.body, self.enter_declaration(path, call.name, call.args))
            else:
                self.assign_field(path, call.name, call.args)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, keys={sorted(self._keys)!r})"
