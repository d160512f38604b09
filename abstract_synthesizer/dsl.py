"""
Objects handed to synthesis blocks.

A block receives a SynthesisContext. Every attribute of the context is a DSL
call: `ctx.port(8080)` assigns a field, `with ctx.server("web") as srv:` opens
a declaration and yields the context of the nested block. Whether a call is a
declaration is only known once the `with` statement enters it, so each call
stays pending until the next DSL event and is then dispatched to the
synthesizer as a field assignment.
"""

from __future__ import annotations

import keyword
from collections.abc import (
    Callable,
    Hashable,
    Mapping,
    Sequence,
)
from dataclasses import dataclass
from types import TracebackType
from typing import (
    Any,
    Protocol,
)

from abstract_synthesizer.exceptions import SynthesizerUsageError

Path = tuple[Hashable, ...]


class Dispatcher(Protocol):
    def enter_declaration(self, path: Path, name: str, args: Sequence[Any]) -> Path: ...

    def assign_field(self, path: Path, name: str, args: Sequence[Any]) -> None: ...


@dataclass(frozen=True)
class DeclarationCall:
    """One recorded DSL call. A body of None means no nested block."""

    name: str
    args: tuple[Any, ...] = ()
    body: tuple[DeclarationCall, ...] | None = None

    @property
    def has_block(self) -> bool:
        return self.body is not None


def dsl_name(attr: str) -> str:
    # `class_` -> `class`, the usual way around reserved words
    if attr.endswith("_") and keyword.iskeyword(attr[:-1]):
        return attr[:-1]
    return attr


def fold_arguments(args: Sequence[Any], kwargs: Mapping[str, Any]) -> tuple[Any, ...]:
    if kwargs:
        return (*args, dict(kwargs))
    return tuple(args)


class SynthesisSession:
    """State of a single synthesize call: open contexts and the pending call."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher
        self._stack: list[SynthesisContext] = []
        self._pending: PendingCall | None = None

    def root(self) -> SynthesisContext:
        if self._stack:
            raise SynthesizerUsageError("synthesis session already started")
        ctx = SynthesisContext(self, ())
        self._stack.append(ctx)
        return ctx

    def record(self, ctx: SynthesisContext, name: str, args: tuple[Any, ...]) -> PendingCall:
        if not self._stack or self._stack[-1] is not ctx:
            raise SynthesizerUsageError(
                f"call '{name}' was made on a context that is not the innermost "
                "open one, use the context returned by the with statement"
            )
        self.flush()
        self._pending = PendingCall(self, context_path(ctx), name, args)
        return self._pending

    def flush(self) -> None:
        pending, self._pending = self._pending, None
        if pending is not None:
            pending.resolved = True
            self._dispatcher.assign_field(pending.path, pending.name, pending.args)

    def open(self, pending: PendingCall) -> SynthesisContext:
        if pending is not self._pending:
            raise SynthesizerUsageError(
                f"'{pending.name}' was already dispatched, "
                "declarations must be entered right where they are called"
            )
        self._pending = None
        pending.resolved = True
        path = self._dispatcher.enter_declaration(pending.path, pending.name, pending.args)
        ctx = SynthesisContext(self, path)
        self._stack.append(ctx)
        return ctx

    def close(self, ctx: SynthesisContext, failed: bool = False) -> None:
        if failed:
            self._pending = None
        else:
            self.flush()
        if self._stack and self._stack[-1] is ctx:
            self._stack.pop()

    def run(self, block: Callable[[SynthesisContext], Any]) -> None:
        ctx = self.root()
        block(ctx)
        self.close(ctx)


class PendingCall:
    def __init__(
        self, session: SynthesisSession, path: Path, name: str, args: tuple[Any, ...]
    ) -> None:
        self._session = session
        self.path = path
        self.name = name
        self.args = args
        self.resolved = False

    def __enter__(self) -> SynthesisContext:
        self._ctx = self._session.open(self)
        return self._ctx

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._session.close(self._ctx, failed=exc_type is not None)

    def __repr__(self) -> str:
        return f"PendingCall({self.name!r}, args={self.args!r}, path={self.path!r})"


class SynthesisContext:
    __slots__ = ("_session", "_path")

    def __init__(self, session: SynthesisSession, path: Path) -> None:
        self._session = session
        self._path = path

    def __getattr__(self, attr: str) -> Callable[..., PendingCall]:
        if attr.startswith("_"):
            raise AttributeError(attr)
        name = dsl_name(attr)

        def call(*args: Any, **kwargs: Any) -> PendingCall:
            return self._session.record(self, name, fold_arguments(args, kwargs))

        return call

    def __repr__(self) -> str:
        return f"SynthesisContext(path={self._path!r})"


def context_path(ctx: SynthesisContext) -> Path:
    """Declaration path of a context. Not an attribute, every attribute is a DSL call."""
    return ctx._path

