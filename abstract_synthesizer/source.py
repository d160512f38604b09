"""
Text front-end for synthesis blocks.

Sources use a small subset of Python syntax:

    with server("web_server", "production"):
        host("example.com")
        port(8080)

Only calls of bare names with literal arguments, `with` statements over such
calls and `pass` are accepted. Declaration arguments must be strings, numbers,
booleans or None, and bytes values are refused. Nothing is executed: the
source is parsed with `ast` and turned into DeclarationCall records.
"""

import ast
from collections.abc import Sequence
from typing import Any

from abstract_synthesizer.dsl import (
    DeclarationCall,
    dsl_name,
    fold_arguments,
)
from abstract_synthesizer.exceptions import SynthesizerSourceError

# declaration arguments become manifest keys
KEY_TYPES = (str, int, float, bool, type(None))


def parse_source(source: str) -> list[DeclarationCall]:
    try:
        tree = ast.parse(source, mode="exec")
    except SyntaxError as e:
        raise SynthesizerSourceError(f"invalid syntax: {e.msg}", e.lineno) from None
    return _parse_body(tree.body)


def _parse_body(statements: Sequence[ast.stmt]) -> list[DeclarationCall]:
    calls = []
    for stmt in statements:
        if isinstance(stmt, ast.Pass):
            continue
        if isinstance(stmt, ast.Expr) and isinstance(stmt.value, ast.Call):
            name, args = _parse_call(stmt.value)
            calls.append(DeclarationCall(name=name, args=args))
        elif isinstance(stmt, ast.With):
            if len(stmt.items) != 1:
                raise SynthesizerSourceError(
                    "with statements open exactly one declaration", stmt.lineno
                )
            expr = stmt.items[0].context_expr
            if not isinstance(expr, ast.Call):
                raise SynthesizerSourceError(
                    "with statements must call a declaration", stmt.lineno
                )
            name, args = _parse_call(expr)
            for arg in args:
                if not isinstance(arg, KEY_TYPES):
                    raise SynthesizerSourceError(
                        f"declaration '{name}' arguments must be strings, numbers, "
                        f"booleans or None, got {type(arg).__name__}",
                        expr.lineno,
                    )
            body = tuple(_parse_body(stmt.body))
            calls.append(DeclarationCall(name=name, args=args, body=body))
        else:
            raise SynthesizerSourceError(
                f"unsupported statement '{type(stmt).__name__}'", stmt.lineno
            )
    return calls


def _parse_call(call: ast.Call) -> tuple[str, tuple[Any, ...]]:
    if not isinstance(call.func, ast.Name):
        raise SynthesizerSourceError("only plain names can be called", call.lineno)
    name = call.func.id
    if name.startswith("_"):
        raise SynthesizerSourceError(f"'{name}' is not a valid DSL name", call.lineno)

    args = [_literal(arg) for arg in call.args]
    kwargs = {}
    for kw in call.keywords:
        if kw.arg is None:
            raise SynthesizerSourceError("'**' arguments are not supported", call.lineno)
        kwargs[kw.arg] = _literal(kw.value)
    return dsl_name(name), fold_arguments(args, kwargs)


def _literal(node: ast.expr) -> Any:
    if isinstance(node, ast.Starred):
        raise SynthesizerSourceError("'*' arguments are not supported", node.lineno)
    try:
        value = ast.literal_eval(node)
    except (ValueError, TypeError):
        raise SynthesizerSourceError(
            f"arguments must be literals, got '{ast.unparse(node)}'", node.lineno
        ) from None
    if _has_bytes(value):
        raise SynthesizerSourceError("bytes values are not supported", node.lineno)
    return value


def _has_bytes(value: Any) -> bool:
    if isinstance(value, bytes):
        return True
    if isinstance(value, dict):
        return any(_has_bytes(k) or _has_bytes(v) for k, v in value.items())
    if isinstance(value, (list, tuple, set, frozenset)):
        return any(_has_bytes(v) for v in value)
    return False
