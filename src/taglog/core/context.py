"""Tag and payload context scoped to the current thread or asyncio task.

Stacks are kept in context variables as immutable tuples. A new thread starts
with empty stacks, and an asyncio task works on a copy of its parent's
context, so nothing pushed in one is visible in another.
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

_tag_stack: ContextVar[tuple[tuple[str, ...], ...]] = ContextVar(  # noqa: B039
    "taglog_tags", default=()
)
_payload_stack: ContextVar[tuple[Mapping[str, Any], ...]] = ContextVar(  # noqa: B039
    "taglog_payload", default=()
)


@contextmanager
def with_tags(*tags: str) -> Iterator[tuple[str, ...]]:
    """Push tags for the duration of the ``with`` body.

    Yields:
        The full tag sequence active inside the block.
    """
    token = _tag_stack.set(_tag_stack.get() + (tuple(str(tag) for tag in tags),))
    try:
        yield current_tags()
    finally:
        _tag_stack.reset(token)


@contextmanager
def with_payload(
    payload: Mapping[str, Any] | None = None, **fields: Any
) -> Iterator[dict[str, Any]]:
    """Push a payload mapping for the duration of the ``with`` body.

    Keys given here override the same keys from enclosing blocks.

    Yields:
        The merged payload active inside the block.
    """
    layer = {**(payload or {}), **fields}
    token = _payload_stack.set(_payload_stack.get() + (layer,))
    try:
        yield current_payload() or {}
    finally:
        _payload_stack.reset(token)


def current_tags() -> tuple[str, ...]:
    """Return active tags, outer to inner."""
    return tuple(tag for layer in _tag_stack.get() for tag in layer)


def current_payload() -> dict[str, Any] | None:
    """Return the merged active payload, or None outside any payload block."""
    merged: dict[str, Any] = {}
    for layer in _payload_stack.get():
        merged.update(layer)
    return merged or None


def context_depth() -> tuple[int, int]:
    """Return the depth of the tag stack and of the payload stack."""
    return len(_tag_stack.get()), len(_payload_stack.get())
