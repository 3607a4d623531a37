"""
Compiled message specifications.

A path template such as ``/db/:bucket/:oid?depth&refresh`` is compiled once
per message class into literal path fragments and query names. Message
instances bind their positional arguments against it by index.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Tuple

_MARKER = re.compile(r"[:*]\w*")


@dataclass(frozen=True)
class MessageSpecification:
    """Immutable description of one message type.

    Attributes:
        method: The HTTP method, or ``OAUTH`` for external authorization.
        path: Literal path fragments; one positional argument goes between
            each pair of fragments.
        dynamic: Whether the last path argument captures the rest of the
            path (``*name`` marker).
        query: Query parameter names in declaration order.
        status: The accepted response status codes.
        external: Whether ``path`` is one absolute URL.
    """

    method: str
    path: Tuple[str, ...]
    dynamic: bool = False
    query: Tuple[str, ...] = ()
    status: frozenset = frozenset()
    external: bool = False

    @property
    def path_arguments(self) -> int:
        """The number of positional path arguments a message expects."""
        return len(self.path) - 1


def compile_specification(method: str, path: str, status: Iterable[int]) -> MessageSpecification:
    """Compile a path template relative to the service base path.

    Args:
        method: The HTTP method.
        path: The path template with ``:name``/``*name`` markers and an
            optional ``?key=value&...`` suffix.
        status: The accepted response status codes.

    Returns:
        The compiled specification.
    """
    template, _, query_string = path.partition("?")
    fragments = tuple(_MARKER.split(template))

    query = ()
    if query_string:
        query = tuple(arg.split("=")[0] for arg in query_string.split("&"))

    return MessageSpecification(
        method=method,
        path=fragments,
        dynamic="*" in path,
        query=query,
        status=frozenset(status),
    )


def external_specification(
    method: str, path: str, query: Iterable[str], status: Iterable[int]
) -> MessageSpecification:
    """Create a specification for an absolute third-party URL.

    The path is kept as a single literal; query names are given explicitly.
    """
    return MessageSpecification(
        method=method,
        path=(path,),
        query=tuple(query),
        status=frozenset(status),
        external=True,
    )
