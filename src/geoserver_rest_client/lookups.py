"""
Single-resource lookups that tell "resource absent" apart from "server broken".

A failed GET on an item endpoint is ambiguous: GeoServer answers a missing
resource with an error status, but so does a server that is down or
misconfigured. ``lookup`` resolves the ambiguity by asking the liveness probe
after the fetch failed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, TypeVar, Union

from .errors import GeoServerClientError

T = TypeVar("T")


@dataclass(frozen=True)
class Found(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    pass


@dataclass(frozen=True)
class Unreachable:
    error: GeoServerClientError


LookupResult = Union[Found[T], NotFound, Unreachable]


async def lookup(
    fetch: Callable[[], Awaitable[T]],
    probe: Callable[[], Awaitable[bool]],
) -> LookupResult[T]:
    """
    Run ``fetch``; on failure call ``probe``.
    - probe reports the server alive -> NotFound
    - probe reports the server down  -> Unreachable(original error)
    """
    try:
        return Found(await fetch())
    except GeoServerClientError as exc:
        if await probe():
            return NotFound()
        return Unreachable(exc)


def unwrap(result: LookupResult[T]) -> Optional[T]:
    """Found -> value, NotFound -> None, Unreachable -> raise the original error."""
    if isinstance(result, Found):
        return result.value
    if isinstance(result, Unreachable):
        raise result.error
    return None


__all__ = ["Found", "NotFound", "Unreachable", "LookupResult", "lookup", "unwrap"]
