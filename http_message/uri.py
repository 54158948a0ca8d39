# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""URI value objects for requests.

Messages treat the URI as an opaque collaborator: they only read its
``scheme``, ``host``, ``path`` and ``query``.  Anything satisfying
``UriInterface`` can be used; ``Uri`` is the stock implementation and
delegates all parsing to ``httpx.URL``.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import httpx

from http_message.errors import InvalidArgument, describe_type

__all__ = ["Uri", "UriInterface"]


@runtime_checkable
class UriInterface(Protocol):
    """Accessors a request needs from its URI."""

    @property
    def scheme(self) -> str:
        """URI scheme, e.g. ``"https"``."""
        ...

    @property
    def host(self) -> str:
        """Host component, or ``""`` when absent."""
        ...

    @property
    def path(self) -> str:
        """Path component, or ``""`` when absent."""
        ...

    @property
    def query(self) -> str:
        """Query string without the leading ``?``, or ``""``."""
        ...


class Uri:
    """Immutable URI backed by ``httpx.URL``."""

    __slots__ = ("_url",)

    def __init__(self, value: str | httpx.URL) -> None:
        """Parse *value* with httpx.

        Raises:
            InvalidArgument: If *value* is neither a ``str`` nor an
                ``httpx.URL``, or httpx cannot parse it.

        """
        if isinstance(value, httpx.URL):
            self._url = value
            return
        if not isinstance(value, str):
            raise InvalidArgument.create(1, "value", "str|httpx.URL", describe_type(value))
        try:
            self._url = httpx.URL(value)
        except httpx.InvalidURL as exc:
            raise InvalidArgument(f"Invalid URI {value!r}: {exc}") from exc

    @property
    def url(self) -> httpx.URL:
        """The underlying ``httpx.URL``."""
        return self._url

    @property
    def scheme(self) -> str:
        """URI scheme."""
        return self._url.scheme

    @property
    def host(self) -> str:
        """Host component, or ``""``."""
        return self._url.host

    @property
    def port(self) -> int | None:
        """Explicit port, or ``None`` for the scheme default."""
        return self._url.port

    @property
    def path(self) -> str:
        """Path component as written (still percent-encoded), or ``""``."""
        path, _, _ = self._url.raw_path.decode("ascii").partition("?")
        # httpx reports "/" for an empty path; an empty path serialises differently from an explicit "/"
        if path == "/" and self._url != self._url.copy_with(path="/"):
            return ""
        return path

    @property
    def query(self) -> str:
        """Query string without the leading ``?``, or ``""``."""
        return self._url.query.decode("ascii")

    def __str__(self) -> str:
        """Return the full URL."""
        return str(self._url)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Uri({str(self._url)!r})"

    def __eq__(self, other: object) -> bool:
        """Two URIs are equal when their URLs are equal."""
        if not isinstance(other, Uri):
            return NotImplemented
        return self._url == other._url

    def __hash__(self) -> int:
        """Hash by URL."""
        return hash(self._url)
