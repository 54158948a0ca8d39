# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Tests for http_message.uri — the httpx-backed Uri."""

from __future__ import annotations

import httpx
import pytest

from http_message import InvalidArgument, Uri, UriInterface


class TestUri:
    """Tests for Uri accessors."""

    def test_components(self) -> None:
        """Scheme, host, port, path and query come from httpx."""
        uri = Uri("https://example.com:8443/a/b?x=1&y=2")
        assert uri.scheme == "https"
        assert uri.host == "example.com"
        assert uri.port == 8443
        assert uri.path == "/a/b"
        assert uri.query == "x=1&y=2"

    @pytest.mark.parametrize(
        ("url", "path"),
        [
            ("https://example.com", ""),
            ("https://example.com/", "/"),
            ("https://example.com?q=1", ""),
            ("https://example.com#frag", ""),
            ("https://example.com/#frag", "/"),
            ("https://example.com/a%20b?q=1", "/a%20b"),
            ("/rel", "/rel"),
        ],
        ids=["no_path", "root", "query_only", "fragment_only", "root_fragment", "percent_encoded", "relative"],
    )
    def test_path(self, url: str, path: str) -> None:
        """An absent path is reported as ''."""
        assert Uri(url).path == path

    def test_empty_path_differs_from_httpx_path(self) -> None:
        """httpx reports "/" for an empty path; Uri keeps it empty."""
        uri = Uri("https://example.com")
        assert uri.url.path == "/"
        assert uri.path == ""

    def test_relative_has_no_host(self) -> None:
        """Relative references have an empty host."""
        uri = Uri("/a?b=c")
        assert uri.host == ""
        assert uri.query == "b=c"

    def test_from_httpx_url(self) -> None:
        """An httpx.URL is wrapped as-is."""
        url = httpx.URL("http://example.org/x")
        uri = Uri(url)
        assert uri.url is url
        assert str(uri) == "http://example.org/x"

    def test_satisfies_protocol(self) -> None:
        """Uri implements UriInterface."""
        assert isinstance(Uri("/"), UriInterface)

    def test_equality(self) -> None:
        """Equal URLs compare equal and hash alike."""
        assert Uri("https://example.com/a") == Uri(httpx.URL("https://example.com/a"))
        assert hash(Uri("https://example.com/a")) == hash(Uri("https://example.com/a"))
        assert Uri("https://example.com/a") != Uri("https://example.com/b")
        assert Uri("/").__eq__("/") is NotImplemented

    @pytest.mark.parametrize("value", [None, 1, b"/"], ids=["none", "int", "bytes"])
    def test_invalid_type(self, value: object) -> None:
        """Non-str, non-URL values raise InvalidArgument."""
        with pytest.raises(InvalidArgument, match=r"\(value\)"):
            Uri(value)  # type: ignore[arg-type]

    def test_unparseable(self) -> None:
        """httpx parse failures surface as InvalidArgument."""
        with pytest.raises(InvalidArgument, match="Invalid URI"):
            Uri("https://example.com:abc/")
