# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Shared test fixtures for http-message tests."""

from __future__ import annotations

from collections.abc import Iterator

import httpx
import pytest

from http_message import HeaderedMessage, Request, Response


@pytest.fixture(params=["request", "response"])
def message(request: pytest.FixtureRequest) -> HeaderedMessage:
    """A message with no headers, as both a Request and a Response."""
    if request.param == "request":
        return Request.from_method_and_uri("GET", "/")
    return Response.from_status(200)


def _echo(request: httpx.Request) -> httpx.Response:
    """Mock handler: echo the body, method and raw header names back."""
    names = ",".join(name.decode("ascii") for name, _ in request.headers.raw)
    return httpx.Response(
        201,
        headers=[
            ("X-Echo-Method", request.method),
            ("X-Echo-Header-Names", names),
            ("X-Echo-Path", request.url.raw_path.decode("ascii")),
        ],
        content=request.content,
    )


@pytest.fixture
def echo_client() -> Iterator[httpx.Client]:
    """An httpx client backed by a MockTransport that echoes requests."""
    with httpx.Client(transport=httpx.MockTransport(_echo)) as client:
        yield client
