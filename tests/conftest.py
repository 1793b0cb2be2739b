"""Shared fixtures: an in-memory CircleCI GraphQL API behind httpx.MockTransport."""

import httpx
import pytest

from circleci_context.client import Client

from tests.fakes import FakeCircleCI


@pytest.fixture
def server():
    return FakeCircleCI()


@pytest.fixture
def client(server):
    with Client(
        "https://circleci.test",
        "graphql-unstable",
        "test-token",
        transport=httpx.MockTransport(server),
    ) as client:
        yield client


@pytest.fixture
def make_client():
    """Build a client whose requests go to `handler`."""

    def make(handler, **kwds) -> Client:
        return Client(
            "https://circleci.test",
            "graphql-unstable",
            "test-token",
            transport=httpx.MockTransport(handler),
            **kwds,
        )

    return make
