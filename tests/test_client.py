"""Tests for the GraphQL transport."""

import json
from unittest.mock import patch

import httpx
import pytest

from circleci_context.client import Client, redact
from circleci_context.errors import ConfigurationError, TransportError


def respond(*args, **kwds):
    return lambda request: httpx.Response(*args, **kwds)


class TestRun:
    """Test sending requests."""

    def test_posts_query_and_variables(self, make_client):
        """Test the request body, URL and headers."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"data": {"ok": True}})

        with make_client(handler) as client:
            request = client.new_request("query { ok }")
            request.var("orgName", "circleci")
            assert client.run(request) == {"ok": True}

        (sent,) = seen
        assert str(sent.url) == "https://circleci.test/graphql-unstable"
        assert sent.method == "POST"
        assert sent.headers["Authorization"] == "test-token"
        assert sent.headers["Accept"] == "application/json"
        assert sent.headers["User-Agent"].startswith("circleci-context/")
        assert json.loads(sent.content) == {
            "query": "query { ok }",
            "variables": {"orgName": "circleci"},
        }

    def test_url_joins_host_and_endpoint(self):
        """Test that slashes between host and endpoint are normalized."""
        client = Client("https://circleci.com/", "/graphql-unstable", "t")
        assert client.url == "https://circleci.com/graphql-unstable"
        client.close()

    def test_graphql_errors(self, make_client):
        """Test that a GraphQL `errors` array is a transport error."""
        handler = respond(
            200,
            json={
                "data": None,
                "errors": [
                    {"message": "Must be logged in"},
                    {"message": "Forbidden"},
                ],
            },
        )
        with make_client(handler) as client:
            with pytest.raises(
                TransportError, match="Must be logged in: Forbidden"
            ):
                client.run(client.new_request("query { ok }"))

    def test_http_status(self, make_client):
        """Test that a non-2xx status is a transport error."""
        with make_client(respond(500, text="boom")) as client:
            with pytest.raises(TransportError, match="request failed") as info:
                client.run(client.new_request("query { ok }"))

        assert isinstance(info.value.__cause__, httpx.HTTPStatusError)

    def test_network_failure(self, make_client):
        """Test that connection errors are transport errors."""

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with make_client(handler) as client:
            with pytest.raises(TransportError, match="connection refused"):
                client.run(client.new_request("query { ok }"))

    def test_not_json(self, make_client):
        """Test that an undecodable body is a transport error."""
        with make_client(respond(200, text="<html>")) as client:
            with pytest.raises(TransportError, match="could not decode"):
                client.run(client.new_request("query { ok }"))

    def test_missing_data(self, make_client):
        """Test that an empty body yields empty data."""
        with make_client(respond(200, json={})) as client:
            assert client.run(client.new_request("query { ok }")) == {}


class TestFromConfig:
    """Test building a client from configuration."""

    def test_token_from_environment(self, monkeypatch):
        monkeypatch.setenv("CIRCLECI_CLI_TOKEN", "env-token")
        with Client.from_config() as client:
            assert client.token == "env-token"
            assert client.url.endswith("/graphql-unstable")

    def test_explicit_values_win(self, monkeypatch):
        monkeypatch.setenv("CIRCLECI_CLI_TOKEN", "env-token")
        with Client.from_config(
            token="flag-token", host="https://example.test", endpoint="gql"
        ) as client:
            assert client.token == "flag-token"
            assert client.url == "https://example.test/gql"

    def test_missing_token(self, monkeypatch):
        monkeypatch.delenv("CIRCLECI_CLI_TOKEN", raising=False)
        with pytest.raises(ConfigurationError, match="CIRCLECI_CLI_TOKEN"):
            Client.from_config()


def test_redact_hides_secret_values():
    variables = {
        "input": {"contextId": "ctx-1", "variable": "KEY", "value": "s3cr3t"}
    }
    assert redact(variables) == {
        "input": {
            "contextId": "ctx-1",
            "variable": "KEY",
            "value": "<redacted>",
        }
    }


class TestDebugLogging:
    """Test request/response logging on debug clients."""

    def test_request_logged_redacted(self, make_client):
        """Test that secret values and the token never reach the log."""
        handler = respond(200, json={"data": {"ok": True}})

        with patch("circleci_context.client.LOG") as log:
            with make_client(handler, debug=True) as client:
                request = client.new_request("mutation { ok }")
                request.var(
                    "input",
                    {"contextId": "ctx-1", "variable": "KEY", "value": "s3cr3t"},
                )
                client.run(request)

        request_call, response_call = log.debug.call_args_list
        assert request_call.args == ("GraphQL request",)
        assert request_call.kwargs["variables"] == {
            "input": {
                "contextId": "ctx-1",
                "variable": "KEY",
                "value": "<redacted>",
            }
        }
        assert response_call.args == ("GraphQL response",)
        assert response_call.kwargs["body"] == {"data": {"ok": True}}
        assert "s3cr3t" not in repr(log.mock_calls)
        assert "test-token" not in repr(log.mock_calls)

    def test_quiet_without_debug(self, make_client):
        handler = respond(200, json={"data": {"ok": True}})

        with patch("circleci_context.client.LOG") as log:
            with make_client(handler) as client:
                client.run(client.new_request("query { ok }"))

        log.debug.assert_not_called()
