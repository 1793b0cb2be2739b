from __future__ import annotations
import os
from typing import Any, Dict, Optional

import httpx
import splatlog as logging

from circleci_context.config import CONFIG
from circleci_context.errors import ConfigurationError, TransportError

LOG = logging.getLogger(__name__)

REDACTED = "<redacted>"
SECRET_KEYS = ("value",)


def redact(variables: Any) -> Any:
    if isinstance(variables, dict):
        return {
            key: REDACTED if key in SECRET_KEYS else redact(value)
            for key, value in variables.items()
        }
    if isinstance(variables, list):
        return [redact(item) for item in variables]
    return variables


class Request:
    def __init__(self, query: str, token: Optional[str] = None):
        self.query = query
        self.token = token
        self.variables: Dict[str, Any] = {}

    def var(self, name: str, value: Any) -> None:
        self.variables[name] = value

    def to_json(self) -> Dict[str, Any]:
        return {"query": self.query, "variables": self.variables}


class Client:
    """\
    Minimal GraphQL client for the CircleCI API. Callers hand it explicitly to
    every operation in `circleci_context.api`.

    Any failure to get a `data` object back (network, HTTP status, body that
    is not JSON, GraphQL `errors`) raises `TransportError`.
    """

    host: str
    endpoint: str
    token: str
    debug: bool

    @classmethod
    def from_config(
        cls,
        *,
        host: Optional[str] = None,
        endpoint: Optional[str] = None,
        token: Optional[str] = None,
        debug: bool = False,
    ) -> Client:
        if token is None:
            token = os.environ.get(CONFIG.api.token_env)
        if not token:
            raise ConfigurationError(
                "No API token configured, set "
                f"${CONFIG.api.token_env} or pass --token"
            )
        return cls(
            host=CONFIG.api.host if host is None else host,
            endpoint=CONFIG.api.endpoint if endpoint is None else endpoint,
            token=token,
            debug=debug,
        )

    def __init__(
        self,
        host: str,
        endpoint: str,
        token: str,
        *,
        debug: bool = False,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.host = host
        self.endpoint = endpoint
        self.token = token
        self.debug = debug
        self._http = httpx.Client(
            transport=transport,
            headers={
                "Accept": "application/json",
                "User-Agent": f"{CONFIG.name}/{CONFIG.version}",
            },
        )

    @property
    def url(self) -> str:
        return f"{self.host.rstrip('/')}/{self.endpoint.lstrip('/')}"

    def new_request(self, query: str) -> Request:
        return Request(query, token=self.token)

    def run(self, request: Request) -> Dict[str, Any]:
        if self.debug:
            LOG.debug(
                "GraphQL request",
                url=self.url,
                query=request.query,
                variables=redact(request.variables),
            )

        headers = {}
        if request.token:
            headers["Authorization"] = request.token

        try:
            response = self._http.post(
                self.url, json=request.to_json(), headers=headers
            )
            response.raise_for_status()
        except httpx.HTTPError as error:
            raise TransportError("request failed", error) from error

        try:
            body = response.json()
        except ValueError as error:
            raise TransportError(
                "could not decode response", error
            ) from error

        if self.debug:
            LOG.debug("GraphQL response", status=response.status_code, body=body)

        if not isinstance(body, dict):
            raise TransportError(f"unexpected response body: {body!r}")

        if errors := body.get("errors"):
            raise TransportError(
                ": ".join(
                    str(error.get("message", error))
                    if isinstance(error, dict)
                    else str(error)
                    for error in errors
                )
            )

        return body.get("data") or {}

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
