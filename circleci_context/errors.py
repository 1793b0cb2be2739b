from __future__ import annotations
from typing import Optional


class ContextError(Exception):
    """\
    Base class for errors raised while managing contexts. The command layer
    lets these propagate; `clavier` reports them and exits non-zero.
    """


class ConfigurationError(ContextError):
    pass


class InferenceError(ContextError):
    """\
    The VCS provider and organization could not be inferred from the
    `origin` git remote.
    """


class TransportError(ContextError):
    """\
    A request could not complete: network, authentication, HTTP status,
    malformed or undecodable response. The message starts with a prefix naming
    the operation; the underlying error is chained as `__cause__`.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.cause = cause


class ApplicationError(ContextError):
    """\
    The request completed, but the mutation payload carries a non-empty
    `error.type` (duplicate name, invalid input, ...).
    """

    def __init__(self, message: str, type: str):
        super().__init__(f"{message}: {type}")
        self.type = type


class ContextNotFoundError(ContextError):
    def __init__(self, context_name: str, organization: str):
        super().__init__(
            f"Could not find a context named '{context_name}' "
            f"in the '{organization}' organization."
        )
        self.context_name = context_name
        self.organization = organization
