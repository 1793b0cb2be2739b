"""\
Context-related calls in the CircleCI GraphQL API.

Every function takes the `Client` to send requests with as its first
argument. Mutations that define an `error { type }` field in their payload are
checked for it after the transport call succeeds, and a non-empty type is
raised as `ApplicationError`.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import splatlog as logging

from circleci_context.client import Client
from circleci_context.config import CONFIG
from circleci_context.errors import (
    ApplicationError,
    ContextNotFoundError,
    TransportError,
)
from circleci_context.vcs import Organization, VcsType

LOG = logging.getLogger(__name__)

ENV_VARS_FRAGMENT = """
fragment EnvVars on EnvironmentVariable {
    variable
    createdAt
    truncatedValue
}
"""

LIST_CONTEXTS_QUERY = (
    """
query ContextsQuery($orgName: String!, $vcsType: VCSType!) {
    organization(name: $orgName, vcsType: $vcsType) {
        id
        contexts {
            edges {
                node {
                    ...Context
                }
            }
        }
    }
}

fragment Context on Context {
    id
    name
    createdAt
    groups {
        edges {
            node {
                ...SecurityGroups
            }
        }
    }
    resources {
        ...EnvVars
    }
}

fragment SecurityGroups on Group {
    id
    name
}
"""
    + ENV_VARS_FRAGMENT
)

CREATE_CONTEXT_MUTATION = """
mutation CreateContext($input: CreateContextInput!) {
    createContext(input: $input) {
        ...CreateButton
    }
}

fragment CreateButton on CreateContextPayload {
    error {
        type
    }
}
"""

DELETE_CONTEXT_MUTATION = """
mutation DeleteContext($input: DeleteContextInput!) {
    deleteContext(input: $input) {
        clientMutationId
    }
}
"""

STORE_ENV_VAR_MUTATION = (
    """
mutation CreateEnvVar($input: StoreEnvironmentVariableInput!) {
    storeEnvironmentVariable(input: $input) {
        context {
            id
            resources {
                ...EnvVars
            }
        }
        ...CreateEnvVarButton
    }
}

fragment CreateEnvVarButton on StoreEnvironmentVariablePayload {
    error {
        type
    }
}
"""
    + ENV_VARS_FRAGMENT
)

DELETE_ENV_VAR_MUTATION = (
    """
mutation DeleteEnvVar($input: RemoveEnvironmentVariableInput!) {
    removeEnvironmentVariable(input: $input) {
        context {
            id
            resources {
                ...EnvVars
            }
        }
    }
}
"""
    + ENV_VARS_FRAGMENT
)


# Types
# ============================================================================


@dataclass
class Resource:
    variable: str
    created_at: str
    truncated_value: str

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> Resource:
        return cls(
            variable=node["variable"],
            created_at=node["createdAt"],
            truncated_value=node["truncatedValue"],
        )


@dataclass
class Group:
    id: str
    name: str

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> Group:
        return cls(id=node["id"], name=node["name"])


@dataclass
class Context:
    id: str
    name: str
    created_at: str
    groups: List[Group] = field(default_factory=list)
    resources: List[Resource] = field(default_factory=list)

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> Context:
        groups = node.get("groups") or {}
        return cls(
            id=node["id"],
            name=node["name"],
            created_at=node["createdAt"],
            groups=[
                Group.from_node(edge["node"])
                for edge in groups.get("edges") or []
            ],
            resources=[
                Resource.from_node(resource)
                for resource in node.get("resources") or []
            ],
        )


@dataclass
class ContextListing:
    organization_id: str
    contexts: List[Context]

    @classmethod
    def from_data(cls, data: Dict[str, Any]) -> ContextListing:
        organization = data["organization"]
        return cls(
            organization_id=organization["id"],
            contexts=[
                Context.from_node(edge["node"])
                for edge in organization["contexts"]["edges"]
            ],
        )

    def find(self, name: str) -> Optional[Context]:
        # First match wins if the server ever returns duplicate names
        for context in self.contexts:
            if context.name == name:
                return context
        return None


def _error_type(payload: Optional[Dict[str, Any]]) -> str:
    error = (payload or {}).get("error") or {}
    return error.get("type") or ""


# Operations
# ============================================================================


def list_contexts(
    client: Client, org_name: str, vcs_type: VcsType
) -> ContextListing:
    request = client.new_request(LIST_CONTEXTS_QUERY)
    request.var("orgName", org_name)
    request.var("vcsType", str(vcs_type))

    try:
        data = client.run(request)
        return ContextListing.from_data(data)
    except TransportError as error:
        raise TransportError("failed to load contexts", error) from error
    except (KeyError, TypeError) as error:
        raise TransportError(
            "failed to load contexts",
            ValueError(f"malformed response ({error!r})"),
        ) from error


def resolve_organization_id(
    client: Client, org_name: str, vcs_type: VcsType
) -> str:
    return list_contexts(client, org_name, vcs_type).organization_id


def context_by_name(
    client: Client, organization: Organization, context_name: str
) -> Context:
    listing = list_contexts(client, organization.name, organization.provider)
    context = listing.find(context_name)
    if context is None:
        raise ContextNotFoundError(context_name, organization.name)
    return context


def create_context(
    client: Client, context_name: str, org_name: str, vcs_type: VcsType
) -> None:
    org_id = resolve_organization_id(client, org_name, vcs_type)

    LOG.info(
        "Creating context...",
        context_name=context_name,
        org_name=org_name,
        org_id=org_id,
    )

    request = client.new_request(CREATE_CONTEXT_MUTATION)
    request.var(
        "input",
        {
            "ownerId": org_id,
            "ownerType": CONFIG.api.owner_type,
            "contextName": context_name,
        },
    )

    data = client.run(request)

    if error_type := _error_type(data.get("createContext")):
        raise ApplicationError("Error creating context", error_type)


def delete_context(client: Client, context_id: str) -> None:
    request = client.new_request(DELETE_CONTEXT_MUTATION)
    request.var("input", {"contextId": context_id})

    try:
        client.run(request)
    except TransportError as error:
        raise TransportError("failed to delete context", error) from error


def store_environment_variable(
    client: Client, context_id: str, variable: str, value: str
) -> None:
    request = client.new_request(STORE_ENV_VAR_MUTATION)
    request.var(
        "input",
        {"contextId": context_id, "variable": variable, "value": value},
    )

    try:
        data = client.run(request)
    except TransportError as error:
        raise TransportError(
            "failed to store environment variable in context", error
        ) from error

    if error_type := _error_type(data.get("storeEnvironmentVariable")):
        raise ApplicationError(
            "Error storing environment variable", error_type
        )


def delete_environment_variable(
    client: Client, context_id: str, variable: str
) -> None:
    request = client.new_request(DELETE_ENV_VAR_MUTATION)
    request.var("input", {"contextId": context_id, "variable": variable})

    try:
        client.run(request)
    except TransportError as error:
        raise TransportError(
            "failed to delete environment variable", error
        ) from error
