from typing import Optional

import splatlog as logging

from circleci_context import api
from circleci_context.vcs import VcsType, resolve_organization
from circleci_context.cmd.context import add_common_arguments, open_client

LOG = logging.getLogger(__name__)


def add_to(subparsers):
    parser = subparsers.add_parser(
        "remove",
        aliases=["rm"],
        target=run,
        help="Remove a secret from the named context",
    )

    add_common_arguments(parser)

    parser.add_argument(
        "context",
        help="Name of the context",
    )

    parser.add_argument(
        "variable",
        help="Name of the environment variable to remove",
    )


def run(
    context: str,
    variable: str,
    organization: Optional[str] = None,
    vcs_type: Optional[VcsType] = None,
    token: Optional[str] = None,
    host: Optional[str] = None,
    endpoint: Optional[str] = None,
    debug: bool = False,
) -> None:
    org = resolve_organization(name=organization, provider=vcs_type)

    with open_client(token, host, endpoint, debug) as client:
        found = api.context_by_name(client, org, context)
        api.delete_environment_variable(client, found.id, variable)

    LOG.info("Removed environment variable", context=context, variable=variable)
