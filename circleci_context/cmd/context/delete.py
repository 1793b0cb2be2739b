from typing import Optional

import splatlog as logging

from circleci_context import api
from circleci_context.vcs import VcsType, resolve_organization
from circleci_context.cmd.context import add_common_arguments, open_client

LOG = logging.getLogger(__name__)


def add_to(subparsers):
    parser = subparsers.add_parser(
        "delete",
        target=run,
        help="Delete the named context",
    )

    add_common_arguments(parser)

    parser.add_argument(
        "name",
        help="Name of the context to delete",
    )


def run(
    name: str,
    organization: Optional[str] = None,
    vcs_type: Optional[VcsType] = None,
    token: Optional[str] = None,
    host: Optional[str] = None,
    endpoint: Optional[str] = None,
    debug: bool = False,
) -> None:
    org = resolve_organization(name=organization, provider=vcs_type)

    with open_client(token, host, endpoint, debug) as client:
        context = api.context_by_name(client, org, name)
        api.delete_context(client, context.id)

    LOG.info("Deleted context", name=name, id=context.id)
