from typing import Optional

from clavier import io, log as logging
from rich.table import Table

from circleci_context import api
from circleci_context.vcs import VcsType, resolve_organization
from circleci_context.cmd.context import add_common_arguments, open_client

LOG = logging.getLogger(__name__)


def add_to(subparsers):
    parser = subparsers.add_parser(
        "list",
        aliases=["ls"],
        target=run,
        help="List contexts",
    )

    add_common_arguments(parser)


class View(io.View):
    def render_rich(self):
        table = Table()
        table.add_column("Provider")
        table.add_column("Organization")
        table.add_column("Name")
        table.add_column("Created At")
        for row in self.data:
            table.add_row(
                row["provider"],
                row["organization"],
                row["name"],
                row["created_at"],
            )
        self.print(table)


def run(
    organization: Optional[str] = None,
    vcs_type: Optional[VcsType] = None,
    token: Optional[str] = None,
    host: Optional[str] = None,
    endpoint: Optional[str] = None,
    debug: bool = False,
) -> View:
    org = resolve_organization(name=organization, provider=vcs_type)

    with open_client(token, host, endpoint, debug) as client:
        listing = api.list_contexts(client, org.name, org.provider)

    LOG.debug(
        "Loaded contexts",
        organization=org.name,
        count=len(listing.contexts),
    )

    return View(
        [
            {
                "provider": str(org.provider),
                "organization": org.name,
                "id": context.id,
                "name": context.name,
                "created_at": context.created_at,
            }
            for context in listing.contexts
        ]
    )
