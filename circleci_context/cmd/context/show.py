from dataclasses import asdict
from typing import Optional

from clavier import io
from rich.table import Table

from circleci_context import api
from circleci_context.config import CONFIG
from circleci_context.vcs import VcsType, resolve_organization
from circleci_context.cmd.context import add_common_arguments, open_client


def add_to(subparsers):
    parser = subparsers.add_parser(
        "show",
        target=run,
        help="Show a context",
    )

    add_common_arguments(parser)

    parser.add_argument(
        "name",
        help="Name of context",
    )


def masked(truncated_value: str) -> str:
    return CONFIG.display.mask + truncated_value


class View(io.View):
    def render_rich(self):
        self.print(f"Context: {self.data['name']}")
        table = Table()
        table.add_column("Environment Variable")
        table.add_column("Value")
        for resource in self.data["resources"]:
            table.add_row(
                resource["variable"],
                masked(resource["truncated_value"]),
            )
        self.print(table)


def run(
    name: str,
    organization: Optional[str] = None,
    vcs_type: Optional[VcsType] = None,
    token: Optional[str] = None,
    host: Optional[str] = None,
    endpoint: Optional[str] = None,
    debug: bool = False,
) -> View:
    org = resolve_organization(name=organization, provider=vcs_type)

    with open_client(token, host, endpoint, debug) as client:
        context = api.context_by_name(client, org, name)

    return View(asdict(context))
