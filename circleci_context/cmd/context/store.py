import sys
from typing import Optional

import splatlog as logging
from clavier import err
from rich.prompt import Prompt

from circleci_context import api
from circleci_context.vcs import VcsType, resolve_organization
from circleci_context.cmd.context import add_common_arguments, open_client

LOG = logging.getLogger(__name__)


def add_to(subparsers):
    parser = subparsers.add_parser(
        "store",
        target=run,
        help=(
            "Store a new secret in the named context. The value is read from "
            "stdin, or prompted for when stdin is a terminal."
        ),
    )

    add_common_arguments(parser)

    parser.add_argument(
        "context",
        help="Name of the context",
    )

    parser.add_argument(
        "variable",
        help="Name of the environment variable to store",
    )


def read_secret_value(stdin=None) -> str:
    if stdin is None:
        stdin = sys.stdin
    if not stdin.isatty():
        return stdin.read()
    return Prompt.ask("Enter secret value", password=True)


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

        value = read_secret_value()
        if value == "":
            raise err.UserError("Secret value is empty, nothing stored")

        api.store_environment_variable(client, found.id, variable, value)

    LOG.info("Stored environment variable", context=context, variable=variable)
