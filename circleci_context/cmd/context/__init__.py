from argparse import ArgumentTypeError
from logging import DEBUG
from typing import Optional

from clavier import log as logging

from circleci_context.client import Client
from circleci_context.vcs import VcsType


def add_to(subparsers):
    parser = subparsers.add_parser(
        "context",
        aliases=["ctx"],
        help=(
            "Contexts provide a mechanism for securing and sharing "
            "environment variables across projects"
        ),
    )

    parser.add_children(__name__, __path__)


def vcs_type_arg(value: str) -> VcsType:
    try:
        return VcsType.parse(value)
    except ValueError as error:
        raise ArgumentTypeError(str(error)) from error


def add_common_arguments(parser):
    parser.add_argument(
        "-o",
        "--organization",
        help="The organization to operate on (default: inferred from `origin`)",
    )

    parser.add_argument(
        "--vcs-type",
        type=vcs_type_arg,
        help="github or bitbucket (default: inferred from `origin`)",
    )

    parser.add_argument(
        "--token",
        help="API token (default: $CIRCLECI_CLI_TOKEN)",
    )

    parser.add_argument(
        "--host",
        help="CircleCI host (default: https://circleci.com)",
    )

    parser.add_argument(
        "--endpoint",
        help="GraphQL endpoint path on the host",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Log GraphQL requests and responses",
    )


def open_client(
    token: Optional[str] = None,
    host: Optional[str] = None,
    endpoint: Optional[str] = None,
    debug: bool = False,
) -> Client:
    if debug:
        logging.set_level("circleci_context", level=DEBUG)
    return Client.from_config(
        token=token, host=host, endpoint=endpoint, debug=debug
    )
