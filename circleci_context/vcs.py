from __future__ import annotations
import re
from dataclasses import dataclass
from enum import Enum
from subprocess import CalledProcessError
from typing import Dict, Optional, Tuple

import splatlog as logging
from clavier import sh

from circleci_context.errors import InferenceError

LOG = logging.getLogger(__name__)


class VcsType(str, Enum):
    GITHUB = "GITHUB"
    BITBUCKET = "BITBUCKET"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> VcsType:
        try:
            return cls(value.upper())
        except ValueError:
            raise ValueError(
                f"Unknown VCS type {repr(value)}, expected one of "
                + ", ".join(member.value.lower() for member in cls)
            ) from None


# Remote patterns are generated from these keys, so every host they match has
# a provider.
KNOWN_HOSTS: Dict[str, VcsType] = {
    "github.com": VcsType.GITHUB,
    "bitbucket.org": VcsType.BITBUCKET,
}

_HOSTS_RE = "|".join(re.escape(host) for host in KNOWN_HOSTS)

# git@github.com:circleci/api-service.git
# git@bitbucket.org:dellelce/makefile_sh.git
SSH_RE = re.compile(rf"^git@({_HOSTS_RE}):([^/]+)/")

# https://github.com/circleci/esxi-api.git
# https://marco@bitbucket.org/dellelce/makefile_sh.git
HTTPS_RE = re.compile(rf"^https://(?:[^@/]*@)?({_HOSTS_RE})/([^/]+)/")


@dataclass(frozen=True)
class Organization:
    name: str
    provider: VcsType

    def __str__(self) -> str:
        return self.name


def get_origin_url() -> str:
    try:
        return sh.get("git", "remote", "get-url", "origin", format="strip")
    except (CalledProcessError, OSError) as error:
        raise InferenceError(
            "Error finding the 'origin' git remote"
        ) from error


def parse_remote_url(url: str) -> Tuple[VcsType, str]:
    match = SSH_RE.match(url) or HTTPS_RE.match(url)
    if match is None:
        raise InferenceError(
            "Unable to determine VCS information from git 'origin' remote"
        )
    host, org = match.groups()
    return KNOWN_HOSTS[host], org


def infer_organization_from_git_remotes() -> Tuple[VcsType, str]:
    """\
    Best-effort guess of the VCS provider and organization of the repository
    in the working directory, assuming the `origin` remote is a GitHub or
    BitBucket project.
    """
    url = get_origin_url()
    vcs_type, org = parse_remote_url(url)
    LOG.debug("Inferred organization", url=url, vcs_type=vcs_type, org=org)
    return vcs_type, org


def resolve_organization(
    name: Optional[str] = None, provider: Optional[VcsType] = None
) -> Organization:
    if name is not None and provider is not None:
        return Organization(name=name, provider=provider)

    inferred_provider, inferred_name = infer_organization_from_git_remotes()

    return Organization(
        name=inferred_name if name is None else name,
        provider=inferred_provider if provider is None else provider,
    )
