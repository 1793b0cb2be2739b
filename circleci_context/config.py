import os
from pathlib import Path

from clavier import CFG, io

with CFG.configure("circleci_context", src=__file__) as client:
    client.name = "circleci-context"
    client.version = "0.1.0"
    # Used as the CLI description when README.md is not next to the package
    # (non-editable installs)
    client.description = (
        "Manage CircleCI contexts, named groups of shared, encrypted "
        "environment variables."
    )

    with client.configure("log") as log:
        log.level = os.environ.get("CIRCLECI_CLI_LOG_LEVEL", "INFO")

    with client.configure("paths") as paths:
        paths.repo = Path(__file__).resolve().parents[1]
        paths.readme = paths.repo / "README.md"

    with client.configure("api") as api:
        api.host = os.environ.get("CIRCLECI_CLI_HOST", "https://circleci.com")
        api.endpoint = os.environ.get(
            "CIRCLECI_CLI_ENDPOINT", "graphql-unstable"
        )
        # Name of the environment variable holding the API token. The token
        # itself is read when a client is built and never stored here.
        api.token_env = "CIRCLECI_CLI_TOKEN"
        api.owner_type = "ORGANIZATION"

    with client.configure("display") as display:
        display.mask = "••••"

with CFG.configure(io.rel, src=__file__) as rel:
    rel.to = CFG.circleci_context.paths.repo

CONFIG = CFG.circleci_context
