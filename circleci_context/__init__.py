from __future__ import annotations
from pathlib import Path
from typing import Union

from clavier import Sesh, CFG

import circleci_context.config # NEED this! And FIRST!
from circleci_context import cmd


def description(readme: Path) -> Union[Path, str]:
    if readme.is_file():
        return readme
    return CFG.circleci_context.description


def run():
    sesh = Sesh(
        __name__,
        description(CFG.circleci_context.paths.readme),
        cmd.add_to
    )
    sesh.setup(CFG.circleci_context.log.level)
    sesh.parse()
    sesh.exec()
