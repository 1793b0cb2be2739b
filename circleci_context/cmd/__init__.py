from circleci_context.cmd import context


def add_to(subparsers):
    context.add_to(subparsers)
