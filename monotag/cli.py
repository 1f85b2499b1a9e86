#!/usr/bin/env python3

import click

from monotag.commands.create import create_handler
from monotag.commands.config import config_cmd


@click.group()
@click.version_option(package_name='monotag')
def cli():
    """monotag - Create git tags for projects inside a monorepo.

    Reads computed versions for every project, picks the ones that
    should be released, and creates project-scoped and repository-wide
    tags for them.
    """
    pass


cli.add_command(create_handler, name='create')
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
