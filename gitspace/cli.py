#!/usr/bin/env python3

import click

from gitspace.commands.init import init_handler
from gitspace.commands.sync import sync_handler
from gitspace.commands.clean import clean_handler
from gitspace.commands.symlink import symlink_handler
from gitspace.commands.status import status_handler
from gitspace.commands.config import config_cmd


@click.group()
@click.version_option(package_name="gitspace")
def cli():
    """gitspace - Materialize a declared set of git repositories in a local space.

    A space is a directory holding a config.json and a repository store
    with one clone per configured repository.
    """
    pass


cli.add_command(init_handler, name='init')
cli.add_command(sync_handler, name='sync')
cli.add_command(clean_handler, name='clean')
cli.add_command(symlink_handler, name='symlink')
cli.add_command(status_handler, name='status')

# Command groups
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
