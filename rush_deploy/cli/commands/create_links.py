"""Command for materializing the links of a deployed folder"""

import sys

import click

from ..utils.output import console, print_error
from ...api.exceptions import RushDeployError
from ...constants import LinkAction, RUSH_JSON_ENV_VAR
from ...services import LinkService


@click.command(name='create-links')
@click.argument('action', type=click.Choice([action.value for action in LinkAction]))
@click.option('--target-folder', '-t', type=click.Path(file_okay=False),
              help='Deployed folder containing deploy-metadata.json (default: common/deploy)')
@click.option('--rush-json', type=click.Path(dir_okay=False), envvar=RUSH_JSON_ENV_VAR,
              help='Path to rush.json, used to locate the default folder')
@click.pass_context
def create_links(ctx, action, target_folder, rush_json):
    """Create or remove the links recorded in deploy-metadata.json

    Use this on the deployment host when the scenario's symlinkCreation
    setting is "script" or "none". With --target-folder no monorepo is
    needed.

    Examples:
        rush-deploy create-links create --target-folder /opt/app
        rush-deploy create-links remove --target-folder /opt/app
    """
    try:
        if not target_folder:
            target_folder = ctx.obj.get_registry(rush_json).default_deploy_folder

        LinkService(console=console).apply(target_folder, LinkAction(action))

    except RushDeployError as e:
        print_error(str(e))
        if ctx.obj.debug:
            console.print_exception()
        sys.exit(1)
