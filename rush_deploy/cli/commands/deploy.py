"""Deploy command implementation"""

import sys

import click

from ..utils.output import console, format_deploy_result, print_error
from ...api import Deployer
from ...api.exceptions import RushDeployError
from ...constants import DEFAULT_SCENARIO_NAME, RUSH_JSON_ENV_VAR


@click.command()
@click.option('--scenario', '-s', 'scenario_name', default=DEFAULT_SCENARIO_NAME, show_default=True,
              help='Deploy scenario name (common/config/deploy-scenarios/<name>.json)')
@click.option('--overwrite', is_flag=True,
              help='Recursively delete the contents of a non-empty target folder first')
@click.option('--target-folder', '-t', type=click.Path(file_okay=False),
              help='Existing folder to deploy into (default: common/deploy)')
@click.option('--rush-json', type=click.Path(dir_okay=False), envvar=RUSH_JSON_ENV_VAR,
              help='Path to rush.json (default: searched upward from the current directory)')
@click.pass_context
def deploy(ctx, scenario_name, overwrite, target_folder, rush_json):
    """Deploy projects and their runtime dependencies

    Copies the projects selected by a deploy scenario, along with every
    package folder they need at runtime, into the target folder and
    recreates the symbolic links between them.

    Examples:

        # Deploy the default scenario into common/deploy
        rush-deploy deploy

        # Deploy a named scenario, replacing a previous deployment
        rush-deploy deploy --scenario web --overwrite

        # Deploy into an existing folder
        rush-deploy deploy --scenario web --target-folder /tmp/web-deploy
    """
    try:
        registry = ctx.obj.get_registry(rush_json)
        deployer = Deployer(registry=registry, console=console)

        result = deployer.deploy_scenario(
            scenario_name=scenario_name,
            overwrite_existing=overwrite,
            target_folder=target_folder,
        )

        if ctx.obj.verbose or ctx.obj.debug:
            format_deploy_result(result)

    except RushDeployError as e:
        print_error(str(e))
        if ctx.obj.debug:
            console.print_exception()
        sys.exit(1)
