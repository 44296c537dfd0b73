"""Command for creating deploy scenario files"""

import sys

import click
from rich.markup import escape

from ..utils.output import console, print_error, print_success
from ...api import Deployer
from ...api.exceptions import RushDeployError
from ...constants import DEFAULT_SCENARIO_NAME, RUSH_JSON_ENV_VAR


@click.command(name='init-scenario')
@click.option('--project', '-p', 'project_name', required=True,
              help='Project to deploy, as named in rush.json')
@click.option('--scenario', '-s', 'scenario_name', default=DEFAULT_SCENARIO_NAME, show_default=True,
              help='Scenario name')
@click.option('--overwrite', is_flag=True, help='Replace an existing scenario file')
@click.option('--rush-json', type=click.Path(dir_okay=False), envvar=RUSH_JSON_ENV_VAR,
              help='Path to rush.json (default: searched upward from the current directory)')
@click.pass_context
def init_scenario(ctx, project_name, scenario_name, overwrite, rush_json):
    """Create a deploy scenario file for a project

    Examples:
        rush-deploy init-scenario --project my-app
        rush-deploy init-scenario --project @scope/api --scenario api
    """
    try:
        registry = ctx.obj.get_registry(rush_json)
        scenario_path = Deployer(registry=registry, console=console).init_scenario(
            project_name, scenario_name, overwrite
        )
        print_success(f"Created {scenario_path}")
        console.print("Review the file, then run: "
                      f"[cyan]rush-deploy deploy --scenario {escape(scenario_name)}[/cyan]")

    except RushDeployError as e:
        print_error(str(e))
        if ctx.obj.debug:
            console.print_exception()
        sys.exit(1)
