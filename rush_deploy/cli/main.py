# rush_deploy/cli/main.py
"""Main CLI entry point for rush-deploy"""

import sys
import logging
from pathlib import Path
from typing import Optional, Union

import click
from rich.logging import RichHandler
from rich.markup import escape

from ..__version__ import get_version
from ..constants import APP_NAME, LOG_FORMAT
from ..core import ProjectRegistry
from .utils.output import console

# Import all commands
from .commands import (
    deploy,
    init_scenario,
    create_links,
)


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ]
    )


class Context:
    """CLI context object with lazy registry loading

    The registry is only loaded when a command asks for it, so that
    ``--help`` works outside a monorepo.
    """

    def __init__(self):
        """Initialize CLI context"""
        self._registry: Optional[ProjectRegistry] = None
        self.verbose: bool = False
        self.debug: bool = False

    def get_registry(self, rush_json: Optional[Union[str, Path]] = None) -> ProjectRegistry:
        """Get the project registry

        Args:
            rush_json: Explicit rush.json path; otherwise it is searched
                upward from the current directory

        Raises:
            RegistryNotFoundError: If no rush.json is found
        """
        if self._registry is None:
            if rush_json:
                self._registry = ProjectRegistry.load(rush_json)
            else:
                self._registry = ProjectRegistry.discover()
            if self.debug:
                console.print(f"[dim]Using {escape(str(self._registry.rush_json_file))}[/dim]")
        return self._registry


@click.group(name=APP_NAME)
@click.version_option(version=get_version(), prog_name=APP_NAME)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.pass_context
def cli(ctx, verbose, debug, quiet):
    """Rush Deploy - Standalone deployments of monorepo projects

    Copies the projects selected by a deploy scenario, together with
    every package folder they need at runtime, into a target folder and
    recreates the workspace's symbolic links there.
    """
    # Setup logging
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        setup_logging(verbose=verbose, debug=debug)

    ctx.obj = Context()
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug


# Register commands
cli.add_command(deploy.deploy)
cli.add_command(init_scenario.init_scenario)
cli.add_command(create_links.create_links)


def main():
    """Main entry point for the CLI application

    This function handles:
    - Keyboard interrupts
    - Unexpected exceptions with proper error display
    """
    try:
        # click would turn an interrupt into a generic exit status 1
        cli.main(prog_name=APP_NAME, standalone_mode=False)

    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)

    except (KeyboardInterrupt, click.exceptions.Abort):
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except Exception as e:
        console.print(f"[red]Unexpected error: {escape(str(e))}[/red]", highlight=False, soft_wrap=True)
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
