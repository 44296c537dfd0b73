# rush_deploy/cli/commands/__init__.py
"""CLI commands"""

from . import deploy
from . import init_scenario
from . import create_links

__all__ = [
    "deploy",
    "init_scenario",
    "create_links",
]
