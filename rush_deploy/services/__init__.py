# rush_deploy/services/__init__.py
"""Business logic services for rush-deploy"""

from .deploy_service import DeployService, SubdeploymentPlanner, PlannedSubdeployment
from .link_service import LinkService

__all__ = [
    "DeployService",
    "SubdeploymentPlanner",
    "PlannedSubdeployment",
    "LinkService",
]
