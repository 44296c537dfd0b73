"""Deployer API for deployment operations"""

from pathlib import Path
from typing import Optional, Union

from rich.console import Console

from ..constants import LinkAction
from ..core import ProjectRegistry, ScenarioLoader
from ..models import DeployResult
from ..services import DeployService, LinkService


class Deployer:
    """Deployer class for deployment operations"""

    def __init__(self,
                 registry: Optional[ProjectRegistry] = None,
                 rush_json: Optional[Union[str, Path]] = None,
                 console: Optional[Console] = None):
        """
        Initialize deployer

        Args:
            registry: Project registry (loaded from rush_json or discovered if omitted)
            rush_json: Path to rush.json
            console: Console receiving progress output

        Raises:
            RegistryNotFoundError: If no rush.json can be found
            RegistryConfigError: If rush.json is invalid
        """
        if registry is None:
            registry = ProjectRegistry.load(rush_json) if rush_json else ProjectRegistry.discover()

        self.registry = registry
        self.deploy_service = DeployService(registry, console=console)
        self.link_service = LinkService(console=console)
        self.scenario_loader = ScenarioLoader(registry)

    def deploy_scenario(self,
                        scenario_name: Optional[str] = None,
                        overwrite_existing: bool = False,
                        target_folder: Optional[Union[str, Path]] = None) -> DeployResult:
        """
        Deploy a scenario

        Args:
            scenario_name: Scenario name (defaults to "deploy")
            overwrite_existing: Delete existing target folder contents
            target_folder: Existing target folder (defaults to common/deploy)

        Returns:
            DeployResult: Deployment result

        Raises:
            RushDeployError: If the deployment fails
        """
        return self.deploy_service.deploy_scenario(
            scenario_name=scenario_name,
            overwrite_existing=overwrite_existing,
            target_folder=target_folder,
        )

    def init_scenario(self,
                      project_name: str,
                      scenario_name: Optional[str] = None,
                      overwrite: bool = False) -> Path:
        """
        Create a scenario file for a project

        Returns:
            Path to the created scenario file
        """
        return self.scenario_loader.init_scenario(project_name, scenario_name, overwrite)

    def create_links(self,
                     folder: Optional[Union[str, Path]] = None,
                     action: LinkAction = LinkAction.CREATE) -> int:
        """
        Create or remove the links of a deployed folder

        Args:
            folder: Deployed folder (defaults to common/deploy)
            action: Create or remove

        Returns:
            Number of links processed
        """
        folder = folder or self.registry.default_deploy_folder
        return self.link_service.apply(folder, action)


def deploy_scenario(scenario_name: Optional[str] = None,
                    overwrite_existing: bool = False,
                    target_folder: Optional[Union[str, Path]] = None,
                    rush_json: Optional[Union[str, Path]] = None) -> DeployResult:
    """
    Deploy a scenario of the monorepo containing the current directory

    Args:
        scenario_name: Scenario name (defaults to "deploy")
        overwrite_existing: Delete existing target folder contents
        target_folder: Existing target folder (defaults to common/deploy)
        rush_json: Path to rush.json (discovered if omitted)

    Returns:
        DeployResult: Deployment result

    Example:
        >>> result = deploy_scenario("web", overwrite_existing=True)
        >>> print(result.target_root)
    """
    deployer = Deployer(rush_json=rush_json)
    return deployer.deploy_scenario(scenario_name, overwrite_existing, target_folder)
