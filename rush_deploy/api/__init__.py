# rush_deploy/api/__init__.py
"""API layer for rush-deploy"""

from .exceptions import (
    RushDeployError,
    ConfigError,
    ScenarioNotFoundError,
    ScenarioConfigError,
    ProjectNotFoundError,
    RegistryNotFoundError,
    RegistryConfigError,
    TargetFolderError,
    ResolutionError,
    DependencyResolutionError,
    PackageJsonNotFoundError,
    MaterializationError,
    CopyCollisionError,
    LinkTargetNotFoundError,
    PathOutsideRootError,
    DeployMetadataError,
)
from .deployer import Deployer, deploy_scenario

__all__ = [
    # Main classes
    "Deployer",

    # Convenience functions
    "deploy_scenario",

    # Exceptions
    "RushDeployError",
    "ConfigError",
    "ScenarioNotFoundError",
    "ScenarioConfigError",
    "ProjectNotFoundError",
    "RegistryNotFoundError",
    "RegistryConfigError",
    "TargetFolderError",
    "ResolutionError",
    "DependencyResolutionError",
    "PackageJsonNotFoundError",
    "MaterializationError",
    "CopyCollisionError",
    "LinkTargetNotFoundError",
    "PathOutsideRootError",
    "DeployMetadataError",
]
