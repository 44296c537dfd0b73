"""rush-deploy - Standalone deployments of Rush monorepo projects.

This tool computes the runtime dependency closure of one or more monorepo
projects, copies exactly those folders into an isolated target tree and
recreates the workspace's internal symlinks there, so the output runs on
its own.
"""

from .__version__ import __version__, __version_info__, __author__, __email__, __license__

# Core API
from .api.deployer import Deployer, deploy_scenario

# Data models
from .models.scenario import ScenarioConfig, ProjectOverride, SubdeploymentConfig
from .models.link import LinkDescriptor
from .models.metadata import DeployMetadata
from .models.result import DeployResult, SubdeploymentResult

# Exceptions
from .api.exceptions import (
    RushDeployError,
    ConfigError,
    ScenarioNotFoundError,
    ScenarioConfigError,
    ProjectNotFoundError,
    TargetFolderError,
    ResolutionError,
    DependencyResolutionError,
    MaterializationError,
    CopyCollisionError,
    LinkTargetNotFoundError,
)

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__email__",
    "__license__",

    # Main classes
    "Deployer",

    # Core API functions
    "deploy_scenario",

    # Data models
    "ScenarioConfig",
    "ProjectOverride",
    "SubdeploymentConfig",
    "LinkDescriptor",
    "DeployMetadata",
    "DeployResult",
    "SubdeploymentResult",

    # Exceptions
    "RushDeployError",
    "ConfigError",
    "ScenarioNotFoundError",
    "ScenarioConfigError",
    "ProjectNotFoundError",
    "TargetFolderError",
    "ResolutionError",
    "DependencyResolutionError",
    "MaterializationError",
    "CopyCollisionError",
    "LinkTargetNotFoundError",
]
