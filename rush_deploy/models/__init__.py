"""Data models for rush-deploy"""

from .scenario import ScenarioConfig, ProjectOverride, SubdeploymentConfig, SCENARIO_SCHEMA
from .link import LinkDescriptor
from .metadata import DeployMetadata
from .result import DeployResult, SubdeploymentResult

__all__ = [
    # Scenario models
    "ScenarioConfig",
    "ProjectOverride",
    "SubdeploymentConfig",
    "SCENARIO_SCHEMA",

    # Link models
    "LinkDescriptor",
    "DeployMetadata",

    # Result models
    "DeployResult",
    "SubdeploymentResult",
]
