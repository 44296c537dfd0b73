"""Deploy scenario data models"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any

from ..constants import SymlinkCreation

# JSON schema for <common>/config/deploy-scenarios/<name>.json
SCENARIO_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "$schema": {"type": "string"},
        "includeDevDependencies": {"type": "boolean"},
        "includeNpmIgnoreFiles": {"type": "boolean"},
        "symlinkCreation": {
            "type": "string",
            "enum": [mode.value for mode in SymlinkCreation],
        },
        "projectSettings": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "projectName": {"type": "string", "minLength": 1},
                    "subdeploymentFolderName": {"type": "string", "minLength": 1},
                    "additionalProjectsToInclude": {
                        "type": "array",
                        "items": {"type": "string", "minLength": 1},
                    },
                },
                "required": ["projectName"],
                "additionalProperties": False,
            },
        },
        "subdeployments": {
            "type": "object",
            "properties": {
                "enabled": {"type": "boolean"},
                "subdeploymentProjects": {
                    "type": "array",
                    "items": {"type": "string", "minLength": 1},
                },
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
}


@dataclass(frozen=True)
class ProjectOverride:
    """Per-project settings of a deploy scenario"""

    project_name: str
    subdeployment_folder_name: Optional[str] = None
    additional_projects_to_include: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data: Dict[str, Any] = {"projectName": self.project_name}
        if self.subdeployment_folder_name:
            data["subdeploymentFolderName"] = self.subdeployment_folder_name
        if self.additional_projects_to_include:
            data["additionalProjectsToInclude"] = list(self.additional_projects_to_include)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProjectOverride':
        """Create from dictionary"""
        return cls(
            project_name=data["projectName"],
            subdeployment_folder_name=data.get("subdeploymentFolderName"),
            additional_projects_to_include=list(data.get("additionalProjectsToInclude", [])),
        )


@dataclass(frozen=True)
class SubdeploymentConfig:
    """Subdeployment section of a deploy scenario"""

    enabled: bool = False
    subdeployment_projects: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "enabled": self.enabled,
            "subdeploymentProjects": list(self.subdeployment_projects),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SubdeploymentConfig':
        """Create from dictionary"""
        return cls(
            enabled=data.get("enabled", False),
            subdeployment_projects=list(data.get("subdeploymentProjects", [])),
        )


@dataclass(frozen=True)
class ScenarioConfig:
    """A loaded deploy scenario

    Field names follow Python conventions; ``from_dict``/``to_dict`` map them
    to the camelCase keys used in the scenario JSON file.
    """

    scenario_name: str = ""
    include_dev_dependencies: bool = False
    include_npm_ignore_files: bool = False
    symlink_creation: SymlinkCreation = SymlinkCreation.DEFAULT
    project_settings: List[ProjectOverride] = field(default_factory=list)
    subdeployments: Optional[SubdeploymentConfig] = None

    @property
    def subdeployments_enabled(self) -> bool:
        """Check if the scenario splits the deployment into subdeployments"""
        return self.subdeployments is not None and self.subdeployments.enabled

    def get_project_settings(self, project_name: str) -> Optional[ProjectOverride]:
        """Get settings for a project, if the scenario declares any"""
        for settings in self.project_settings:
            if settings.project_name == project_name:
                return settings
        return None

    def referenced_project_names(self) -> List[tuple]:
        """List (project name, setting name) pairs for registry validation"""
        references = []
        for settings in self.project_settings:
            references.append((settings.project_name, "projectSettings"))
            for name in settings.additional_projects_to_include:
                references.append((name, "additionalProjectsToInclude"))
        if self.subdeployments is not None:
            for name in self.subdeployments.subdeployment_projects:
                references.append((name, "subdeploymentProjects"))
        return references

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data: Dict[str, Any] = {
            "includeDevDependencies": self.include_dev_dependencies,
            "includeNpmIgnoreFiles": self.include_npm_ignore_files,
            "symlinkCreation": self.symlink_creation.value,
            "projectSettings": [settings.to_dict() for settings in self.project_settings],
        }
        if self.subdeployments is not None:
            data["subdeployments"] = self.subdeployments.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any], scenario_name: str = "") -> 'ScenarioConfig':
        """Create from dictionary"""
        subdeployments = data.get("subdeployments")
        return cls(
            scenario_name=scenario_name,
            include_dev_dependencies=data.get("includeDevDependencies", False),
            include_npm_ignore_files=data.get("includeNpmIgnoreFiles", False),
            symlink_creation=SymlinkCreation(data.get("symlinkCreation", SymlinkCreation.DEFAULT.value)),
            project_settings=[
                ProjectOverride.from_dict(item) for item in data.get("projectSettings", [])
            ],
            subdeployments=(
                SubdeploymentConfig.from_dict(subdeployments) if subdeployments is not None else None
            ),
        )
