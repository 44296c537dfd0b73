"""Exception definitions for rush-deploy API"""

import json

from ..constants import (
    ERROR_SCENARIO_NOT_FOUND,
    ERROR_SCENARIO_CONFIG,
    ERROR_PROJECT_NOT_FOUND,
    ERROR_REGISTRY_NOT_FOUND,
    ERROR_REGISTRY_CONFIG,
    ERROR_TARGET_FOLDER,
    ERROR_DEPENDENCY_RESOLUTION,
    ERROR_PACKAGE_JSON_NOT_FOUND,
    ERROR_COPY_COLLISION,
    ERROR_LINK_TARGET_NOT_FOUND,
    ERROR_PATH_OUTSIDE_ROOT,
    ERROR_DEPLOY_METADATA,
)


class RushDeployError(Exception):
    """Base exception for rush-deploy"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ConfigError(RushDeployError):
    """Configuration error"""
    pass


class ScenarioNotFoundError(ConfigError):
    """Scenario config file not found"""

    def __init__(self, scenario_path: str):
        message = f"The scenario config file was not found: {scenario_path}"
        super().__init__(message, ERROR_SCENARIO_NOT_FOUND)
        self.scenario_path = scenario_path


class ScenarioConfigError(ConfigError):
    """Invalid scenario configuration"""

    def __init__(self, message: str):
        super().__init__(message, ERROR_SCENARIO_CONFIG)


class ProjectNotFoundError(ConfigError):
    """A scenario refers to a project missing from rush.json"""

    def __init__(self, project_name: str, setting: str):
        message = (
            f'The "{setting}" setting refers to the project name "{project_name}"'
            f" which was not found in rush.json"
        )
        super().__init__(message, ERROR_PROJECT_NOT_FOUND)
        self.project_name = project_name
        self.setting = setting


class RegistryNotFoundError(ConfigError):
    """rush.json could not be located"""

    def __init__(self, message: str = None):
        if message is None:
            message = (
                "Unable to find rush.json. Please ensure:\n"
                "1. You are inside a Rush monorepo\n"
                "2. Or use --rush-json to specify the rush.json location"
            )
        super().__init__(message, ERROR_REGISTRY_NOT_FOUND)


class RegistryConfigError(ConfigError):
    """rush.json exists but is invalid"""

    def __init__(self, message: str):
        super().__init__(message, ERROR_REGISTRY_CONFIG)


class TargetFolderError(RushDeployError):
    """Deploy target folder cannot be used"""

    def __init__(self, message: str):
        super().__init__(message, ERROR_TARGET_FOLDER)


class ResolutionError(RushDeployError):
    """Dependency resolution error"""
    pass


class DependencyResolutionError(ResolutionError):
    """A required dependency could not be resolved"""

    def __init__(self, dependency_name: str, package_json_path: str, reason: str = None):
        message = f"Error resolving {dependency_name} from {package_json_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message, ERROR_DEPENDENCY_RESOLUTION)
        self.dependency_name = dependency_name
        self.package_json_path = package_json_path


class PackageJsonNotFoundError(ResolutionError):
    """A resolved module has no owning package.json"""

    def __init__(self, resolved_path: str):
        message = f"Error finding package.json for {resolved_path}"
        super().__init__(message, ERROR_PACKAGE_JSON_NOT_FOUND)
        self.resolved_path = resolved_path


class MaterializationError(RushDeployError):
    """Copy or link creation error"""
    pass


class CopyCollisionError(MaterializationError):
    """The copy destination already exists"""

    def __init__(self, target_path: str):
        message = f"Deploy target already exists: {target_path}"
        super().__init__(message, ERROR_COPY_COLLISION)
        self.target_path = target_path


class LinkTargetNotFoundError(MaterializationError):
    """Recorded links point at targets missing from the deployment"""

    def __init__(self, links: list):
        details = json.dumps([link.to_dict() for link in links], indent=2)
        super().__init__(f"Target does not exist: {details}", ERROR_LINK_TARGET_NOT_FOUND)
        self.links = links


class PathOutsideRootError(MaterializationError):
    """A source path is not under the source root"""

    def __init__(self, path: str, root: str):
        message = f"Source path is not under {root}\n{path}"
        super().__init__(message, ERROR_PATH_OUTSIDE_ROOT)
        self.path = path
        self.root = root


class DeployMetadataError(MaterializationError):
    """deploy-metadata.json is missing or invalid"""

    def __init__(self, message: str):
        super().__init__(message, ERROR_DEPLOY_METADATA)
