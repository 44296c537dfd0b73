"""Project registry loaded from rush.json"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..api.exceptions import RegistryConfigError, RegistryNotFoundError
from ..constants import (
    RUSH_JSON_FILENAME,
    COMMON_FOLDER_NAME,
    DEFAULT_DEPLOY_FOLDER_NAME,
    PACKAGE_JSON_FILENAME,
)
from ..utils.json_utils import load_json_file
from ..utils.package_name import PackageNameParser


@dataclass(frozen=True)
class RushProject:
    """A project registered in rush.json"""

    package_name: str
    project_relative_folder: str
    project_folder: Path

    @property
    def package_json_path(self) -> Path:
        """Path to the project's package.json"""
        return self.project_folder / PACKAGE_JSON_FILENAME


class ProjectRegistry:
    """Read-only view of the projects declared in rush.json

    The rush.json folder is the source root of every deployment; it is stored
    as a canonical real path so that it compares equal to resolved package
    folders.
    """

    def __init__(self, rush_json_file: Union[str, Path], projects: List[RushProject]):
        """Initialize project registry

        Args:
            rush_json_file: Path to rush.json
            projects: Registered projects
        """
        self.rush_json_file = Path(os.path.realpath(rush_json_file))
        self.rush_json_folder = self.rush_json_file.parent
        self.common_folder = self.rush_json_folder / COMMON_FOLDER_NAME
        self.package_name_parser = PackageNameParser()

        self._projects_by_name: Dict[str, RushProject] = {}
        for project in projects:
            if project.package_name in self._projects_by_name:
                raise RegistryConfigError(
                    f'The project name "{project.package_name}" was specified more than once'
                    f" in {self.rush_json_file}"
                )
            self._projects_by_name[project.package_name] = project

    @classmethod
    def load(cls, rush_json_file: Union[str, Path]) -> 'ProjectRegistry':
        """Load a registry from a rush.json file

        Args:
            rush_json_file: Path to rush.json

        Returns:
            ProjectRegistry instance

        Raises:
            RegistryNotFoundError: If the file does not exist
            RegistryConfigError: If the file is invalid
        """
        rush_json_file = Path(rush_json_file)
        if not rush_json_file.is_file():
            raise RegistryNotFoundError(f"The rush.json file was not found: {rush_json_file}")

        try:
            data = load_json_file(rush_json_file)
        except (OSError, ValueError) as e:
            raise RegistryConfigError(f"Failed to load {rush_json_file}: {e}")

        if not isinstance(data, dict):
            raise RegistryConfigError(f"Invalid rush.json: expected a JSON object in {rush_json_file}")

        rush_json_folder = Path(os.path.realpath(rush_json_file)).parent
        parser = PackageNameParser()
        projects = []

        for entry in data.get("projects", []):
            if not isinstance(entry, dict):
                raise RegistryConfigError(f"Invalid project entry in {rush_json_file}: {entry!r}")

            package_name = entry.get("packageName")
            project_folder = entry.get("projectFolder")
            if not isinstance(package_name, str) or not isinstance(project_folder, str):
                raise RegistryConfigError(
                    f'Project entries in {rush_json_file} require "packageName" and "projectFolder"'
                )
            if not parser.is_valid_name(package_name):
                raise RegistryConfigError(f'Invalid package name "{package_name}" in {rush_json_file}')

            projects.append(RushProject(
                package_name=package_name,
                project_relative_folder=project_folder,
                project_folder=Path(os.path.normpath(rush_json_folder / project_folder)),
            ))

        return cls(rush_json_file, projects)

    @staticmethod
    def find_rush_json(start_path: Optional[Union[str, Path]] = None) -> Optional[Path]:
        """Find rush.json by walking up from a folder

        Args:
            start_path: Starting directory (defaults to current directory)

        Returns:
            Path to rush.json or None if not found
        """
        current = Path(start_path).resolve() if start_path else Path.cwd()

        while True:
            candidate = current / RUSH_JSON_FILENAME
            if candidate.is_file():
                return candidate
            if current == current.parent:
                return None
            current = current.parent

    @classmethod
    def discover(cls, start_path: Optional[Union[str, Path]] = None) -> 'ProjectRegistry':
        """Locate and load the rush.json governing a folder

        Raises:
            RegistryNotFoundError: If no rush.json is found
        """
        rush_json_file = cls.find_rush_json(start_path)
        if rush_json_file is None:
            raise RegistryNotFoundError()
        return cls.load(rush_json_file)

    @property
    def projects(self) -> List[RushProject]:
        """All registered projects in declaration order"""
        return list(self._projects_by_name.values())

    @property
    def default_deploy_folder(self) -> Path:
        """Deploy folder used when no target folder is given"""
        return self.common_folder / DEFAULT_DEPLOY_FOLDER_NAME

    def get_project_by_name(self, package_name: str) -> Optional[RushProject]:
        """Get a project by its package name"""
        return self._projects_by_name.get(package_name)

    def is_project_folder(self, folder: Union[str, Path]) -> bool:
        """Check if a folder is the root folder of a registered project"""
        folder = Path(os.path.abspath(folder))
        return any(project.project_folder == folder for project in self._projects_by_name.values())
