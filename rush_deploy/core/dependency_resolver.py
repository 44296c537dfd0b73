"""Runtime dependency closure of package folders"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from .subdeployment_state import SubdeploymentState
from .symlink_analyzer import SymlinkAnalyzer
from ..api.exceptions import (
    ResolutionError,
    DependencyResolutionError,
    PackageJsonNotFoundError,
)
from ..constants import (
    ERROR_DEPENDENCY_RESOLUTION,
    PACKAGE_JSON_FILENAME,
    NODE_MODULES_FOLDER_NAME,
)
from ..utils.json_utils import load_json_file


def node_modules_paths(start_folder: Path) -> List[Path]:
    """
    List the node_modules folders searched by the Node.js loader

    Args:
        start_folder: Folder of the requiring module

    Returns:
        Candidate node_modules folders, nearest first
    """
    paths = []
    for folder in [start_folder, *start_folder.parents]:
        if folder.name == NODE_MODULES_FOLDER_NAME:
            continue
        paths.append(folder / NODE_MODULES_FOLDER_NAME)
    return paths


def find_package_json(path: Union[str, Path]) -> Optional[Path]:
    """
    Find the package.json owning a file or folder

    Args:
        path: File or folder inside a package

    Returns:
        Path to the nearest package.json, or None
    """
    path = Path(path)
    if path.name == PACKAGE_JSON_FILENAME and path.is_file():
        return path

    folder = path if path.is_dir() else path.parent
    for candidate_folder in [folder, *folder.parents]:
        candidate = candidate_folder / PACKAGE_JSON_FILENAME
        if candidate.is_file():
            return candidate
    return None


class DependencyResolver:
    """Collects the package folders needed to run a package

    Dependency names are resolved the way the Node.js loader resolves them,
    except that the package's ``main`` entry is ignored: resolution always
    targets package.json, so packages without an entry point (such as
    ``@types/node``) still resolve.
    """

    def __init__(self, include_dev_dependencies: bool = False):
        """Initialize dependency resolver

        Args:
            include_dev_dependencies: Follow devDependencies as well
        """
        self.include_dev_dependencies = include_dev_dependencies
        self.logger = logging.getLogger(self.__class__.__name__)

    def resolve(self, package_json_path: Union[str, Path], state: SubdeploymentState) -> SubdeploymentState:
        """Add a package folder and its transitive dependencies to the state

        Args:
            package_json_path: Absolute path to the starting package.json
            state: Subdeployment state receiving the folders

        Returns:
            The same state

        Raises:
            DependencyResolutionError: If a required dependency is missing
            PackageJsonNotFoundError: If a resolved module has no package.json
        """
        worklist = [Path(os.path.abspath(package_json_path))]

        while worklist:
            current = worklist.pop()
            package_folder = current.parent

            if package_folder in state.folders_to_copy:
                continue
            state.folders_to_copy.add(package_folder)

            package_json = self._load_package_json(current)
            dependency_names, lenient_names = self.collect_dependency_names(package_json, current)

            dependency_package_jsons = []
            for dependency_name in dependency_names:
                resolved = self.resolve_package(dependency_name, package_folder, state.symlink_analyzer)

                if resolved is None:
                    if dependency_name in lenient_names:
                        self.logger.debug(f"Ignoring missing optional dependency {dependency_name} of {current}")
                        continue
                    raise DependencyResolutionError(dependency_name, str(current))

                dependency_package_json = find_package_json(resolved)
                if dependency_package_json is None:
                    raise PackageJsonNotFoundError(str(resolved))

                dependency_package_jsons.append(dependency_package_json)

            # Reversed so dependencies are visited in declaration order
            worklist.extend(reversed(dependency_package_jsons))

        return state

    def collect_dependency_names(self,
                                 package_json: Dict[str, Any],
                                 package_json_path: Path) -> Tuple[List[str], set]:
        """Compute the dependency names to follow

        Args:
            package_json: Parsed package.json
            package_json_path: Its path, for error messages

        Returns:
            (ordered required names, lenient names). Peer dependencies count
            as lenient because they are so frequently broken.
        """
        required: Dict[str, None] = {}
        lenient = set()

        for name in self._dependency_keys(package_json, "dependencies", package_json_path):
            required[name] = None

        if self.include_dev_dependencies:
            for name in self._dependency_keys(package_json, "devDependencies", package_json_path):
                required[name] = None

        for field_name in ("peerDependencies", "optionalDependencies"):
            for name in self._dependency_keys(package_json, field_name, package_json_path):
                required[name] = None
                lenient.add(name)

        return list(required), lenient

    def resolve_package(self,
                        package_name: str,
                        start_folder: Path,
                        symlink_analyzer: SymlinkAnalyzer) -> Optional[Path]:
        """Resolve a package name to the real path of its package.json

        Links met on the way are reported to the analyzer and resolution
        continues through their real targets.

        Args:
            package_name: Dependency name
            start_folder: Folder of the requiring package
            symlink_analyzer: Receives the links along the resolved path

        Returns:
            Real path of the dependency's package.json, or None if not found
        """
        base_folder = Path(os.path.realpath(start_folder))

        for node_modules_folder in node_modules_paths(base_folder):
            candidate = node_modules_folder / package_name / PACKAGE_JSON_FILENAME
            if candidate.is_file():
                symlink_analyzer.analyze_path(candidate)
                return Path(os.path.realpath(candidate))

        return None

    @staticmethod
    def _dependency_keys(package_json: Dict[str, Any], field_name: str, package_json_path: Path) -> List[str]:
        """Get the package names declared in a dependency field"""
        dependencies = package_json.get(field_name) or {}
        if not isinstance(dependencies, dict):
            raise ResolutionError(
                f'Invalid "{field_name}" field in {package_json_path}: expected an object',
                ERROR_DEPENDENCY_RESOLUTION,
            )
        return list(dependencies.keys())

    @staticmethod
    def _load_package_json(package_json_path: Path) -> Dict[str, Any]:
        """Load a package.json file"""
        try:
            package_json = load_json_file(package_json_path, allow_comments=False)
        except (OSError, ValueError) as e:
            raise ResolutionError(f"Error reading {package_json_path}: {e}", ERROR_DEPENDENCY_RESOLUTION)

        if not isinstance(package_json, dict):
            raise ResolutionError(
                f"Invalid package.json {package_json_path}: expected a JSON object",
                ERROR_DEPENDENCY_RESOLUTION,
            )
        return package_json
