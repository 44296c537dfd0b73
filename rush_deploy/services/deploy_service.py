"""Deploy service implementation"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from rich.console import Console
from rich.markup import escape

from ..core.dependency_resolver import DependencyResolver
from ..core.folder_materializer import FolderMaterializer
from ..core.link_materializer import LinkMaterializer, LinkCreator
from ..core.path_resolver import PathResolver
from ..core.project_registry import ProjectRegistry
from ..core.scenario_loader import ScenarioLoader
from ..core.subdeployment_state import SubdeploymentState
from ..core.symlink_analyzer import SymlinkAnalyzer
from ..api.exceptions import (
    ScenarioConfigError,
    ProjectNotFoundError,
    TargetFolderError,
)
from ..constants import (
    SymlinkCreation,
    EMOJI_SUCCESS,
    MSG_ANALYZING_PROJECT,
    MSG_PREPARING_SUBDEPLOYMENT,
    MSG_DEPLOY_TARGET,
    MSG_DELETING_TARGET,
)
from ..models import (
    DeployMetadata,
    DeployResult,
    ScenarioConfig,
    SubdeploymentResult,
)
from ..utils.file_utils import ensure_empty_folder, ensure_folder, is_folder_empty
from ..utils.package_name import PackageNameParser


@dataclass
class PlannedSubdeployment:
    """One output tree of a deployment"""

    folder_name: Optional[str]
    project_names: List[str] = field(default_factory=list)


class SubdeploymentPlanner:
    """Partitions the projects of a scenario into output trees

    Planning only reads the scenario; nothing touches the filesystem, so
    every planning error surfaces before the target folder is modified.
    """

    def __init__(self, package_name_parser: Optional[PackageNameParser] = None):
        self.package_name_parser = package_name_parser or PackageNameParser()

    def plan(self, scenario: ScenarioConfig) -> List[PlannedSubdeployment]:
        """Plan the subdeployments of a scenario

        Args:
            scenario: Validated scenario

        Returns:
            Subdeployments in declaration order, each listing its projects
            followed by their additional projects

        Raises:
            ScenarioConfigError: If folder names clash or are not plain folder
                names, or no project is listed
        """
        if scenario.subdeployments_enabled:
            projects = scenario.subdeployments.subdeployment_projects
            if not projects:
                raise ScenarioConfigError(
                    'The "subdeployments" section is enabled but "subdeploymentProjects"'
                    ' does not specify any project.'
                )

            planned = []
            used_folder_names = set()
            for project_name in projects:
                settings = scenario.get_project_settings(project_name)
                if settings is not None and settings.subdeployment_folder_name:
                    folder_name = settings.subdeployment_folder_name
                else:
                    folder_name = self.package_name_parser.get_unscoped_name(project_name)

                if not self._is_plain_folder_name(folder_name):
                    raise ScenarioConfigError(
                        f'The subdeployment folder name "{folder_name}" is not a valid folder name.'
                        f'  It must be a single path segment without separators.'
                    )

                if folder_name in used_folder_names:
                    raise ScenarioConfigError(
                        f'The subdeployment folder name "{folder_name}" is not unique.'
                        f'  Use the "subdeploymentFolderName" setting to specify a different name.'
                    )
                used_folder_names.add(folder_name)

                planned.append(PlannedSubdeployment(
                    folder_name=folder_name,
                    project_names=self._expand_projects([project_name], scenario),
                ))
            return planned

        if not scenario.project_settings:
            raise ScenarioConfigError(
                'No projects were specified to be deployed. If subdeployments.enabled is false,'
                ' then the "projectSettings" section must specify at least one project.'
            )

        project_names = [settings.project_name for settings in scenario.project_settings]
        return [PlannedSubdeployment(
            folder_name=None,
            project_names=self._expand_projects(project_names, scenario),
        )]

    @staticmethod
    def _is_plain_folder_name(folder_name: str) -> bool:
        """Check that a folder name stays directly under the target root"""
        if folder_name in ("", ".", ".."):
            return False
        if "/" in folder_name or "\\" in folder_name or ":" in folder_name:
            return False
        return not os.path.isabs(folder_name)

    @staticmethod
    def _expand_projects(project_names: List[str], scenario: ScenarioConfig) -> List[str]:
        """Add additionalProjectsToInclude, keeping first-seen order"""
        included = {}
        for project_name in project_names:
            included[project_name] = None
            settings = scenario.get_project_settings(project_name)
            if settings is not None:
                for additional_name in settings.additional_projects_to_include:
                    included[additional_name] = None
        return list(included)


class DeployService:
    """Service for deploying scenarios into standalone folders"""

    def __init__(self,
                 registry: ProjectRegistry,
                 console: Optional[Console] = None,
                 link_creator: Optional[LinkCreator] = None):
        """Initialize deploy service

        Args:
            registry: Project registry of the monorepo
            console: Console receiving progress output
            link_creator: Link creation capability (selected for this platform if omitted)
        """
        self.registry = registry
        self.console = console or Console()
        self.link_creator = link_creator
        self.scenario_loader = ScenarioLoader(registry)
        self.planner = SubdeploymentPlanner(registry.package_name_parser)
        self.path_resolver = PathResolver(registry.rush_json_folder)
        self.logger = logging.getLogger(self.__class__.__name__)

    def deploy_scenario(self,
                        scenario_name: Optional[str] = None,
                        overwrite_existing: bool = False,
                        target_folder: Optional[Union[str, Path]] = None) -> DeployResult:
        """Deploy a scenario

        Args:
            scenario_name: Scenario to deploy (defaults to "deploy")
            overwrite_existing: Delete the target folder's contents first
            target_folder: Existing folder to deploy into (defaults to common/deploy)

        Returns:
            DeployResult

        Raises:
            ConfigError: If the scenario or registry is invalid
            TargetFolderError: If the target folder cannot be used
            ResolutionError: If a dependency cannot be resolved
            MaterializationError: If a folder or link cannot be materialized
        """
        scenario = self.scenario_loader.load(scenario_name)
        planned = self.planner.plan(scenario)

        target_root = self._prepare_target(target_folder, overwrite_existing)
        result = DeployResult(scenario_name=scenario.scenario_name, target_root=target_root)

        for subdeployment in planned:
            if subdeployment.folder_name is not None:
                self.console.print(
                    "\n" + MSG_PREPARING_SUBDEPLOYMENT.format(folder=escape(subdeployment.folder_name))
                )
            result.subdeployments.append(
                self._deploy_subdeployment(scenario, subdeployment, target_root)
            )

        result.complete()
        self.console.print(f"[green]{EMOJI_SUCCESS} SUCCESS[/green]")
        return result

    def _prepare_target(self, target_folder: Optional[Union[str, Path]], overwrite_existing: bool) -> Path:
        """Resolve the target root and make sure it is empty

        Raises:
            TargetFolderError: If an explicit folder does not exist, or the
                folder is not empty and overwriting was not requested
        """
        if target_folder is not None:
            target_root = Path(os.path.abspath(target_folder))
            if not target_root.is_dir():
                raise TargetFolderError(f"The specified target folder does not exist: {str(target_folder)!r}")
        else:
            target_root = self.registry.default_deploy_folder

        self.console.print(MSG_DEPLOY_TARGET.format(target=escape(str(target_root))), highlight=False, soft_wrap=True)
        ensure_folder(target_root)

        if not is_folder_empty(target_root):
            if not overwrite_existing:
                raise TargetFolderError(
                    'The deploy target folder is not empty. You can specify "--overwrite"'
                    ' to recursively delete all folder contents.'
                )
            self.console.print(MSG_DELETING_TARGET)
            ensure_empty_folder(target_root)

        return target_root

    def _deploy_subdeployment(self,
                              scenario: ScenarioConfig,
                              subdeployment: PlannedSubdeployment,
                              target_root: Path) -> SubdeploymentResult:
        """Resolve, copy and link one subdeployment"""
        target_folder = target_root / subdeployment.folder_name if subdeployment.folder_name else target_root
        state = SubdeploymentState(
            target_folder=target_folder,
            symlink_analyzer=SymlinkAnalyzer(self.registry.rush_json_folder),
            folder_name=subdeployment.folder_name,
        )

        resolver = DependencyResolver(include_dev_dependencies=scenario.include_dev_dependencies)
        for project_name in subdeployment.project_names:
            self.console.print(MSG_ANALYZING_PROJECT.format(project=escape(project_name)))
            project = self.registry.get_project_by_name(project_name)
            if project is None:
                raise ProjectNotFoundError(project_name, "projectSettings")

            resolver.resolve(project.package_json_path, state)
            state.included_projects.append(project_name)

        folder_materializer = FolderMaterializer(
            self.path_resolver,
            project_folders=[project.project_folder for project in self.registry.projects],
            include_npm_ignore_files=scenario.include_npm_ignore_files,
        )
        self.console.print("Copying folders...")
        copied_folders = folder_materializer.copy_all(state)

        links = state.symlink_analyzer.report_symlinks()
        created_links = 0
        link_materializer = LinkMaterializer(self.path_resolver, self.link_creator)
        if scenario.symlink_creation == SymlinkCreation.DEFAULT:
            self.console.print("Copying symlinks...")
            created_links = link_materializer.deploy_links(links, state)
        else:
            link_materializer.verify_links(links, state)
            self.logger.info(
                f"Skipping creation of {len(links)} links because symlinkCreation is"
                f' "{scenario.symlink_creation.value}"'
            )

        metadata = DeployMetadata(
            scenario_name=scenario.scenario_name,
            main_project_name=subdeployment.project_names[0] if subdeployment.folder_name else None,
            projects=[
                self.path_resolver.make_relative(self.registry.get_project_by_name(name).project_folder).as_posix()
                for name in state.included_projects
            ],
            links=[link.relative_to(self.path_resolver.source_root) for link in links],
        )
        metadata_path = metadata.save(target_folder)

        return SubdeploymentResult(
            folder_name=subdeployment.folder_name,
            target_folder=target_folder,
            included_projects=list(state.included_projects),
            copied_folders=copied_folders,
            recorded_links=len(links),
            created_links=created_links,
            metadata_path=metadata_path,
        )

