"""Deploy scenario loading and validation"""

import logging
from pathlib import Path
from typing import Optional

import jsonschema

from .project_registry import ProjectRegistry
from ..api.exceptions import (
    ScenarioNotFoundError,
    ScenarioConfigError,
    ProjectNotFoundError,
)
from ..constants import (
    DEPLOY_SCENARIOS_DIR,
    SCENARIO_FILE_EXTENSION,
    DEFAULT_SCENARIO_NAME,
    SCENARIO_NAME_PATTERN,
)
from ..models.scenario import ScenarioConfig, SCENARIO_SCHEMA
from ..templates import render_template, DEPLOY_SCENARIO_TEMPLATE
from ..utils.file_utils import ensure_parent_dir
from ..utils.json_utils import load_json_file


class ScenarioLoader:
    """Locates, loads and validates deploy scenario files"""

    def __init__(self, registry: ProjectRegistry):
        """Initialize scenario loader

        Args:
            registry: Project registry used to validate project names
        """
        self.registry = registry
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def scenarios_folder(self) -> Path:
        """Folder holding the scenario files"""
        return self.registry.common_folder / DEPLOY_SCENARIOS_DIR

    def get_scenario_path(self, scenario_name: Optional[str] = None) -> Path:
        """Get the path of a scenario file

        Args:
            scenario_name: Scenario name (defaults to "deploy")

        Returns:
            Path to the scenario JSON file

        Raises:
            ScenarioConfigError: If the name is not a valid scenario name
        """
        scenario_name = scenario_name or DEFAULT_SCENARIO_NAME
        if not SCENARIO_NAME_PATTERN.match(scenario_name):
            raise ScenarioConfigError(
                f'Invalid scenario name "{scenario_name}". Scenario names may only contain'
                f" lowercase letters, digits, dots, hyphens and underscores"
            )
        return self.scenarios_folder / f"{scenario_name}{SCENARIO_FILE_EXTENSION}"

    def load(self, scenario_name: Optional[str] = None) -> ScenarioConfig:
        """Load and validate a scenario

        Args:
            scenario_name: Scenario name (defaults to "deploy")

        Returns:
            Validated ScenarioConfig

        Raises:
            ScenarioNotFoundError: If the scenario file does not exist
            ScenarioConfigError: If the file is malformed or inconsistent
            ProjectNotFoundError: If the scenario names an unknown project
        """
        scenario_name = scenario_name or DEFAULT_SCENARIO_NAME
        scenario_path = self.get_scenario_path(scenario_name)

        if not scenario_path.is_file():
            raise ScenarioNotFoundError(str(scenario_path))

        self.logger.info(f"Loading scenario from {scenario_path}")

        try:
            data = load_json_file(scenario_path)
        except ValueError as e:
            raise ScenarioConfigError(f"Failed to parse {scenario_path}: {e}")

        try:
            jsonschema.validate(data, SCENARIO_SCHEMA)
        except jsonschema.ValidationError as e:
            location = "/".join(str(part) for part in e.absolute_path) or "(root)"
            raise ScenarioConfigError(f"Invalid scenario file {scenario_path} at {location}: {e.message}")

        scenario = ScenarioConfig.from_dict(data, scenario_name=scenario_name)
        self.validate_projects(scenario)
        return scenario

    def validate_projects(self, scenario: ScenarioConfig) -> None:
        """Check every project name referenced by a scenario

        Raises:
            ScenarioConfigError: If a project has more than one settings entry
            ProjectNotFoundError: If a project is not declared in rush.json
        """
        seen = set()
        for settings in scenario.project_settings:
            if settings.project_name in seen:
                raise ScenarioConfigError(
                    f'The "projectSettings" section lists the project name "{settings.project_name}"'
                    f" more than once"
                )
            seen.add(settings.project_name)

        for project_name, setting in scenario.referenced_project_names():
            if self.registry.get_project_by_name(project_name) is None:
                raise ProjectNotFoundError(project_name, setting)

    def init_scenario(self,
                      project_name: str,
                      scenario_name: Optional[str] = None,
                      overwrite: bool = False) -> Path:
        """Write a scenario template for a project

        Args:
            project_name: Project to deploy, declared in rush.json
            scenario_name: Scenario name (defaults to "deploy")
            overwrite: Replace an existing scenario file

        Returns:
            Path to the created scenario file

        Raises:
            ProjectNotFoundError: If the project is unknown
            ScenarioConfigError: If the file exists and overwrite is not set
        """
        if self.registry.get_project_by_name(project_name) is None:
            raise ProjectNotFoundError(project_name, "--project")

        scenario_path = self.get_scenario_path(scenario_name)
        if scenario_path.exists() and not overwrite:
            raise ScenarioConfigError(
                f"The scenario config file already exists: {scenario_path}."
                f" Use --overwrite to replace it."
            )

        content = render_template(DEPLOY_SCENARIO_TEMPLATE, {
            "project_name": project_name,
            "unscoped_name": self.registry.package_name_parser.get_unscoped_name(project_name),
        })

        ensure_parent_dir(scenario_path)
        scenario_path.write_text(content, encoding='utf-8')
        self.logger.info(f"Created scenario file {scenario_path}")
        return scenario_path
