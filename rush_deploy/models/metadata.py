"""deploy-metadata.json model"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Any

from .link import LinkDescriptor
from ..api.exceptions import DeployMetadataError
from ..constants import DEPLOY_METADATA_FILENAME


@dataclass
class DeployMetadata:
    """Describes a deployed folder so links can be recreated later

    All paths are relative to the subdeployment folder.
    """

    scenario_name: str
    main_project_name: Optional[str] = None
    projects: List[str] = field(default_factory=list)
    links: List[LinkDescriptor] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "scenarioName": self.scenario_name,
            "mainProjectName": self.main_project_name,
            "projects": [{"path": path} for path in self.projects],
            "links": [link.to_dict() for link in self.links],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DeployMetadata':
        """Create from dictionary"""
        return cls(
            scenario_name=data.get("scenarioName", ""),
            main_project_name=data.get("mainProjectName"),
            projects=[item["path"] for item in data.get("projects", [])],
            links=[LinkDescriptor.from_dict(item) for item in data.get("links", [])],
        )

    def save(self, folder: Path) -> Path:
        """Write deploy-metadata.json into a folder

        Returns:
            Path to the written file
        """
        metadata_path = folder / DEPLOY_METADATA_FILENAME
        metadata_path.parent.mkdir(parents=True, exist_ok=True)
        with open(metadata_path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
            f.write("\n")
        return metadata_path

    @classmethod
    def load(cls, folder: Path) -> 'DeployMetadata':
        """Read deploy-metadata.json from a deployed folder

        Raises:
            DeployMetadataError: If the file is missing or malformed
        """
        metadata_path = folder / DEPLOY_METADATA_FILENAME
        if not metadata_path.is_file():
            raise DeployMetadataError(f"The deploy metadata file was not found: {metadata_path}")

        try:
            with open(metadata_path, 'r', encoding='utf-8') as f:
                return cls.from_dict(json.load(f))
        except (ValueError, KeyError, TypeError) as e:
            raise DeployMetadataError(f"Invalid deploy metadata file {metadata_path}: {e}")
