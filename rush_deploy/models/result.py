"""Operation result models"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Any


@dataclass
class SubdeploymentResult:
    """Result of deploying one subdeployment"""

    folder_name: Optional[str]
    target_folder: Path
    included_projects: List[str] = field(default_factory=list)
    copied_folders: int = 0
    recorded_links: int = 0
    created_links: int = 0
    metadata_path: Optional[Path] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "folder_name": self.folder_name,
            "target_folder": str(self.target_folder),
            "included_projects": self.included_projects,
            "copied_folders": self.copied_folders,
            "recorded_links": self.recorded_links,
            "created_links": self.created_links,
            "metadata_path": str(self.metadata_path) if self.metadata_path else None,
        }


@dataclass
class DeployResult:
    """Result of a deploy scenario run"""

    scenario_name: str
    target_root: Path
    subdeployments: List[SubdeploymentResult] = field(default_factory=list)
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None

    @property
    def duration(self) -> Optional[float]:
        """Get operation duration in seconds"""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    @property
    def copied_folders(self) -> int:
        """Total number of copied package folders"""
        return sum(item.copied_folders for item in self.subdeployments)

    @property
    def created_links(self) -> int:
        """Total number of created links"""
        return sum(item.created_links for item in self.subdeployments)

    def complete(self) -> None:
        """Mark operation as complete"""
        self.end_time = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "scenario_name": self.scenario_name,
            "target_root": str(self.target_root),
            "subdeployments": [item.to_dict() for item in self.subdeployments],
            "duration": self.duration,
        }
