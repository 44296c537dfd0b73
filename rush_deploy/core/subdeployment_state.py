"""Per-subdeployment resolution state"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Set

from .symlink_analyzer import SymlinkAnalyzer


@dataclass
class SubdeploymentState:
    """Mutable context of one subdeployment run

    Each subdeployment builds a fresh instance; it is passed through the
    resolve, copy and link phases and never shared with another run.
    """

    target_folder: Path
    symlink_analyzer: SymlinkAnalyzer
    folder_name: Optional[str] = None
    included_projects: List[str] = field(default_factory=list)
    folders_to_copy: Set[Path] = field(default_factory=set)

    def sorted_folders(self) -> List[Path]:
        """Folders to copy in deterministic order"""
        return sorted(self.folders_to_copy, key=str)
