"""Symbolic link models"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any

from ..constants import LinkKind


@dataclass(frozen=True)
class LinkDescriptor:
    """A symbolic link recorded in the source tree"""

    kind: LinkKind
    link_path: Path
    target_path: Path

    def relative_to(self, root: Path) -> 'LinkDescriptor':
        """Express both paths relative to a root folder"""
        return LinkDescriptor(
            kind=self.kind,
            link_path=self.link_path.relative_to(root),
            target_path=self.target_path.relative_to(root),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (forward slashes for portability)"""
        return {
            "kind": self.kind.value,
            "linkPath": self.link_path.as_posix(),
            "targetPath": self.target_path.as_posix(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LinkDescriptor':
        """Create from dictionary"""
        return cls(
            kind=LinkKind(data["kind"]),
            link_path=Path(data["linkPath"]),
            target_path=Path(data["targetPath"]),
        )
