"""Symbolic link discovery"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Set, Union

from ..constants import LinkKind
from ..models.link import LinkDescriptor
from ..utils.file_utils import is_under_or_equal

# Prefix Windows adds to junction and extended-length link targets
_WINDOWS_EXTENDED_PREFIX = "\\\\?\\"


class SymlinkAnalyzer:
    """Records every symbolic link found along analyzed paths

    Each analyzed path is checked component by component; every component
    that is a link is recorded, and the link's own target is analyzed in turn
    so that chains of links are captured. Results are keyed by link path, so
    analyzing the same path twice is harmless.
    """

    def __init__(self, root: Optional[Union[str, Path]] = None):
        """Initialize symlink analyzer

        Args:
            root: Only links located under this folder are recorded
        """
        self.root = Path(os.path.abspath(root)) if root is not None else None
        self.logger = logging.getLogger(self.__class__.__name__)
        self._links_by_path: Dict[Path, LinkDescriptor] = {}
        self._analyzed_paths: Set[Path] = set()

    def analyze_path(self, path: Union[str, Path]) -> None:
        """Record the links along a path

        Args:
            path: Absolute path, possibly passing through links
        """
        pending = [Path(os.path.abspath(path))]

        while pending:
            current = pending.pop()

            for prefix in self._iter_prefixes(current):
                if prefix in self._analyzed_paths:
                    continue
                self._analyzed_paths.add(prefix)

                if not prefix.is_symlink():
                    continue

                target = self._read_link_target(prefix)
                if self.root is None or is_under_or_equal(prefix, self.root):
                    kind = LinkKind.FOLDER_LINK if target.is_dir() else LinkKind.FILE_LINK
                    self._links_by_path[prefix] = LinkDescriptor(
                        kind=kind,
                        link_path=prefix,
                        target_path=target,
                    )
                    self.logger.debug(f"Found {kind.value}: {prefix} -> {target}")

                pending.append(target)

    def report_symlinks(self) -> List[LinkDescriptor]:
        """Get the recorded links sorted by link path"""
        return sorted(self._links_by_path.values(), key=lambda link: str(link.link_path))

    def __len__(self) -> int:
        return len(self._links_by_path)

    @staticmethod
    def _iter_prefixes(path: Path):
        """Yield the path's ancestors from the top down, then the path itself"""
        for parent in reversed(path.parents):
            if parent != Path(parent.anchor):
                yield parent
        yield path

    @staticmethod
    def _read_link_target(link_path: Path) -> Path:
        """Get the absolute, normalized target of a link"""
        target = os.readlink(link_path)
        if target.startswith(_WINDOWS_EXTENDED_PREFIX):
            target = target[len(_WINDOWS_EXTENDED_PREFIX):]
        return Path(os.path.normpath(os.path.join(link_path.parent, target)))
