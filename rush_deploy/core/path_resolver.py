"""Path resolution module for rush-deploy"""

import os
from pathlib import Path
from typing import Union

from ..api.exceptions import PathOutsideRootError
from ..utils.file_utils import is_under_or_equal


class PathResolver:
    """Maps paths in the source workspace to paths in a deploy folder"""

    def __init__(self, source_root: Union[str, Path]):
        """Initialize path resolver

        Args:
            source_root: Root folder of the source workspace (the rush.json folder)
        """
        self.source_root = Path(os.path.abspath(source_root))

    def is_under_source(self, path: Union[str, Path]) -> bool:
        """Check if a path is under the source root

        Args:
            path: Absolute path to check

        Returns:
            True if path is the source root or lies under it
        """
        return is_under_or_equal(Path(os.path.abspath(path)), self.source_root)

    def make_relative(self, path: Union[str, Path]) -> Path:
        """Make a path relative to the source root

        Args:
            path: Absolute path under the source root

        Returns:
            Relative path

        Raises:
            PathOutsideRootError: If path is not under the source root
        """
        path = Path(os.path.abspath(path))

        if not self.is_under_source(path):
            raise PathOutsideRootError(str(path), str(self.source_root))

        return path.relative_to(self.source_root)

    def remap(self, path: Union[str, Path], target_root: Union[str, Path]) -> Path:
        """Remap a source path into a deploy folder

        The result is ``target_root / relative(source_root, path)``.

        Args:
            path: Absolute path under the source root
            target_root: Deploy folder receiving the mirrored tree

        Returns:
            Absolute path in the deploy folder

        Raises:
            PathOutsideRootError: If path is not under the source root
        """
        return Path(target_root) / self.make_relative(path)
