"""npm publish rules for local project folders"""

import logging
import posixpath
from pathlib import Path
from typing import Any, Dict, List, Optional

from pathspec import GitIgnoreSpec, PathSpec

from ..constants import (
    PACKAGE_JSON_FILENAME,
    NPM_IGNORE_FILENAME,
    GIT_IGNORE_FILENAME,
    PACKLIST_ALWAYS_INCLUDED_PREFIXES,
    PACKLIST_ALWAYS_EXCLUDED,
)
from ..utils.json_utils import load_json_file

logger = logging.getLogger(__name__)

_ALWAYS_EXCLUDED_SPEC = GitIgnoreSpec.from_lines(PACKLIST_ALWAYS_EXCLUDED)


class PackList:
    """Decides which files of a project folder npm would publish

    The ``files`` allowlist of package.json wins when present; otherwise
    ``.npmignore`` is used, falling back to ``.gitignore``. Paths passed to
    :meth:`is_included` are relative to the package folder, using ``/``.
    """

    def __init__(self,
                 allowlist: Optional[List[str]] = None,
                 ignore_lines: Optional[List[str]] = None):
        """Initialize pack list

        Args:
            allowlist: Patterns from the "files" field (plus "main")
            ignore_lines: Lines of an ignore file, when no allowlist is used
        """
        self.allowlist: Optional[List[str]] = None
        if allowlist is not None:
            normalized = (self._normalize_pattern(pattern) for pattern in allowlist)
            self.allowlist = [pattern for pattern in normalized if pattern]

        self._allow_spec = PathSpec.from_lines("gitwildmatch", self.allowlist) if self.allowlist else None
        self._ignore_spec = GitIgnoreSpec.from_lines(ignore_lines) if ignore_lines else None

    @classmethod
    def for_folder(cls, package_folder: Path) -> 'PackList':
        """Build the pack list of a package folder

        Args:
            package_folder: Folder containing package.json

        Returns:
            PackList instance
        """
        package_json: Dict[str, Any] = {}
        package_json_path = package_folder / PACKAGE_JSON_FILENAME
        if package_json_path.is_file():
            loaded = load_json_file(package_json_path, allow_comments=False)
            if isinstance(loaded, dict):
                package_json = loaded

        files = package_json.get("files")
        if isinstance(files, list):
            allowlist = [item for item in files if isinstance(item, str)]
            main = package_json.get("main")
            if isinstance(main, str):
                allowlist.append(main)
            logger.debug(f"Using the \"files\" allowlist of {package_json_path}")
            return cls(allowlist=allowlist)

        for ignore_filename in (NPM_IGNORE_FILENAME, GIT_IGNORE_FILENAME):
            ignore_file = package_folder / ignore_filename
            if ignore_file.is_file():
                logger.debug(f"Using ignore rules from {ignore_file}")
                return cls(ignore_lines=ignore_file.read_text(encoding='utf-8').splitlines())

        return cls()

    def is_included(self, relative_path: str, is_dir: bool = False) -> bool:
        """Check if a path would be published

        Args:
            relative_path: Path relative to the package folder
            is_dir: True if the path is a folder

        Returns:
            True if the path belongs in the deployment
        """
        relative_path = relative_path.strip("/")
        match_path = relative_path + "/" if is_dir else relative_path

        if _ALWAYS_EXCLUDED_SPEC.match_file(match_path):
            return False

        if not is_dir and "/" not in relative_path:
            lowered = relative_path.lower()
            if any(lowered.startswith(prefix) for prefix in PACKLIST_ALWAYS_INCLUDED_PREFIXES):
                return True

        if self.allowlist is not None:
            if is_dir:
                return self._may_contain_allowed(relative_path)
            return self._allow_spec is not None and self._allow_spec.match_file(relative_path)

        if self._ignore_spec is not None:
            return not self._ignore_spec.match_file(match_path)

        return True

    def _may_contain_allowed(self, relative_dir: str) -> bool:
        """Check if an allowlisted path can live under a folder"""
        if self._allow_spec is None:
            return False
        if self._allow_spec.match_file(relative_dir):
            return True

        depth = len(relative_dir.split("/"))
        for pattern in self.allowlist:
            parts = pattern.strip("/").split("/")
            if "**" in parts[:depth]:
                return True
            # Compare the leading segments against the folder path
            prefix = "/".join(parts[:depth])
            if len(parts) > depth and PathSpec.from_lines("gitwildmatch", ["/" + prefix]).match_file(relative_dir):
                return True
        return False

    @staticmethod
    def _normalize_pattern(pattern: str) -> str:
        pattern = pattern.strip()
        while pattern.startswith("./"):
            pattern = pattern[2:]
        if pattern.endswith("/**"):
            pattern = pattern[:-3]
        if not pattern:
            return ""
        pattern = posixpath.normpath(pattern.lstrip("/"))
        # Entries of "files" are relative to the package root
        return "" if pattern == "." else "/" + pattern
