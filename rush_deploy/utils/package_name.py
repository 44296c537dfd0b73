"""npm package name parsing"""

import re
from dataclasses import dataclass
from typing import Optional

# Characters allowed in scope and name parts of an npm package name
_NAME_PART_PATTERN = re.compile(r"^[a-z0-9][a-z0-9._~-]*$", re.IGNORECASE)


@dataclass(frozen=True)
class ParsedPackageName:
    """A package name split into scope and unscoped name"""
    scope: str
    unscoped_name: str

    def __str__(self) -> str:
        if self.scope:
            return f"{self.scope}/{self.unscoped_name}"
        return self.unscoped_name


class PackageNameParser:
    """Parses and validates npm package names such as ``@scope/name``"""

    def try_parse(self, package_name: str) -> Optional[ParsedPackageName]:
        """
        Parse a package name

        Args:
            package_name: Full package name

        Returns:
            ParsedPackageName or None if the name is invalid
        """
        if not package_name:
            return None

        scope = ""
        name = package_name

        if package_name.startswith('@'):
            slash = package_name.find('/')
            if slash <= 1 or slash == len(package_name) - 1:
                return None
            scope = package_name[:slash]
            name = package_name[slash + 1:]
            if not _NAME_PART_PATTERN.match(scope[1:]):
                return None

        if '/' in name or not _NAME_PART_PATTERN.match(name):
            return None

        return ParsedPackageName(scope=scope, unscoped_name=name)

    def is_valid_name(self, package_name: str) -> bool:
        """Check if a package name is valid"""
        return self.try_parse(package_name) is not None

    def parse(self, package_name: str) -> ParsedPackageName:
        """
        Parse a package name

        Raises:
            ValueError: If the name is invalid
        """
        parsed = self.try_parse(package_name)
        if parsed is None:
            raise ValueError(f"Invalid package name: {package_name!r}")
        return parsed

    def get_unscoped_name(self, package_name: str) -> str:
        """Get the name without its ``@scope/`` prefix"""
        return self.parse(package_name).unscoped_name

    def get_scope(self, package_name: str) -> str:
        """Get the ``@scope`` part, or an empty string"""
        return self.parse(package_name).scope
