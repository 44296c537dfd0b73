# rush_deploy/utils/__init__.py
"""Utility functions for rush-deploy"""

from .file_utils import (
    is_under_or_equal,
    ensure_folder,
    ensure_parent_dir,
    is_folder_empty,
    ensure_empty_folder,
    remove_link,
)

from .json_utils import (
    strip_json_comments,
    load_json_file,
)

from .package_name import (
    PackageNameParser,
    ParsedPackageName,
)

__all__ = [
    # File utilities
    "is_under_or_equal",
    "ensure_folder",
    "ensure_parent_dir",
    "is_folder_empty",
    "ensure_empty_folder",
    "remove_link",

    # JSON utilities
    "strip_json_comments",
    "load_json_file",

    # Package name utilities
    "PackageNameParser",
    "ParsedPackageName",
]
