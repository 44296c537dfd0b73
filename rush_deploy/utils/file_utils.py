# rush_deploy/utils/file_utils.py
"""File operation utilities"""

import os
import shutil
from pathlib import Path
from typing import Union


def is_under_or_equal(path: Union[str, Path], root: Union[str, Path]) -> bool:
    """
    Check if a path is equal to or inside a root folder

    Both paths are compared lexically; callers pass absolute paths.

    Args:
        path: Path to check
        root: Candidate parent folder

    Returns:
        True if path is root or lies under it
    """
    try:
        Path(path).relative_to(Path(root))
        return True
    except ValueError:
        return False


def ensure_folder(folder: Path) -> Path:
    """
    Ensure a folder exists

    Args:
        folder: Folder path

    Returns:
        The folder path
    """
    folder.mkdir(parents=True, exist_ok=True)
    return folder


def ensure_parent_dir(file_path: Path) -> Path:
    """
    Ensure parent directory exists

    Args:
        file_path: File path

    Returns:
        Parent directory path
    """
    return ensure_folder(file_path.parent)


def is_folder_empty(folder: Path) -> bool:
    """Check if a folder has no entries"""
    with os.scandir(folder) as entries:
        return next(entries, None) is None


def ensure_empty_folder(folder: Path) -> None:
    """
    Delete all contents of a folder, creating it if missing

    Links inside the folder are removed without following them.

    Args:
        folder: Folder to empty
    """
    ensure_folder(folder)

    for entry in folder.iterdir():
        if entry.is_symlink() or not entry.is_dir():
            entry.unlink()
        elif _is_junction(entry):
            entry.rmdir()
        else:
            shutil.rmtree(entry)


def remove_link(link_path: Path) -> bool:
    """
    Remove a symbolic link, junction or hard link

    Args:
        link_path: Link to remove

    Returns:
        True if something was removed
    """
    if _is_junction(link_path):
        link_path.rmdir()
        return True

    if link_path.is_symlink() or link_path.is_file():
        link_path.unlink()
        return True

    return False


def _is_junction(path: Path) -> bool:
    """Check for a Windows directory junction"""
    is_junction = getattr(os.path, 'isjunction', None)
    if is_junction is None:
        return False
    return is_junction(path)
