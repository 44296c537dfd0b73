"""Copying resolved package folders into a deploy folder"""

import logging
import os
import shutil
from pathlib import Path
from typing import Iterable, Optional, Set, Union

from .packlist import PackList
from .path_resolver import PathResolver
from .subdeployment_state import SubdeploymentState
from ..api.exceptions import CopyCollisionError
from ..constants import NODE_MODULES_FOLDER_NAME


def _copy_file(src: str, dst: str) -> str:
    """Copy one file, refusing to replace an existing entry"""
    if os.path.lexists(dst):
        raise CopyCollisionError(dst)
    return shutil.copy2(src, dst)


class FolderMaterializer:
    """Mirrors package folders into the target tree

    Links met while copying are not followed; they are handed to the
    subdeployment's symlink analyzer and recreated later.
    """

    def __init__(self,
                 path_resolver: PathResolver,
                 project_folders: Optional[Iterable[Union[str, Path]]] = None,
                 include_npm_ignore_files: bool = True):
        """Initialize folder materializer

        Args:
            path_resolver: Maps source paths into the target folder
            project_folders: Local project folders, filtered by npm publish rules
            include_npm_ignore_files: Copy files npm would not publish
        """
        self.path_resolver = path_resolver
        self.project_folders: Set[Path] = {Path(os.path.abspath(folder)) for folder in project_folders or []}
        self.include_npm_ignore_files = include_npm_ignore_files
        self.logger = logging.getLogger(self.__class__.__name__)

    def copy(self, source_folder: Union[str, Path], state: SubdeploymentState) -> Path:
        """Copy a package folder into the subdeployment

        Args:
            source_folder: Absolute package folder under the source root
            state: Subdeployment state

        Returns:
            Target folder of the copy

        Raises:
            CopyCollisionError: If a file already exists in the target
            PathOutsideRootError: If the folder is not under the source root
        """
        source_folder = Path(os.path.abspath(source_folder))
        target_folder = self.path_resolver.remap(source_folder, state.target_folder)

        pack_list = None
        if not self.include_npm_ignore_files and source_folder in self.project_folders:
            pack_list = PackList.for_folder(source_folder)

        self.logger.debug(f"Copying {source_folder} -> {target_folder}")

        def ignore(folder: str, names):
            ignored = set()
            for name in names:
                path = os.path.join(folder, name)

                if folder == str(source_folder) and name == NODE_MODULES_FOLDER_NAME:
                    ignored.add(name)
                elif os.path.islink(path):
                    state.symlink_analyzer.analyze_path(path)
                    ignored.add(name)
                elif pack_list is not None:
                    relative_path = Path(path).relative_to(source_folder).as_posix()
                    if not pack_list.is_included(relative_path, is_dir=os.path.isdir(path)):
                        ignored.add(name)
            return ignored

        target_folder.parent.mkdir(parents=True, exist_ok=True)
        shutil.copytree(
            source_folder,
            target_folder,
            ignore=ignore,
            copy_function=_copy_file,
            dirs_exist_ok=True,
        )
        return target_folder

    def copy_all(self, state: SubdeploymentState) -> int:
        """Copy every folder recorded in the state, in sorted order

        Returns:
            Number of copied folders
        """
        folders = state.sorted_folders()
        for folder in folders:
            self.copy(folder, state)
        return len(folders)
