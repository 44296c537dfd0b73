"""Recreating recorded links inside a deploy folder"""

import logging
import os
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from .path_resolver import PathResolver
from .subdeployment_state import SubdeploymentState
from ..api.exceptions import CopyCollisionError, LinkTargetNotFoundError
from ..constants import LinkKind
from ..models.link import LinkDescriptor
from ..utils.file_utils import remove_link


class LinkCreator(ABC):
    """Platform capability for creating links"""

    @abstractmethod
    def create_folder_link(self, link_path: Path, relative_target: str) -> None:
        """Create a link to a folder"""

    @abstractmethod
    def create_file_link(self, link_path: Path, relative_target: str) -> None:
        """Create a link to a file"""

    def create_link(self, kind: LinkKind, link_path: Path, target_path: Path) -> None:
        """Create a link of the given kind

        Args:
            kind: Folder or file link
            link_path: Absolute path of the new link
            target_path: Absolute path of an existing target

        Raises:
            CopyCollisionError: If link_path already exists
        """
        # Both ends are canonicalized before computing the relative path
        real_target = Path(os.path.realpath(target_path.parent)) / target_path.name
        relative_target = os.path.relpath(real_target, os.path.realpath(link_path.parent))

        try:
            if kind == LinkKind.FOLDER_LINK:
                self.create_folder_link(link_path, relative_target)
            else:
                self.create_file_link(link_path, relative_target)
        except FileExistsError:
            raise CopyCollisionError(str(link_path))


class PosixLinkCreator(LinkCreator):
    """Relative symbolic links"""

    def create_folder_link(self, link_path: Path, relative_target: str) -> None:
        os.symlink(relative_target, link_path, target_is_directory=True)

    def create_file_link(self, link_path: Path, relative_target: str) -> None:
        os.symlink(relative_target, link_path)


class WindowsLinkCreator(LinkCreator):
    """Directory junctions for folders, hard links for files

    Neither needs the symlink privilege. Junctions store an absolute path,
    so the relative target is resolved against the link's folder.
    """

    def create_folder_link(self, link_path: Path, relative_target: str) -> None:
        import _winapi

        target = os.path.normpath(os.path.join(link_path.parent, relative_target))
        _winapi.CreateJunction(target, str(link_path))

    def create_file_link(self, link_path: Path, relative_target: str) -> None:
        target = os.path.normpath(os.path.join(link_path.parent, relative_target))
        os.link(target, link_path)


def create_link_creator(platform: Optional[str] = None) -> LinkCreator:
    """Select the link creator for a platform

    Args:
        platform: sys.platform value (defaults to the running platform)

    Returns:
        LinkCreator instance
    """
    platform = platform or sys.platform
    if platform.startswith("win"):
        return WindowsLinkCreator()
    return PosixLinkCreator()


class LinkMaterializer:
    """Recreates recorded links with paths remapped into the target tree"""

    def __init__(self, path_resolver: PathResolver, link_creator: Optional[LinkCreator] = None):
        """Initialize link materializer

        Args:
            path_resolver: Maps source paths into the target folder
            link_creator: Link creation capability (selected for this platform if omitted)
        """
        self.path_resolver = path_resolver
        self.link_creator = link_creator or create_link_creator()
        self.logger = logging.getLogger(self.__class__.__name__)

    def deploy_link(self, link: LinkDescriptor, state: SubdeploymentState) -> bool:
        """Create one link in the target tree

        Args:
            link: Link recorded in the source tree
            state: Subdeployment state

        Returns:
            False if the remapped target does not exist yet, True once created
        """
        link_path = self.path_resolver.remap(link.link_path, state.target_folder)
        target_path = self.path_resolver.remap(link.target_path, state.target_folder)

        if not target_path.exists():
            return False

        link_path.parent.mkdir(parents=True, exist_ok=True)
        self.link_creator.create_link(link.kind, link_path, target_path)
        self.logger.debug(f"Created {link.kind.value}: {link_path} -> {target_path}")
        return True

    def deploy_links(self, links: List[LinkDescriptor], state: SubdeploymentState) -> int:
        """Create all links, retrying those whose target is another link

        Args:
            links: Recorded links
            state: Subdeployment state

        Returns:
            Number of created links

        Raises:
            LinkTargetNotFoundError: If some targets never appear in the target tree
        """
        pending = list(links)
        created = 0

        for _ in range(len(links)):
            remaining = [link for link in pending if not self.deploy_link(link, state)]
            created += len(pending) - len(remaining)

            if not remaining or len(remaining) == len(pending):
                pending = remaining
                break
            pending = remaining

        if pending:
            raise LinkTargetNotFoundError(pending)

        return created

    def verify_links(self, links: List[LinkDescriptor], state: SubdeploymentState) -> None:
        """Check that every link could be created in the target tree

        Used when links are not created during the deploy. A target counts
        as present if it was copied, or if it is itself a verifiable link.

        Raises:
            PathOutsideRootError: If a link or its target is outside the source root
            LinkTargetNotFoundError: If some targets are not part of the deployment
        """
        pending = []
        for link in links:
            pending.append((
                link,
                self.path_resolver.remap(link.link_path, state.target_folder),
                self.path_resolver.remap(link.target_path, state.target_folder),
            ))

        available = set()
        for _ in range(len(links)):
            remaining = []
            for item in pending:
                _, link_path, target_path = item
                if target_path.exists() or target_path in available:
                    available.add(link_path)
                else:
                    remaining.append(item)

            if not remaining or len(remaining) == len(pending):
                pending = remaining
                break
            pending = remaining

        if pending:
            raise LinkTargetNotFoundError([link for link, _, _ in pending])

    def remove_links(self, links: List[LinkDescriptor], state: SubdeploymentState) -> int:
        """Delete previously created links

        Returns:
            Number of removed links
        """
        removed = 0
        for link in links:
            link_path = self.path_resolver.remap(link.link_path, state.target_folder)
            if remove_link(link_path):
                removed += 1
                self.logger.debug(f"Removed {link_path}")
        return removed
