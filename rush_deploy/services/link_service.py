"""Link service for deployed folders"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.markup import escape

from ..core.link_materializer import LinkMaterializer, LinkCreator
from ..core.path_resolver import PathResolver
from ..core.subdeployment_state import SubdeploymentState
from ..core.symlink_analyzer import SymlinkAnalyzer
from ..constants import LinkAction, EMOJI_LINK
from ..models import DeployMetadata, LinkDescriptor


class LinkService:
    """Creates or removes the links listed in deploy-metadata.json

    Works on a deployed folder alone, so it can run on a deployment host
    that has no copy of the monorepo.
    """

    def __init__(self,
                 console: Optional[Console] = None,
                 link_creator: Optional[LinkCreator] = None):
        self.console = console or Console()
        self.link_creator = link_creator
        self.logger = logging.getLogger(self.__class__.__name__)

    def apply(self, folder: Union[str, Path], action: LinkAction = LinkAction.CREATE) -> int:
        """Create or remove the links of a deployed folder

        Args:
            folder: Subdeployment folder containing deploy-metadata.json
            action: Create or remove the links

        Returns:
            Number of links created or removed

        Raises:
            DeployMetadataError: If deploy-metadata.json is missing or invalid
            LinkTargetNotFoundError: If link targets are missing
            CopyCollisionError: If a link path is already taken
        """
        folder = Path(os.path.abspath(folder))
        metadata = DeployMetadata.load(folder)
        self.logger.info(f"Loaded {len(metadata.links)} links from {folder}")

        # Recorded paths are relative to the folder, which is both source and target here
        links = [
            LinkDescriptor(kind=link.kind, link_path=folder / link.link_path, target_path=folder / link.target_path)
            for link in metadata.links
        ]
        state = SubdeploymentState(target_folder=folder, symlink_analyzer=SymlinkAnalyzer(folder))
        link_materializer = LinkMaterializer(PathResolver(folder), self.link_creator)

        if action == LinkAction.REMOVE:
            count = link_materializer.remove_links(links, state)
            self.console.print(f"{EMOJI_LINK} Removed {count} links from {escape(str(folder))}")
        else:
            count = link_materializer.deploy_links(links, state)
            self.console.print(f"{EMOJI_LINK} Created {count} links in {escape(str(folder))}")
        return count
