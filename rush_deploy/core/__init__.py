"""Core functionality for rush-deploy"""

from .path_resolver import PathResolver
from .project_registry import ProjectRegistry, RushProject
from .scenario_loader import ScenarioLoader
from .symlink_analyzer import SymlinkAnalyzer
from .subdeployment_state import SubdeploymentState
from .dependency_resolver import DependencyResolver, find_package_json
from .packlist import PackList
from .folder_materializer import FolderMaterializer
from .link_materializer import (
    LinkCreator,
    PosixLinkCreator,
    WindowsLinkCreator,
    LinkMaterializer,
    create_link_creator,
)

__all__ = [
    "PathResolver",
    "ProjectRegistry",
    "RushProject",
    "ScenarioLoader",
    "SymlinkAnalyzer",
    "SubdeploymentState",
    "DependencyResolver",
    "find_package_json",
    "PackList",
    "FolderMaterializer",
    "LinkCreator",
    "PosixLinkCreator",
    "WindowsLinkCreator",
    "LinkMaterializer",
    "create_link_creator",
]
