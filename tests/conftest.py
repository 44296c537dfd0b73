import io
import json
import os
import shutil
import tempfile
from pathlib import Path

import pytest
from rich.console import Console

from rush_deploy.core import ProjectRegistry


def _symlinks_supported():
    folder = tempfile.mkdtemp()
    try:
        os.symlink(folder, os.path.join(folder, "probe"), target_is_directory=True)
        return True
    except (OSError, NotImplementedError):
        return False
    finally:
        shutil.rmtree(folder, ignore_errors=True)


requires_symlinks = pytest.mark.skipif(not _symlinks_supported(), reason="symlinks are not supported")

STORE = Path("common/temp/node_modules/.pnpm")


class Monorepo:
    """Builds a small Rush workspace with a pnpm-style package store"""

    def __init__(self, root: Path):
        self.root = root
        self.projects = []
        self.root.mkdir(parents=True, exist_ok=True)

    def write_json(self, relative_path, data):
        path = self.root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    def write_file(self, relative_path, content=""):
        path = self.root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def add_project(self, name, folder, **fields):
        self.projects.append({"packageName": name, "projectFolder": folder})
        self.write_json(Path(folder) / "package.json", {"name": name, "version": "1.0.0", **fields})
        self.write_file(Path(folder) / "index.js", "module.exports = {};\n")
        self.save_rush_json()
        return self.root / folder

    def add_store_package(self, name, version, **fields):
        folder = STORE / f"{name.replace('/', '+')}@{version}" / "node_modules" / name
        self.write_json(folder / "package.json", {"name": name, "version": version, **fields})
        self.write_file(folder / "index.js", "module.exports = {};\n")
        return self.root / folder

    def store_folder(self, name, version):
        return self.root / STORE / f"{name.replace('/', '+')}@{version}" / "node_modules" / name

    def link(self, link_path, target):
        """Create a relative folder link, as pnpm does"""
        link_path = self.root / link_path
        target = Path(target) if Path(target).is_absolute() else self.root / target
        link_path.parent.mkdir(parents=True, exist_ok=True)
        os.symlink(os.path.relpath(target, link_path.parent), link_path, target_is_directory=True)
        return link_path

    def install(self, package_folder, name, target_folder):
        """Link a dependency into a package's node_modules"""
        return self.link(Path(package_folder) / "node_modules" / name, target_folder)

    def save_rush_json(self):
        self.write_json("rush.json", {"rushVersion": "5.0.0", "projects": self.projects})

    def write_scenario(self, name="deploy", **data):
        data.setdefault("projectSettings", [])
        return self.write_json(Path("common/config/deploy-scenarios") / f"{name}.json", data)

    @property
    def registry(self):
        return ProjectRegistry.load(self.root / "rush.json")


@pytest.fixture
def repo_root(tmp_path):
    # Canonical path so comparisons with resolved folders hold on every platform
    return Path(os.path.realpath(tmp_path)) / "repo"


@pytest.fixture
def monorepo(repo_root):
    """A workspace with an app depending on a library and on store packages

    apps/app -> @acme/lib (workspace), debug (store), left-pad (dev, store)
    libs/lib -> ms (store), react (peer, missing)
    debug    -> ms (store)
    """
    repo = Monorepo(repo_root)

    app = repo.add_project(
        "@acme/app", "apps/app",
        dependencies={"@acme/lib": "workspace:*", "debug": "4.0.0"},
        devDependencies={"left-pad": "1.0.0"},
    )
    lib = repo.add_project(
        "@acme/lib", "libs/lib",
        dependencies={"ms": "2.1.0"},
        peerDependencies={"react": "*"},
    )

    debug = repo.add_store_package("debug", "4.0.0", dependencies={"ms": "2.1.0"})
    ms = repo.add_store_package("ms", "2.1.0")
    left_pad = repo.add_store_package("left-pad", "1.0.0")

    repo.install(app, "@acme/lib", lib)
    repo.install(app, "debug", debug)
    repo.install(app, "left-pad", left_pad)
    repo.install(lib, "ms", ms)
    repo.link(debug.parent / "ms", ms)

    return repo


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120)
