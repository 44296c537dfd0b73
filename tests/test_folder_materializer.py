import pytest
from conftest import requires_symlinks

from rush_deploy.api.exceptions import CopyCollisionError, PathOutsideRootError
from rush_deploy.core import FolderMaterializer, PathResolver, SubdeploymentState, SymlinkAnalyzer

pytestmark = requires_symlinks


@pytest.fixture
def state(monorepo):
    return SubdeploymentState(
        target_folder=monorepo.root / "common/deploy",
        symlink_analyzer=SymlinkAnalyzer(monorepo.root),
    )


def test_copies_folder_without_node_modules(monorepo, state):
    materializer = FolderMaterializer(PathResolver(monorepo.root))

    target = materializer.copy(monorepo.root / "apps/app", state)

    assert target == state.target_folder / "apps/app"
    assert (target / "package.json").is_file()
    assert (target / "index.js").is_file()
    assert not (target / "node_modules").exists()


def test_links_inside_folder_are_recorded_not_copied(monorepo, state):
    monorepo.write_file("apps/app/dist/main.js", "")
    monorepo.link("apps/app/current", monorepo.root / "apps/app/dist")
    materializer = FolderMaterializer(PathResolver(monorepo.root))

    target = materializer.copy(monorepo.root / "apps/app", state)

    assert not (target / "current").exists()
    assert not (target / "current").is_symlink()
    assert [link.link_path for link in state.symlink_analyzer.report_symlinks()] == [
        monorepo.root / "apps/app/current"
    ]


def test_nested_node_modules_are_kept(monorepo, state):
    monorepo.write_file("apps/app/src/node_modules/local.js", "")
    materializer = FolderMaterializer(PathResolver(monorepo.root))

    target = materializer.copy(monorepo.root / "apps/app", state)

    assert (target / "src/node_modules/local.js").is_file()


def test_collision_raises(monorepo, state):
    materializer = FolderMaterializer(PathResolver(monorepo.root))
    materializer.copy(monorepo.root / "libs/lib", state)

    with pytest.raises(CopyCollisionError):
        materializer.copy(monorepo.root / "libs/lib", state)


def test_folder_outside_root_raises(monorepo, state, tmp_path):
    outside = tmp_path / "elsewhere"
    outside.mkdir()
    materializer = FolderMaterializer(PathResolver(monorepo.root))

    with pytest.raises(PathOutsideRootError):
        materializer.copy(outside, state)


def test_publish_rules_apply_to_project_folders(monorepo, state):
    monorepo.write_file("libs/lib/.npmignore", "test/\n")
    monorepo.write_file("libs/lib/test/lib.test.js", "")
    materializer = FolderMaterializer(
        PathResolver(monorepo.root),
        project_folders=[monorepo.root / "libs/lib"],
        include_npm_ignore_files=False,
    )

    target = materializer.copy(monorepo.root / "libs/lib", state)

    assert (target / "index.js").is_file()
    assert not (target / "test").exists()


def test_publish_rules_skip_store_packages(monorepo, state):
    ms = monorepo.store_folder("ms", "2.1.0")
    monorepo.write_file(ms.relative_to(monorepo.root) / ".npmignore", "*.js\n")
    materializer = FolderMaterializer(
        PathResolver(monorepo.root),
        project_folders=[monorepo.root / "libs/lib"],
        include_npm_ignore_files=False,
    )

    target = materializer.copy(ms, state)

    assert (target / "index.js").is_file()


def test_include_npm_ignore_files_copies_everything(monorepo, state):
    monorepo.write_file("libs/lib/.npmignore", "test/\n")
    monorepo.write_file("libs/lib/test/lib.test.js", "")
    materializer = FolderMaterializer(
        PathResolver(monorepo.root),
        project_folders=[monorepo.root / "libs/lib"],
        include_npm_ignore_files=True,
    )

    target = materializer.copy(monorepo.root / "libs/lib", state)

    assert (target / "test/lib.test.js").is_file()


def test_copy_all_uses_sorted_order(monorepo, state):
    state.folders_to_copy.update({monorepo.root / "libs/lib", monorepo.root / "apps/app"})
    materializer = FolderMaterializer(PathResolver(monorepo.root))

    assert materializer.copy_all(state) == 2
    assert (state.target_folder / "apps/app/package.json").is_file()
    assert (state.target_folder / "libs/lib/package.json").is_file()
