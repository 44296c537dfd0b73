from conftest import requires_symlinks

from rush_deploy.constants import LinkKind
from rush_deploy.core import SymlinkAnalyzer

pytestmark = requires_symlinks


def test_records_links_along_path(monorepo):
    analyzer = SymlinkAnalyzer(monorepo.root)
    analyzer.analyze_path(monorepo.root / "apps/app/node_modules/debug/package.json")

    links = analyzer.report_symlinks()
    assert len(links) == 1
    assert links[0].kind == LinkKind.FOLDER_LINK
    assert links[0].link_path == monorepo.root / "apps/app/node_modules/debug"
    assert links[0].target_path == monorepo.store_folder("debug", "4.0.0")


def test_analyzing_twice_does_not_duplicate(monorepo):
    analyzer = SymlinkAnalyzer(monorepo.root)
    path = monorepo.root / "apps/app/node_modules/@acme/lib/package.json"
    analyzer.analyze_path(path)
    analyzer.analyze_path(path)

    assert len(analyzer) == 1


def test_follows_chains(monorepo):
    app = monorepo.root / "apps/app"
    (app / "dist").mkdir()
    monorepo.link("apps/app/latest", app / "dist")
    monorepo.link("apps/app/current", app / "latest")

    analyzer = SymlinkAnalyzer(monorepo.root)
    analyzer.analyze_path(app / "current")

    assert [link.link_path for link in analyzer.report_symlinks()] == [app / "current", app / "latest"]


def test_ignores_links_outside_root(monorepo, tmp_path):
    outside = tmp_path / "outside"
    outside.mkdir()
    monorepo.link(outside / "repo-link", monorepo.root / "libs/lib")

    analyzer = SymlinkAnalyzer(monorepo.root)
    analyzer.analyze_path(outside / "repo-link" / "package.json")

    assert analyzer.report_symlinks() == []


def test_report_is_sorted(monorepo):
    analyzer = SymlinkAnalyzer(monorepo.root)
    analyzer.analyze_path(monorepo.root / "libs/lib/node_modules/ms")
    analyzer.analyze_path(monorepo.root / "apps/app/node_modules/debug")

    paths = [str(link.link_path) for link in analyzer.report_symlinks()]
    assert paths == sorted(paths)
