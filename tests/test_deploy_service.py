import json
import os

import pytest
from conftest import requires_symlinks

from rush_deploy.api.exceptions import (
    LinkTargetNotFoundError,
    PathOutsideRootError,
    ProjectNotFoundError,
    ScenarioConfigError,
    ScenarioNotFoundError,
    TargetFolderError,
)
from rush_deploy.constants import LinkAction
from rush_deploy.services import DeployService, LinkService, SubdeploymentPlanner
from rush_deploy.models import ScenarioConfig

pytestmark = requires_symlinks


@pytest.fixture
def service(monorepo, console):
    return DeployService(monorepo.registry, console=console)


def _scenario(data):
    return ScenarioConfig.from_dict(data, scenario_name="test")


class TestSubdeploymentPlanner:

    def test_single_unnamed_subdeployment(self):
        scenario = _scenario({"projectSettings": [
            {"projectName": "@acme/app", "additionalProjectsToInclude": ["@acme/tool"]},
            {"projectName": "@acme/lib"},
        ]})

        planned = SubdeploymentPlanner().plan(scenario)

        assert len(planned) == 1
        assert planned[0].folder_name is None
        assert planned[0].project_names == ["@acme/app", "@acme/tool", "@acme/lib"]

    def test_subdeployments_use_unscoped_names(self):
        scenario = _scenario({
            "projectSettings": [{"projectName": "@acme/web", "subdeploymentFolderName": "frontend"}],
            "subdeployments": {"enabled": True, "subdeploymentProjects": ["@acme/api", "@acme/web"]},
        })

        planned = SubdeploymentPlanner().plan(scenario)

        assert [item.folder_name for item in planned] == ["api", "frontend"]
        assert [item.project_names for item in planned] == [["@acme/api"], ["@acme/web"]]

    def test_duplicate_folder_names_fail(self):
        scenario = _scenario({
            "projectSettings": [],
            "subdeployments": {"enabled": True, "subdeploymentProjects": ["@acme/api", "@other/api"]},
        })

        with pytest.raises(ScenarioConfigError, match="is not unique"):
            SubdeploymentPlanner().plan(scenario)

    def test_folder_name_override_resolves_clash(self):
        scenario = _scenario({
            "projectSettings": [{"projectName": "@other/api", "subdeploymentFolderName": "other-api"}],
            "subdeployments": {"enabled": True, "subdeploymentProjects": ["@acme/api", "@other/api"]},
        })

        planned = SubdeploymentPlanner().plan(scenario)

        assert [item.folder_name for item in planned] == ["api", "other-api"]

    def test_no_projects_fail(self):
        with pytest.raises(ScenarioConfigError, match="No projects"):
            SubdeploymentPlanner().plan(_scenario({"projectSettings": []}))

    def test_enabled_without_projects_fail(self):
        scenario = _scenario({"projectSettings": [], "subdeployments": {"enabled": True}})

        with pytest.raises(ScenarioConfigError):
            SubdeploymentPlanner().plan(scenario)

    @pytest.mark.parametrize("folder_name", ["..", ".", "../escaped", "nested/api", "nested\\api", "C:escaped"])
    def test_folder_name_must_be_single_segment(self, folder_name):
        scenario = _scenario({
            "projectSettings": [{"projectName": "@acme/api", "subdeploymentFolderName": folder_name}],
            "subdeployments": {"enabled": True, "subdeploymentProjects": ["@acme/api"]},
        })

        with pytest.raises(ScenarioConfigError, match="not a valid folder name"):
            SubdeploymentPlanner().plan(scenario)

    def test_absolute_folder_name_fails(self, tmp_path):
        scenario = _scenario({
            "projectSettings": [{"projectName": "@acme/api", "subdeploymentFolderName": str(tmp_path / "escaped")}],
            "subdeployments": {"enabled": True, "subdeploymentProjects": ["@acme/api"]},
        })

        with pytest.raises(ScenarioConfigError, match="not a valid folder name"):
            SubdeploymentPlanner().plan(scenario)


class TestDeployScenario:

    def test_deploys_closure_with_links(self, monorepo, service):
        monorepo.write_scenario(projectSettings=[{"projectName": "@acme/app"}])

        result = service.deploy_scenario()

        target = monorepo.root / "common/deploy"
        assert result.target_root == target
        assert result.copied_folders == 4
        assert result.created_links == 4
        assert (target / "apps/app/index.js").is_file()
        assert (target / "libs/lib/index.js").is_file()
        assert not (target / "common/temp/node_modules/.pnpm/left-pad@1.0.0").exists()

        debug_link = target / "apps/app/node_modules/debug"
        assert debug_link.is_symlink()
        assert not os.path.isabs(os.readlink(debug_link))
        assert (target / "apps/app/node_modules/@acme/lib/node_modules/ms/package.json").is_file()

    def test_writes_metadata(self, monorepo, service):
        monorepo.write_scenario(projectSettings=[{"projectName": "@acme/app"}])

        result = service.deploy_scenario()

        metadata_path = result.subdeployments[0].metadata_path
        metadata = json.loads(metadata_path.read_text(encoding="utf-8"))
        assert metadata_path == monorepo.root / "common/deploy/deploy-metadata.json"
        assert metadata["scenarioName"] == "deploy"
        assert metadata["projects"] == [{"path": "apps/app"}]
        assert {"kind": "folderLink", "linkPath": "apps/app/node_modules/debug",
                "targetPath": "common/temp/node_modules/.pnpm/debug@4.0.0/node_modules/debug"} in metadata["links"]

    def test_explicit_target_folder(self, monorepo, service, tmp_path):
        target = tmp_path / "out"
        target.mkdir()
        monorepo.write_scenario("web", projectSettings=[{"projectName": "@acme/lib"}])

        result = service.deploy_scenario("web", target_folder=target)

        assert result.scenario_name == "web"
        assert (target / "libs/lib/package.json").is_file()

    def test_target_folder_with_brackets_is_printed_verbatim(self, monorepo, service, tmp_path):
        target = tmp_path / "[bold]out"
        target.mkdir()
        monorepo.write_scenario("web", projectSettings=[{"projectName": "@acme/lib"}])

        service.deploy_scenario("web", target_folder=target)

        assert "[bold]out" in service.console.file.getvalue()

    def test_missing_target_folder_fails(self, monorepo, service, tmp_path):
        monorepo.write_scenario(projectSettings=[{"projectName": "@acme/lib"}])

        with pytest.raises(TargetFolderError, match="does not exist"):
            service.deploy_scenario(target_folder=tmp_path / "missing")

    def test_non_empty_target_requires_overwrite(self, monorepo, service):
        monorepo.write_scenario(projectSettings=[{"projectName": "@acme/lib"}])
        stale = monorepo.write_file("common/deploy/stale.txt", "old")

        with pytest.raises(TargetFolderError, match="not empty"):
            service.deploy_scenario()
        assert stale.is_file()
        assert not (monorepo.root / "common/deploy/libs").exists()

        service.deploy_scenario(overwrite_existing=True)
        assert not stale.exists()
        assert (monorepo.root / "common/deploy/libs/lib/package.json").is_file()

    def test_overwrite_replaces_previous_deployment(self, monorepo, service):
        monorepo.write_scenario(projectSettings=[{"projectName": "@acme/app"}])
        service.deploy_scenario()

        result = service.deploy_scenario(overwrite_existing=True)

        assert result.created_links == 4

    def test_subdeployments(self, monorepo, service):
        monorepo.add_project("@acme/worker", "apps/worker")
        monorepo.write_scenario(
            projectSettings=[{"projectName": "@acme/worker", "subdeploymentFolderName": "jobs"}],
            subdeployments={"enabled": True, "subdeploymentProjects": ["@acme/app", "@acme/worker"]},
        )
        service = DeployService(monorepo.registry, console=service.console)

        result = service.deploy_scenario()

        target = monorepo.root / "common/deploy"
        assert [item.folder_name for item in result.subdeployments] == ["app", "jobs"]
        assert (target / "app/apps/app/index.js").is_file()
        assert (target / "jobs/apps/worker/index.js").is_file()
        assert not (target / "jobs/libs").exists()
        assert (target / "app/deploy-metadata.json").is_file()
        metadata = json.loads((target / "jobs/deploy-metadata.json").read_text(encoding="utf-8"))
        assert metadata["mainProjectName"] == "@acme/worker"

    def test_duplicate_subdeployment_names_fail_before_copying(self, monorepo, service):
        monorepo.add_project("@other/app", "other/app")
        monorepo.write_scenario(
            subdeployments={"enabled": True, "subdeploymentProjects": ["@acme/app", "@other/app"]},
        )
        service = DeployService(monorepo.registry, console=service.console)

        with pytest.raises(ScenarioConfigError, match="is not unique"):
            service.deploy_scenario()
        assert not (monorepo.root / "common/deploy").exists()

    @pytest.mark.parametrize("mode", ["default", "script", "none"])
    def test_link_outside_closure_fails(self, monorepo, service, mode):
        monorepo.add_project("tool", "tools/tool")
        monorepo.link("apps/app/bin/tool", monorepo.root / "tools/tool")
        monorepo.write_scenario(symlinkCreation=mode, projectSettings=[{"projectName": "@acme/app"}])
        service = DeployService(monorepo.registry, console=service.console)

        with pytest.raises(LinkTargetNotFoundError) as exc_info:
            service.deploy_scenario()

        assert [link.link_path for link in exc_info.value.links] == [monorepo.root / "apps/app/bin/tool"]

    @pytest.mark.parametrize("mode", ["default", "script", "none"])
    def test_link_outside_source_root_fails(self, monorepo, service, mode):
        outside = monorepo.root.parent / "outside"
        outside.mkdir()
        monorepo.link("apps/app/ext", outside)
        monorepo.write_scenario(symlinkCreation=mode, projectSettings=[{"projectName": "@acme/app"}])

        with pytest.raises(PathOutsideRootError):
            service.deploy_scenario()
        assert not (monorepo.root / "common/deploy/deploy-metadata.json").exists()

    def test_subdeployment_cannot_escape_target_root(self, monorepo, service, tmp_path):
        escaped = tmp_path / "escaped"
        monorepo.write_scenario(
            projectSettings=[{"projectName": "@acme/app", "subdeploymentFolderName": str(escaped)}],
            subdeployments={"enabled": True, "subdeploymentProjects": ["@acme/app"]},
        )

        with pytest.raises(ScenarioConfigError):
            service.deploy_scenario()
        assert not escaped.exists()
        assert not (monorepo.root / "common/deploy").exists()

    def test_additional_projects_are_included(self, monorepo, service):
        monorepo.add_project("tool", "tools/tool")
        monorepo.link("apps/app/bin/tool", monorepo.root / "tools/tool")
        monorepo.write_scenario(projectSettings=[
            {"projectName": "@acme/app", "additionalProjectsToInclude": ["tool"]},
        ])
        service = DeployService(monorepo.registry, console=service.console)

        result = service.deploy_scenario()

        assert result.subdeployments[0].included_projects == ["@acme/app", "tool"]
        assert (monorepo.root / "common/deploy/apps/app/bin/tool/index.js").is_file()

    @pytest.mark.parametrize("mode", ["script", "none"])
    def test_link_creation_can_be_deferred(self, monorepo, service, mode):
        monorepo.write_scenario(symlinkCreation=mode, projectSettings=[{"projectName": "@acme/app"}])

        result = service.deploy_scenario()

        target = monorepo.root / "common/deploy"
        assert result.created_links == 0
        assert result.subdeployments[0].recorded_links == 4
        assert not (target / "apps/app/node_modules/debug").exists()

        count = LinkService(console=service.console).apply(target, LinkAction.CREATE)
        assert count == 4
        assert (target / "apps/app/node_modules/debug/package.json").is_file()

        assert LinkService(console=service.console).apply(target, LinkAction.REMOVE) == 4
        assert not (target / "apps/app/node_modules/debug").is_symlink()

    def test_missing_scenario(self, service):
        with pytest.raises(ScenarioNotFoundError):
            service.deploy_scenario("missing")

    def test_unknown_project(self, monorepo, service):
        monorepo.write_scenario(projectSettings=[{"projectName": "@acme/unknown"}])

        with pytest.raises(ProjectNotFoundError, match="@acme/unknown"):
            service.deploy_scenario()
