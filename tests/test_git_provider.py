"""Tests for the git-backed revision provider and `run_check`."""

import pytest

from contractgate.api import run_check
from contractgate.config import CheckConfig
from contractgate.errors import ContractConfigError, SchemaLoadError
from contractgate.kernel.schema import Absent, Present
from contractgate.kernel.semver import MISSING_VERSION, BumpClassification
from contractgate.kernel.severity import Severity
from contractgate._internal.io.revisions import GitRevisionProvider

pytestmark = pytest.mark.git

ORDER = {
    "properties": {"id": {"type": "string"}, "kind": {"enum": ["a", "b"]}},
    "required": ["id"],
}


def with_extra_field(schema):
    return dict(schema, properties=dict(schema["properties"], note={"type": "string"}))


def _base(git_repo, version="1.0.0", schemas=None):
    git_repo.write_json("contracts/package.json", {"name": "contracts", "version": version})
    for path, data in (schemas or {"contracts/schema/order.json": ORDER}).items():
        git_repo.write_json(path, data)
    git_repo.commit("base")
    git_repo.git("checkout", "-q", "-b", "feature")


def _provider(git_repo):
    return GitRevisionProvider(git_repo.root, "main", "contracts/package.json")


def test_changed_files_lists_branch_diff(git_repo):
    _base(git_repo)
    git_repo.write_json("contracts/schema/new.json", ORDER)
    git_repo.write_json("docs/readme.json", {})
    git_repo.commit("feature")
    assert _provider(git_repo).changed_files() == ["contracts/schema/new.json", "docs/readme.json"]


def test_changed_files_keeps_non_ascii_paths_verbatim(git_repo):
    _base(git_repo)
    git_repo.write_json("contracts/schema/caf\u00e9 menu.json", ORDER)
    git_repo.commit("feature")
    assert _provider(git_repo).changed_files() == ["contracts/schema/caf\u00e9 menu.json"]


def test_run_check_classifies_non_ascii_schema_path(git_repo):
    _base(git_repo)
    git_repo.write_json("contracts/schema/\u00fcbersicht.json", ORDER)
    git_repo.write_json("contracts/package.json", {"version": "1.1.0"})
    git_repo.commit("add overview schema")
    result = run_check(CheckConfig(repo_root=git_repo.root, base_ref="main"))
    assert [r.path for r in result.records] == ["contracts/schema/\u00fcbersicht.json"]
    assert result.records[0].is_new
    assert result.required_severity == Severity.MINOR
    assert result.ok


def test_read_old_present_and_absent(git_repo):
    _base(git_repo)
    provider = _provider(git_repo)
    assert isinstance(provider.read_old("contracts/schema/order.json"), Present)
    assert isinstance(provider.read_old("contracts/schema/missing.json"), Absent)


def test_read_old_unparseable_is_absent(git_repo):
    git_repo.root.joinpath("contracts/schema").mkdir(parents=True)
    git_repo.root.joinpath("contracts/schema/broken.json").write_text("{", encoding="utf-8")
    _base(git_repo)
    assert isinstance(_provider(git_repo).read_old("contracts/schema/broken.json"), Absent)


def test_read_new_missing_is_fatal(git_repo):
    _base(git_repo)
    with pytest.raises(SchemaLoadError):
        _provider(git_repo).read_new("contracts/schema/missing.json")


def test_versions(git_repo):
    _base(git_repo, version="1.2.3")
    git_repo.write_json("contracts/package.json", {"version": "1.3.0"})
    provider = _provider(git_repo)
    assert provider.read_old_version() == "1.2.3"
    assert provider.read_new_version() == "1.3.0"


def test_old_manifest_missing_is_none(git_repo):
    git_repo.write_json("README.json", {})
    git_repo.commit("base")
    git_repo.write_json("contracts/package.json", {"version": "0.1.0"})
    assert _provider(git_repo).read_old_version() is None


def test_old_manifest_without_version_is_marked_missing(git_repo):
    git_repo.write_json("contracts/package.json", {"name": "contracts"})
    git_repo.commit("base")
    assert _provider(git_repo).read_old_version() == MISSING_VERSION


def test_run_check_old_manifest_without_version_is_invalid_bump(git_repo):
    git_repo.write_json("contracts/package.json", {"name": "contracts"})
    git_repo.write_json("contracts/schema/order.json", ORDER)
    git_repo.commit("base")
    git_repo.git("checkout", "-q", "-b", "feature")
    git_repo.write_json("contracts/schema/order.json", with_extra_field(ORDER))
    git_repo.write_json("contracts/package.json", {"name": "contracts", "version": "1.1.0"})
    git_repo.commit("add field")
    result = run_check(CheckConfig(repo_root=git_repo.root, base_ref="main"))
    assert result.old_version == MISSING_VERSION
    assert result.actual_bump == BumpClassification.INVALID
    assert not result.ok
    assert result.verdict.message == "additive change needs minor bump"


def test_new_manifest_missing_is_fatal(git_repo):
    git_repo.write_json("README.json", {})
    git_repo.commit("base")
    with pytest.raises(ContractConfigError):
        _provider(git_repo).read_new_version()


def test_unknown_base_ref_is_fatal(git_repo):
    _base(git_repo)
    provider = GitRevisionProvider(git_repo.root, "no-such-ref", "contracts/package.json")
    with pytest.raises(ContractConfigError):
        provider.changed_files()


def test_run_check_breaking_change_without_major_bump(git_repo):
    _base(git_repo)
    git_repo.write_json("contracts/schema/order.json", {"properties": {"id": {"type": "string"}}, "required": ["id"]})
    git_repo.write_json("contracts/package.json", {"version": "1.1.0"})
    git_repo.commit("drop kind")
    result = run_check(CheckConfig(repo_root=git_repo.root, base_ref="main"))
    assert result.required_severity == Severity.MAJOR
    assert not result.ok
    assert result.verdict.message == "breaking change needs MAJOR bump"


def test_run_check_enum_widening_with_patch_bump(git_repo):
    _base(git_repo)
    widened = {
        "properties": {"id": {"type": "string"}, "kind": {"enum": ["a", "b", "c"]}},
        "required": ["id"],
    }
    git_repo.write_json("contracts/schema/order.json", widened)
    git_repo.write_json("contracts/package.json", {"version": "1.0.1"})
    git_repo.commit("widen kind")
    result = run_check(CheckConfig(repo_root=git_repo.root, base_ref="main"))
    assert result.required_severity == Severity.PATCH
    assert result.ok
