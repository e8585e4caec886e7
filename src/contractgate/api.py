"""Public API for contractgate.

High-level functions that return complete, structured results.
The CLI is a thin layer over these.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from contractgate.config import CheckConfig
from contractgate.contracts import ChangeRecord, CheckResult
from contractgate.errors import SchemaLoadError
from contractgate.kernel.classify import diff_schemas, severity_of
from contractgate.kernel.policy import decide
from contractgate.kernel.schema import ABSENT, Absent, Present, Revision, SchemaDocument, SchemaShapeError
from contractgate.kernel.semver import compare_versions
from contractgate.kernel.severity import aggregate
from contractgate._internal.io.revisions import GitRevisionProvider, RevisionContentProvider

logger = logging.getLogger(__name__)


def _normalize_path(path: Union[str, os.PathLike, Path]) -> Path:
    """Normalize path input to Path object."""
    return Path(path) if not isinstance(path, Path) else path


def _load_schema_from_path(path: Path) -> SchemaDocument:
    """Load a schema document from a JSON file; any failure is fatal."""
    try:
        data = path.read_bytes()
    except OSError as e:
        raise SchemaLoadError(str(path), str(e)) from e
    try:
        return SchemaDocument.from_json_bytes(data)
    except SchemaShapeError as e:
        raise SchemaLoadError(str(path), str(e)) from e


def classify_record(path: str, old: Revision, new: SchemaDocument) -> ChangeRecord:
    """Classify one schema file and keep the changes that explain the severity."""
    changes = diff_schemas(old, new)
    return ChangeRecord(
        path=path,
        severity=severity_of(changes),
        is_new=isinstance(old, Absent),
        changes=changes,
    )


def classify_files(
    new: Union[str, os.PathLike, Path],
    old: Optional[Union[str, os.PathLike, Path]] = None,
) -> ChangeRecord:
    """Classify the edit between two schema files on disk.

    Args:
        new: Path to the current schema
        old: Path to the previous schema (None if the schema is new)

    Returns:
        ChangeRecord for `new`

    Raises:
        SchemaLoadError: if either file cannot be read or parsed
    """
    new_path = _normalize_path(new)
    old_revision: Revision = ABSENT
    if old is not None:
        old_revision = Present(_load_schema_from_path(_normalize_path(old)))
    return classify_record(str(new_path), old_revision, _load_schema_from_path(new_path))


def check_contracts(
    provider: RevisionContentProvider,
    schema_prefix: str = "contracts/schema/",
    default_old_version: str = "0.0.0",
) -> CheckResult:
    """
    Evaluate every changed schema file and gate the contract version bump.

    Args:
        provider: Source of changed files, old/new schema content and versions
        schema_prefix: Only changed files under this prefix are classified
        default_old_version: Old version used when the old manifest is missing

    Returns:
        CheckResult with one ChangeRecord per schema file and the Verdict

    Raises:
        SchemaLoadError: a current schema file is unreadable or malformed
        ContractConfigError: the provider cannot list changes or read the manifest
    """
    schema_files = [f for f in provider.changed_files() if f.startswith(schema_prefix)]
    logger.debug("%d changed schema file(s) under %s", len(schema_files), schema_prefix)

    records: List[ChangeRecord] = []
    for path in schema_files:
        old = provider.read_old(path)
        new = provider.read_new(path)
        record = classify_record(path, old, new)
        logger.info("schema change %s: %s", path, record.severity.value)
        records.append(record)

    required = aggregate(r.severity for r in records)

    old_version = provider.read_old_version()
    if old_version is None:
        logger.debug("no old contract version, assuming %s", default_old_version)
        old_version = default_old_version
    new_version = provider.read_new_version()
    bump = compare_versions(old_version, new_version)

    verdict = decide(required, bump)
    return CheckResult(
        records=records,
        old_version=old_version,
        new_version=new_version,
        required_severity=required,
        actual_bump=bump,
        verdict=verdict,
    )


def run_check(config: Optional[CheckConfig] = None) -> CheckResult:
    """Run `check_contracts` against a git working tree described by `config`."""
    if config is None:
        config = CheckConfig()
    provider = GitRevisionProvider(
        repo_root=config.repo_root,
        base_ref=config.base_ref,
        package_manifest=config.package_manifest,
    )
    return check_contracts(
        provider,
        schema_prefix=config.schema_prefix,
        default_old_version=config.default_old_version,
    )

