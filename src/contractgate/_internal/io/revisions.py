"""Revision content providers (internal).

A provider answers three questions for one evaluation run:
which files changed, what a schema looked like at the old revision (or that
it did not exist), and what it looks like now. It also supplies the contract
package's declared version on both sides.

"Did not exist at the old revision" is an expected answer (`ABSENT`), not an
error. An unreadable current schema is fatal (`SchemaLoadError`).
"""

import json
import logging
import subprocess
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Protocol, Sequence, Union

from contractgate.errors import ContractConfigError, SchemaLoadError
from contractgate.kernel.schema import ABSENT, Present, Revision, SchemaDocument, SchemaShapeError
from contractgate.kernel.semver import MISSING_VERSION

logger = logging.getLogger(__name__)


class RevisionContentProvider(Protocol):
    """Interface consumed by `contractgate.api.check_contracts`."""

    def changed_files(self) -> List[str]:
        ...

    def read_old(self, path: str) -> Revision:
        ...

    def read_new(self, path: str) -> SchemaDocument:
        ...

    def read_old_version(self) -> Optional[str]:
        ...

    def read_new_version(self) -> Optional[str]:
        ...


def _version_from_manifest(data: object) -> Optional[str]:
    if isinstance(data, dict) and data.get("version") is not None:
        return str(data["version"])
    return None


def _load_new_document(path: str, data: bytes) -> SchemaDocument:
    try:
        return SchemaDocument.from_json_bytes(data)
    except SchemaShapeError as e:
        raise SchemaLoadError(path, str(e)) from e


class GitRevisionProvider:
    """Old content from `git show <base_ref>:<path>`, new content from the working tree."""

    def __init__(self, repo_root: Union[str, Path], base_ref: str, package_manifest: str):
        self.repo_root = Path(repo_root)
        self.base_ref = base_ref
        self.package_manifest = package_manifest

    def _git(self, *args: str) -> subprocess.CompletedProcess:
        logger.debug("git %s (cwd=%s)", " ".join(args), self.repo_root)
        try:
            return subprocess.run(
                ["git", *args],
                cwd=str(self.repo_root),
                capture_output=True,
                timeout=60,
            )
        except (FileNotFoundError, subprocess.TimeoutExpired) as e:
            raise ContractConfigError(f"git invocation failed: {e}") from e

    def _show_at_base(self, path: str) -> Optional[bytes]:
        result = self._git("show", f"{self.base_ref}:{path}")
        if result.returncode != 0:
            logger.debug(
                "%s not present at %s: %s",
                path,
                self.base_ref,
                result.stderr.decode("utf-8", errors="replace").strip(),
            )
            return None
        return result.stdout

    def changed_files(self) -> List[str]:
        # -z with quotePath off: paths come back verbatim, NUL-separated
        result = self._git(
            "-c", "core.quotePath=false", "diff", "--name-only", "-z", f"{self.base_ref}...HEAD"
        )
        if result.returncode != 0:
            raise ContractConfigError(
                f"cannot list changed files against '{self.base_ref}': "
                f"{result.stderr.decode('utf-8', errors='replace').strip()}"
            )
        return [name for name in result.stdout.decode("utf-8").split("\0") if name]

    def read_old(self, path: str) -> Revision:
        data = self._show_at_base(path)
        if data is None:
            return ABSENT
        try:
            return Present(SchemaDocument.from_json_bytes(data))
        except SchemaShapeError as e:
            # The base revision is history; a broken old file counts as new.
            logger.warning("unparseable %s at %s, treating as new file: %s", path, self.base_ref, e)
            return ABSENT

    def read_new(self, path: str) -> SchemaDocument:
        file_path = self.repo_root / path
        try:
            data = file_path.read_bytes()
        except OSError as e:
            raise SchemaLoadError(path, str(e)) from e
        return _load_new_document(path, data)

    def read_old_version(self) -> Optional[str]:
        """None without a readable manifest at the base; `MISSING_VERSION` if it declares no version."""
        data = self._show_at_base(self.package_manifest)
        if data is None:
            return None
        try:
            return _version_from_manifest(json.loads(data.decode("utf-8"))) or MISSING_VERSION
        except (UnicodeDecodeError, json.JSONDecodeError):
            logger.warning("unparseable %s at %s", self.package_manifest, self.base_ref)
            return None

    def read_new_version(self) -> Optional[str]:
        manifest_path = self.repo_root / self.package_manifest
        try:
            data = json.loads(manifest_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ContractConfigError(
                f"cannot read contract package manifest '{self.package_manifest}': {e}"
            ) from e
        return _version_from_manifest(data)


class InMemoryRevisionProvider:
    """Provider over plain dicts, for programmatic use and tests.

    `old_files` maps path -> raw JSON (a path missing here is absent at the old
    revision). `new_files` maps path -> raw JSON. Changed files default to
    every path present on either side, sorted.
    """

    def __init__(
        self,
        old_files: Optional[Mapping[str, object]] = None,
        new_files: Optional[Mapping[str, object]] = None,
        old_version: Optional[str] = None,
        new_version: Optional[str] = None,
        changed: Optional[Sequence[str]] = None,
    ):
        self.old_files: Dict[str, object] = dict(old_files or {})
        self.new_files: Dict[str, object] = dict(new_files or {})
        self.old_version = old_version
        self.new_version = new_version
        if changed is None:
            changed = sorted(set(self.old_files) | set(self.new_files))
        self._changed = list(changed)

    def changed_files(self) -> List[str]:
        return list(self._changed)

    def read_old(self, path: str) -> Revision:
        if path not in self.old_files:
            return ABSENT
        try:
            return Present(SchemaDocument.from_json(self.old_files[path]))
        except SchemaShapeError as e:
            logger.warning("malformed old %s, treating as new file: %s", path, e)
            return ABSENT

    def read_new(self, path: str) -> SchemaDocument:
        if path not in self.new_files:
            raise SchemaLoadError(path, "file does not exist in the current revision")
        try:
            return SchemaDocument.from_json(self.new_files[path])
        except SchemaShapeError as e:
            raise SchemaLoadError(path, str(e)) from e

    def read_old_version(self) -> Optional[str]:
        return self.old_version

    def read_new_version(self) -> Optional[str]:
        return self.new_version
