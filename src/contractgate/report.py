"""Report rendering for contract checks: console lines, markdown and JSON."""

from typing import Dict, List

from contractgate.contracts import ChangeRecord, CheckResult
from contractgate.kernel.classify import SchemaChange
from contractgate.kernel.schema import canonical_dumps
from contractgate.kernel.semver import MISSING_VERSION


def describe_change(change: SchemaChange) -> str:
    """One-line human description of a structural change."""
    code = change.change_type.value
    if change.field is None:
        return f"{code} ({change.severity.value})"
    text = f"{code} {change.field} ({change.severity.value})"
    if change.details and change.details.get("added_values"):
        values = ", ".join(canonical_dumps(v) for v in change.details["added_values"])
        text += f" +[{values}]"
    return text


def render_record_lines(record: ChangeRecord, verbose: bool = False) -> List[str]:
    """Lines for one evaluated file: the classification, then the changes if verbose."""
    lines = [f"Schema change {record.path}: {record.severity.value}"]
    if verbose:
        for change in record.changes:
            lines.append(f"  - {describe_change(change)}")
    return lines


def render_summary_lines(result: CheckResult) -> List[str]:
    """Overall summary: aggregated severity, version bump, verdict.

    A warning, if any, is not included; callers send it to stderr.
    """
    new_version = result.new_version if result.new_version is not None else MISSING_VERSION
    status = "OK" if result.ok else "FAILED"
    return [
        f"Highest required: {result.required_severity.value}",
        f"contracts version: {result.old_version} -> {new_version} ({result.actual_bump.value})",
        f"[{status}] {result.verdict.message}",
    ]


def generate_markdown_report(result: CheckResult) -> str:
    """Generate a markdown report (e.g. for a CI job summary)."""
    lines = []
    lines.append("# Contract Compatibility Report")
    lines.append("")
    status = "PASS" if result.ok else "FAIL"
    lines.append(f"**Status:** {status} - {result.verdict.message}")
    if result.verdict.warning:
        lines.append("")
        lines.append(f"> [!] {result.verdict.warning}")
    lines.append("")
    lines.append(f"- Required bump: `{result.required_severity.value}`")
    new_version = result.new_version if result.new_version is not None else MISSING_VERSION
    lines.append(f"- Version: `{result.old_version}` -> `{new_version}` (`{result.actual_bump.value}`)")
    lines.append("")

    if not result.records:
        lines.append("No schema files changed.")
        lines.append("")
        return "\n".join(lines)

    lines.append("## Schema Changes")
    lines.append("")
    lines.append("| File | Severity | New |")
    lines.append("|---|---|---|")
    for record in result.records:
        lines.append(f"| `{record.path}` | {record.severity.value} | {'yes' if record.is_new else 'no'} |")
    lines.append("")

    for record in result.records:
        if not record.changes:
            continue
        lines.append(f"### `{record.path}`")
        lines.append("")
        for change in record.changes:
            lines.append(f"- {describe_change(change)}")
        lines.append("")

    return "\n".join(lines)


def generate_json_report(result: CheckResult) -> Dict:
    """JSON-serializable report; records keep changed-file order."""
    return {
        "status": result.verdict.status.value,
        "message": result.verdict.message,
        "warning": result.verdict.warning,
        "required_severity": result.required_severity.value,
        "actual_bump": result.actual_bump.value,
        "old_version": result.old_version,
        "new_version": result.new_version,
        "files": [
            {
                "path": record.path,
                "severity": record.severity.value,
                "is_new": record.is_new,
                "changes": [
                    {
                        "change_type": change.change_type.value,
                        "field": change.field,
                        "severity": change.severity.value,
                        "details": change.details,
                    }
                    for change in record.changes
                ],
            }
            for record in result.records
        ],
    }


def dumps_json_report(result: CheckResult) -> str:
    """Canonical JSON text of `generate_json_report`."""
    return canonical_dumps(generate_json_report(result))
