"""contractgate CLI: contract compatibility and version-bump gate."""

import argparse
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path

from pydantic import ValidationError

from contractgate.codes import ExitCode


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main():
    """Main CLI entry point for contractgate commands."""
    try:
        contractgate_version = get_version("contractgate")
    except PackageNotFoundError:
        contractgate_version = "dev"

    parser = argparse.ArgumentParser(
        prog="contractgate",
        description="contractgate: classify contract schema changes and gate the version bump"
    )
    parser.add_argument("--version", action="version", version=f"contractgate {contractgate_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )
    parent_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show individual schema changes and debug logs."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # check command
    check_parser = subparsers.add_parser(
        "check",
        help="Classify changed schema files against a base ref and verify the version bump",
        parents=[parent_parser]
    )
    check_parser.add_argument(
        "--base",
        dest="base_ref",
        default=None,
        help="Git ref of the old revision (default: origin/main)"
    )
    check_parser.add_argument(
        "--schema-prefix",
        default=None,
        help="Path prefix selecting schema files (default: contracts/schema/)"
    )
    check_parser.add_argument(
        "--package",
        dest="package_manifest",
        default=None,
        help="Contract package manifest holding `version` (default: contracts/package.json)"
    )
    check_parser.add_argument(
        "--repo",
        dest="repo_root",
        type=Path,
        default=None,
        help="Repository working tree (default: current directory)"
    )
    check_parser.add_argument(
        "--json-out",
        type=Path,
        default=None,
        help="Write the canonical JSON report to this file"
    )
    check_parser.add_argument(
        "--markdown-out",
        type=Path,
        default=None,
        help="Write a markdown report to this file"
    )

    # classify command
    classify_parser = subparsers.add_parser(
        "classify",
        help="Classify the edit between two schema files",
        parents=[parent_parser]
    )
    classify_parser.add_argument(
        "--from",
        dest="old",
        type=Path,
        default=None,
        help="Path to the old schema (omit for a new schema)"
    )
    classify_parser.add_argument(
        "--to",
        dest="new",
        type=Path,
        required=True,
        help="Path to the new schema"
    )

    # compare command
    compare_parser = subparsers.add_parser(
        "compare",
        help="Classify the bump between two version strings",
        parents=[parent_parser]
    )
    compare_parser.add_argument("old_version", help="Old version, e.g. 1.2.3")
    compare_parser.add_argument("new_version", help="New version, e.g. 1.3.0")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(ExitCode.POLICY_FAILED)

    _configure_logging(args.verbose)

    if args.command == "check":
        # Lazy import: only load git I/O when check is invoked
        from .api import run_check
        from .config import CheckConfig
        from .errors import ContractGateError
        from .report import dumps_json_report, generate_markdown_report, render_record_lines, render_summary_lines

        overrides = {
            "base_ref": args.base_ref,
            "schema_prefix": args.schema_prefix,
            "package_manifest": args.package_manifest,
            "repo_root": args.repo_root.resolve() if args.repo_root else None,
        }
        try:
            config = CheckConfig(**{k: v for k, v in overrides.items() if v is not None})
            result = run_check(config)
        except ValidationError as e:
            print(f"Error: invalid configuration: {e}", file=sys.stderr)
            sys.exit(ExitCode.CONFIG_ERROR)
        except ContractGateError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(ExitCode.CONFIG_ERROR)

        if not args.quiet:
            for record in result.records:
                for line in render_record_lines(record, verbose=args.verbose):
                    print(line)
        summary = render_summary_lines(result)
        if not args.quiet:
            for line in summary[:-1]:
                print(line)
        if result.verdict.warning:
            print(f"[WARN] {result.verdict.warning}", file=sys.stderr)
        if result.ok:
            if not args.quiet:
                print(summary[-1])
        else:
            print(summary[-1], file=sys.stderr)

        if args.json_out:
            args.json_out.parent.mkdir(parents=True, exist_ok=True)
            args.json_out.write_text(dumps_json_report(result) + "\n", encoding="utf-8")
        if args.markdown_out:
            args.markdown_out.parent.mkdir(parents=True, exist_ok=True)
            args.markdown_out.write_text(generate_markdown_report(result), encoding="utf-8")

        sys.exit(ExitCode.OK if result.ok else ExitCode.POLICY_FAILED)
    elif args.command == "classify":
        from .api import classify_files
        from .errors import ContractGateError
        from .report import render_record_lines

        try:
            record = classify_files(new=args.new, old=args.old)
        except ContractGateError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(ExitCode.CONFIG_ERROR)
        if not args.quiet:
            for line in render_record_lines(record, verbose=True):
                print(line)
        sys.exit(ExitCode.OK)
    elif args.command == "compare":
        from .kernel.semver import BumpClassification, compare_versions

        bump = compare_versions(args.old_version, args.new_version)
        if not args.quiet:
            print(f"{args.old_version} -> {args.new_version} ({bump.value})")
        sys.exit(ExitCode.CONFIG_ERROR if bump is BumpClassification.INVALID else ExitCode.OK)
    else:
        parser.print_help()
        sys.exit(ExitCode.POLICY_FAILED)


if __name__ == "__main__":
    main()
