"""CLI entry point for rtfgen."""

from __future__ import annotations

import argparse
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .config import load_config
from .logging_utils import RUN_LOG_NAME, log_event
from .models.config import Config
from .models.document import Document
from .render.template import RtfTemplate
from .render.writer import RtfWriter
from .validate.references import check_references


def _generate_run_id() -> str:
    """Generate a timestamp-based run ID."""
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--project-root",
        type=str,
        default=None,
        help="Path to project root (default: current directory)",
    )


def _load(args: argparse.Namespace) -> Config:
    return load_config(Path(args.project_root) if args.project_root else None)


def _run_dir(config: Config, run_id: Optional[str]) -> Path:
    run_dir = Path(config.runs_dir) / (run_id or _generate_run_id())
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir


def _load_document(document_path: Path) -> Document:
    with open(document_path, "r", encoding="utf-8") as f:
        return Document.model_validate_json(f.read())


def cmd_render(args: argparse.Namespace) -> int:
    """Render a Document JSON to RTF."""
    config = _load(args)

    document_path = Path(args.document)
    if not document_path.exists():
        print(f"ERROR: Document file not found: {document_path}")
        return 1

    document = _load_document(document_path)
    run_dir = _run_dir(config, args.run_id)
    log_path = run_dir / RUN_LOG_NAME

    log_event(log_path, "DOCUMENT_LOADED", {
        "path": str(document_path),
        "section_count": len(document.sections),
    })

    report = check_references(document)
    report_path = run_dir / "validation_report.json"
    with open(report_path, "w", encoding="utf-8") as f:
        f.write(report.to_json())

    log_event(log_path, "VALIDATE_DONE", {"violations_count": len(report.violations)})

    output_path = RtfWriter(document).save(run_dir / "document.rtf")

    log_event(log_path, "RENDER_DONE", {"output_path": str(output_path)})

    print(f"Reference check: {len(report.violations)} violations found")
    print(f"Rendered document to: {output_path}")
    print(f"Run artifacts in: {run_dir}")
    return 0


def cmd_fill(args: argparse.Namespace) -> int:
    """Substitute placeholders of an RTF template with JSON values."""
    config = _load(args)

    template_path = Path(args.template)
    values_path = Path(args.values)
    for path, label in ((template_path, "Template"), (values_path, "Values")):
        if not path.exists():
            print(f"ERROR: {label} file not found: {path}")
            return 1

    with open(values_path, "r", encoding="utf-8") as f:
        values = json.load(f)
    if not isinstance(values, dict):
        print(f"ERROR: Values file must contain a JSON object: {values_path}")
        return 1

    template = RtfTemplate.load(
        template_path,
        args.prefix or config.template_prefix,
        args.suffix or config.template_suffix,
    )
    template.inject_many(values)

    if args.output:
        output_path = Path(args.output)
        log_path = output_path.parent / RUN_LOG_NAME
    else:
        run_dir = _run_dir(config, args.run_id)
        output_path = run_dir / "filled.rtf"
        log_path = run_dir / RUN_LOG_NAME

    template.save(output_path)

    log_event(log_path, "FILL_DONE", {
        "template": str(template_path),
        "keys": sorted(values),
        "output_path": str(output_path),
    })

    print(f"Filled {len(values)} values into: {output_path}")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Report header-table references the document does not declare."""
    document_path = Path(args.document)
    if not document_path.exists():
        print(f"ERROR: Document file not found: {document_path}")
        return 1

    report = check_references(_load_document(document_path))
    for violation in report.violations:
        print(f"{violation.severity}: {violation.violation_type} {violation.index} at {violation.location}")
    if report.violations:
        return 1
    print("Reference check passed.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="rtfgen CLI - RTF document generator")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Render command
    render_parser = subparsers.add_parser(
        "render", help="Render a Document JSON to RTF"
    )
    _add_common_args(render_parser)
    render_parser.add_argument(
        "--document", type=str, required=True, help="Path to Document JSON file"
    )
    render_parser.add_argument(
        "--run-id", type=str, default=None, help="Run ID (default: auto-generated timestamp)"
    )
    render_parser.set_defaults(func=cmd_render)

    # Fill command
    fill_parser = subparsers.add_parser(
        "fill", help="Fill placeholders of an RTF template"
    )
    _add_common_args(fill_parser)
    fill_parser.add_argument("--template", type=str, required=True, help="Path to RTF template")
    fill_parser.add_argument(
        "--values", type=str, required=True, help="Path to JSON object of placeholder values"
    )
    fill_parser.add_argument(
        "--output", type=str, default=None, help="Output path (default: <run dir>/filled.rtf)"
    )
    fill_parser.add_argument("--prefix", type=str, default=None, help="Placeholder prefix")
    fill_parser.add_argument("--suffix", type=str, default=None, help="Placeholder suffix")
    fill_parser.add_argument(
        "--run-id", type=str, default=None, help="Run ID (default: auto-generated timestamp)"
    )
    fill_parser.set_defaults(func=cmd_fill)

    # Check command
    check_parser = subparsers.add_parser(
        "check", help="Report undeclared font, color and style references"
    )
    check_parser.add_argument(
        "--document", type=str, required=True, help="Path to Document JSON file"
    )
    check_parser.set_defaults(func=cmd_check)

    return parser


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
