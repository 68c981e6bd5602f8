"""Command-line exporter.

    cv-studio templates
    cv-studio export cv.json --template modern --format pdf --out exports/
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from cv_studio.config import get_settings
from cv_studio.models.cv_data import CVData
from cv_studio.models.style_settings import StyleSettings
from cv_studio.rendering.rasterize import ImageLoader
from cv_studio.services.docx_client import DocxConversionClient
from cv_studio.services.downloads import DirectoryDownloadSink
from cv_studio.services.export import EXPORT_FORMATS, ExportPipeline, ExportResult, FilenameHint
from cv_studio.services.render_targets import DEFAULT_ROOT_ID, RenderTargetRegistry
from cv_studio.templates import DEFAULT_TEMPLATE_ID, get_template, list_templates

logger = logging.getLogger(__name__)


def _read_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as handle:
        return json.load(handle)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cv-studio",
        description="Render CVs with layout templates and export them.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("templates", help="List available template ids")

    export = subparsers.add_parser("export", help="Export a CV JSON file")
    export.add_argument("cv", type=Path, help="Path to the CV JSON snapshot")
    export.add_argument("--template", default=DEFAULT_TEMPLATE_ID, help="Template id")
    export.add_argument("--format", dest="fmt", default="pdf", choices=EXPORT_FORMATS)
    export.add_argument("--style", type=Path, help="Path to a style settings JSON file")
    export.add_argument("--out", type=Path, help="Output directory (default: export dir)")
    export.add_argument("--title", help="Filename base (default: the person's name)")
    export.add_argument("--id", dest="resource_id", help="Id appended to the filename")
    return parser


def _list_templates() -> int:
    for template_id in list_templates():
        template = get_template(template_id)
        layout = "paged" if template.paginated else "continuous"
        print(f"{template_id:<12} {template.name} ({template.family}, {layout})")
    return 0


async def _export(
    cv: CVData,
    style: StyleSettings | None,
    args: argparse.Namespace,
) -> ExportResult:
    settings = get_settings()
    template = get_template(args.template)
    surfaces = template.render(cv, style)

    targets = RenderTargetRegistry()
    targets.mount(surfaces, DEFAULT_ROOT_ID, title=cv.personal_info.full_name)
    pipeline = ExportPipeline(
        targets,
        DirectoryDownloadSink(args.out or settings.export_dir),
        oversampling=settings.oversampling,
        docx_client=DocxConversionClient(settings.docx_endpoint, settings.docx_timeout),
        image_loader=ImageLoader(allow_local_paths=True),
    )
    hint = FilenameHint(
        title=args.title or cv.personal_info.full_name,
        resource_id=args.resource_id,
    )
    return await pipeline.export(DEFAULT_ROOT_ID, args.fmt, hint)


def _run_export(args: argparse.Namespace) -> int:
    try:
        cv = CVData.model_validate(_read_json(args.cv))
        style = StyleSettings.model_validate(_read_json(args.style)) if args.style else None
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        print(f"❌ Could not read input: {exc}", file=sys.stderr)
        return 1

    if args.template not in list_templates():
        print(
            f"❌ Unknown template {args.template!r}. Run 'cv-studio templates'.",
            file=sys.stderr,
        )
        return 1

    result = asyncio.run(_export(cv, style, args))
    if not result.ok:
        print(f"❌ {result.message}", file=sys.stderr)
        return 1

    print(f"✅ {result.message}")
    print(f"📄 {result.location}")
    return 0


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse *argv* and run the chosen command.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.command == "templates":
        return _list_templates()
    return _run_export(args)


def main() -> None:
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
