from __future__ import annotations

import argparse
from pathlib import Path
import sys

from loguru import logger

from app.viewmodels.main_vm import VIEW_MODES, MainVM
from app.views.text_view import render
from infrastructure.logging import init_logging
from infrastructure.pillow_decoder import PillowMetadataDecoder
from infrastructure.raw_export import export_raw_json
from infrastructure.settings import JsonSettings

BASE_DIR = Path(__file__).parent


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show embedded image metadata.")
    parser.add_argument("images", nargs="+", help="Image files to inspect")
    parser.add_argument(
        "--mode",
        choices=VIEW_MODES,
        help="View mode (default: ai when generation parameters exist, else formatted)",
    )
    parser.add_argument("--export", metavar="PATH", help="Also write the raw tags as JSON")
    parser.add_argument("--settings", default=str(BASE_DIR / "settings.json"))
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    settings = JsonSettings(args.settings)
    init_logging(settings.get("logging.dir"), settings.get("logging.level", "INFO"))

    vm = MainVM(PillowMetadataDecoder(), ai_tags=settings.get_list("ai.parameter_tags"))
    failures = 0
    for image in args.images:
        if not vm.process_file(image):
            failures += 1
            print(f"{image}: {vm.state.error}", file=sys.stderr)
            continue
        if args.mode:
            vm.set_view_mode(args.mode)
        view = vm.current_view()
        print(render(view, vm.state.view_mode))
        print()
        if args.export:
            target = Path(args.export)
            if len(args.images) > 1:
                target = target / f"{Path(image).stem}.json"
            export_raw_json(
                vm.state.metadata, target, settings.get("export.raw_filename", "exif-data.json")
            )
        vm.reset()

    logger.info("Processed {} file(s), {} failed", len(args.images), failures)
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
