"""ThreadScribe application entry point."""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from src.adapters.markdown_sink import FileSink
from src.core.config_manager import ConfigManager
from src.core.exceptions import ThreadScribeError
from src.core.logger import setup_logger
from src.services.export_service import ExportService, page_source_for


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="threadscribe",
        description="Export a Reddit thread to a Markdown file.",
    )
    parser.add_argument(
        "source",
        nargs="?",
        help="Thread URL or saved HTML page. Omit to open the window.",
    )
    parser.add_argument(
        "--out",
        help="Output directory (defaults to export.output_dir from settings).",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for ThreadScribe.

    Startup sequence:
    1. ConfigManager init (loads or creates settings.yaml)
    2. Logger init (reads log_level from config)
    3. ExportService creation (selectors from config)
    4. Headless export when a source is given, otherwise the window
    """
    args = _build_parser().parse_args(argv)

    config = ConfigManager()

    log_level = config.get("app.log_level", "INFO")
    mask_logs = config.get("security.mask_logs", True)
    logger = setup_logger(log_level=log_level, mask_logs=mask_logs)
    logger.info("ThreadScribe starting...")

    export_service = ExportService(config.get_selectors())

    if args.source:
        return _run_headless(args, config, export_service)
    return _run_gui(config, export_service)


def _run_headless(args: argparse.Namespace, config: ConfigManager,
                  export_service: ExportService) -> int:
    source = page_source_for(
        args.source,
        timeout=config.get("fetch.timeout", 30),
        max_retries=config.get("fetch.max_retries", 3),
        user_agent=config.get("fetch.user_agent"),
    )
    out_dir = Path(args.out) if args.out else config.get_output_dir()
    sink = FileSink(out_dir, overwrite=config.get("export.overwrite", True))

    try:
        path = export_service.export(source, sink)
    except ThreadScribeError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1

    print(path)
    return 0


def _run_gui(config: ConfigManager, export_service: ExportService) -> int:
    from PyQt6.QtWidgets import QApplication

    from src.gui.main_window import MainWindow

    app = QApplication(sys.argv)
    window = MainWindow(export_service, config)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
