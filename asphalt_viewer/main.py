"""Entry point for the asphalt measurement editor."""

import argparse
import logging
import os
import sys

from asphalt_viewer.model.measurement_document import MeasurementDocument
from asphalt_viewer.model.sample_data import SAMPLE_LAYERS, SAMPLE_STATIONS
from asphalt_viewer.services.app_settings import AppSettings
from asphalt_viewer.ui.app import AsphaltApp
from asphalt_viewer.ui.main_window import MeasurementWindow

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="BPO asphalt measurement editor")
    parser.add_argument(
        "--log-level",
        default=os.getenv("BPO_ASPHALT_LOG_LEVEL", "INFO"),
        help=(
            "Logging level (e.g. DEBUG, INFO). Defaults to BPO_ASPHALT_LOG_LEVEL "
            "environment variable or INFO."
        ),
    )
    parser.add_argument(
        "--log-file",
        default=os.getenv("BPO_ASPHALT_LOG_PATH"),
        help=(
            "Optional log file path. Defaults to bpo_asphalt_log.txt next to the "
            "executable."
        ),
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Shortcut for --log-level DEBUG",
    )
    parser.add_argument(
        "--sample",
        action="store_true",
        help="Start with the sample stations and layers loaded",
    )
    parser.add_argument(
        "--settings",
        default=None,
        help="Settings INI path. Defaults to BPO_ASPHALT_SETTINGS or ~/.bpo_asphalt.ini.",
    )
    return parser.parse_args(argv)


def configure_logging(log_level_name: str, log_path: str | None) -> str:
    resolved_level_name = log_level_name.upper()
    log_level = getattr(logging, resolved_level_name, logging.INFO)

    if not log_path:
        base_dir = os.path.dirname(sys.argv[0])
        log_path = os.path.join(base_dir, "bpo_asphalt_log.txt")

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_path, mode="a", encoding="utf-8"),
            logging.StreamHandler(sys.stdout),
        ],
    )

    return log_path


def build_document(settings: AppSettings, *, sample: bool) -> MeasurementDocument:
    default_active = settings.editor().default_section_active
    if not sample:
        return MeasurementDocument(default_active=default_active)
    return MeasurementDocument(
        SAMPLE_STATIONS, SAMPLE_LAYERS, default_active=default_active
    )


def main() -> None:
    args = parse_args()
    log_level_name = "DEBUG" if args.debug else args.log_level
    log_path = configure_logging(log_level_name, args.log_file)
    logger.info(
        "Starting BPO Asphalt (log level %s, log file %s)",
        log_level_name.upper(),
        log_path,
    )

    app = AsphaltApp(sys.argv)
    settings = AppSettings(args.settings)
    document = build_document(settings, sample=args.sample)
    window = MeasurementWindow(document, settings=settings)
    app.window = window
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
