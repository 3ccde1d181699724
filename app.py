"""
Custom Labels Translator - Command Line

Exports Salesforce custom labels to an Excel spreadsheet for translators,
and imports the edited spreadsheet back into the project metadata.

Usage:
    python app.py export --project-src PATH --languages "en_US, de" [--category C] [--prefix P] [--output FILE]
    python app.py import --project-src PATH --import-file-path FILE [--dry-run]
"""

import argparse
import logging
import sys
from typing import List, Optional

from label_tools import __version__
from label_tools.errors import LabelToolsError
from label_tools.export_labels import export_labels
from label_tools.import_labels import import_labels

logger = logging.getLogger("custom_labels")


def configure_logging(verbose: bool) -> None:
    """Configure console logging for the app and the label tools."""
    log_level = logging.DEBUG if verbose else logging.INFO
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    for name in ("custom_labels", "label_tools"):
        log = logging.getLogger(name)
        log.setLevel(log_level)
        log.handlers = [handler]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="custom-labels",
        description="Export/import Salesforce custom labels to/from Excel for translation."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log every examined key (debug output)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    export_parser = subparsers.add_parser(
        "export", help="export custom labels to external format (xlsx)")
    export_parser.add_argument("--project-src", required=True,
                               help="path to project 'src' folder")
    export_parser.add_argument("--languages", required=True,
                               help="list of the languages separated by comma, example: 'en_US, de'")
    export_parser.add_argument("--category", default=None,
                               help="filter translations by custom label category")
    export_parser.add_argument("--prefix", default=None,
                               help="filter translations by key prefix")
    export_parser.add_argument("--output", default=None,
                               help="output xlsx file (default: custom-labels-export.xlsx)")

    import_parser = subparsers.add_parser(
        "import", help="import custom labels from external format (xlsx) to metadata files")
    import_parser.add_argument("--project-src", required=True,
                               help="path to project 'src' folder")
    import_parser.add_argument("--import-file-path", required=True,
                               help="path to import file")
    import_parser.add_argument("--dry-run", action="store_true",
                               help="show what would change without modifying files")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        if args.command == "export":
            export_labels(
                args.project_src,
                args.languages,
                category=args.category,
                prefix=args.prefix,
                output_path=args.output,
            )
        else:
            import_labels(
                args.project_src,
                args.import_file_path,
                dry_run=args.dry_run,
            )
    except LabelToolsError as e:
        logger.critical(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
