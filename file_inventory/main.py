import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from . import config
from .core import FileInventoryApp
from .exceptions import FileInventoryError


def setup_logging(log_file: Optional[Path], verbose: bool):
    """Sets up logging to the console and, when given, a file beside the report."""
    log_level = logging.DEBUG if verbose else logging.INFO

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.insert(0, logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="File Inventory: hash and catalog every file and folder under a directory")

    p.add_argument("root", type=Path, nargs="?", default=None, help="Directory to inventory (prompted for if omitted)")
    p.add_argument("-o", "--output", type=Path, default=None,
                   help="Output CSV (default: FileInventory_<timestamp>.csv in the current directory)")
    p.add_argument("-w", "--workers", type=int, default=None,
                   help=f"Parallel workers (default: logical CPU count, {config.default_worker_count()} here)")
    p.add_argument("--provenance", choices=config.PROVENANCE_MODES, default="auto",
                   help="Mark of the Web lookup: auto (Windows only), zone (force Zone.Identifier streams), none")
    p.add_argument("--no-progress", action="store_true", help="Disable the progress bar")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return p.parse_args(argv)


def prompt_for_root() -> Optional[Path]:
    try:
        answer = input("Enter the folder path to inventory: ").strip().strip('"')
    except EOFError:
        return None
    return Path(answer) if answer else None


def default_output() -> Path:
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return Path.cwd() / config.REPORT_NAME_PATTERN.format(stamp=stamp)


def main(argv=None) -> int:
    args = parse_args(argv)

    root = args.root or prompt_for_root()
    if root is None:
        print("No folder given.", file=sys.stderr)
        return 1

    output_csv = (args.output or default_output()).resolve()
    setup_logging(output_csv.with_suffix(".log"), args.verbose)

    logging.info("=== File Inventory Started ===")
    logging.info(f"Root:   {root}")
    logging.info(f"Report: {output_csv}")

    try:
        app = FileInventoryApp(
            max_workers=args.workers,
            provenance_mode=args.provenance,
            show_progress=not args.no_progress,
        )
        app.run(root, output_csv)
    except FileInventoryError as e:
        logging.error(str(e))
        return 1
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        return 1
    except Exception:
        logging.exception("Fatal error during inventory.")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
