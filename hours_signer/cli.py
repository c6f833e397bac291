import argparse
import logging
import sys
from typing import List, Optional

from . import config as settings
from .config import Configuration, config_exists, config_path, load_config, save_config
from .errors import SigningError
from .signer import sign_pdf
from .utils import default_output_name


def build_parser(cfg: Configuration) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hours-signer",
        description="Stamp employee and manager signature blocks onto the last page of a PDF timesheet.",
    )
    parser.add_argument("-input", "--input", dest="input", default="", help="Input PDF file (required)")
    parser.add_argument(
        "-output", "--output", dest="output", default="",
        help="Output PDF file (default: Urenstaat-<year>-<month>-Joel-Grimberg.pdf)",
    )
    parser.add_argument("-employee", "--employee", dest="employee", default=cfg.employee_name, help="Employee name")
    parser.add_argument("-manager", "--manager", dest="manager", default=cfg.manager_name, help="Manager name")
    parser.add_argument(
        "-signature", "--signature", dest="signature", default=cfg.signature_path,
        help="Path to signature image (PNG/JPG)",
    )
    parser.add_argument("-init", "--init", dest="init", action="store_true", help="Initialize config file with defaults")
    parser.add_argument(
        "-show-config", "--show-config", dest="show_config", action="store_true", help="Show current configuration",
    )
    return parser


def configure_logging(interactive: bool):
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.WARNING)
    if interactive:
        # stderr would garble the curses screen
        if settings.LOG_FILE:
            logging.basicConfig(filename=settings.LOG_FILE, level=level,
                                format="%(asctime)s %(levelname)s %(name)s: %(message)s")
        else:
            logging.getLogger().addHandler(logging.NullHandler())
        return
    logging.basicConfig(stream=sys.stderr, level=level, format="%(levelname)s %(name)s: %(message)s")


def run_cli(argv: List[str]) -> int:
    cfg = load_config()
    parser = build_parser(cfg)
    args = parser.parse_args(argv)

    if args.init:
        try:
            path = save_config(Configuration())
        except SigningError as exc:
            print(f"Error: {exc}")
            return 1
        print(f"Config file created at: {path}")
        return 0

    if args.show_config:
        print(f"Config file: {config_path()}")
        print(f"Employee name: {cfg.employee_name}")
        print(f"Manager name: {cfg.manager_name}")
        if cfg.signature_path:
            print(f"Signature path: {cfg.signature_path}")
        else:
            print("Signature: (not configured)")
        return 0

    if not args.input:
        print("Error: -input is required")
        parser.print_usage()
        return 1

    output = args.output or default_output_name()
    try:
        sign_pdf(args.input, output, args.employee, args.manager, args.signature)
    except SigningError as exc:
        print(f"Error: {exc}")
        return 1

    print(f"✓ Created signed PDF: {output}")
    print(f"  Employee: {args.employee}")
    print(f"  Manager: {args.manager}")
    return 0


def run_interactive() -> int:
    from .session import Session
    from .tui import run

    exists = config_exists()
    cfg = load_config() if exists else Configuration()
    run(Session(cfg, exists))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if argv and argv[0].startswith("-"):
        configure_logging(interactive=False)
        return run_cli(argv)
    configure_logging(interactive=True)
    return run_interactive()
