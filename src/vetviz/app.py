# src/vetviz/app.py
import argparse
import logging
import sys
from dataclasses import replace

from PySide6.QtWidgets import QApplication

from vetengine.config import DEFAULTS
from vetengine.numeric import normalize_on_commit
from vetengine.session import Session
from vetengine.types import SPECIES

from .ui.main_window import MainWindow


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vetdose", description="Veterinary medication dosing calculator")
    parser.add_argument("--species", choices=SPECIES, default=DEFAULTS.species)
    parser.add_argument("--unit", choices=("kg", "lb"), default=DEFAULTS.unit)
    parser.add_argument("--weight", default=DEFAULTS.weight_text, help="initial patient weight, in --unit")
    parser.add_argument("--log-level", default="WARNING",
                        choices=("DEBUG", "INFO", "WARNING", "ERROR"))
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    defaults = replace(DEFAULTS, species=args.species, unit=args.unit,
                       weight_text=normalize_on_commit(args.weight, DEFAULTS.max_decimals))
    session = Session(defaults)

    app = QApplication(sys.argv[:1])
    window = MainWindow(session)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
