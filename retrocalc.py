"""
RetroCalc Time & Date Calculator
Main application entry point
"""
import argparse
import logging
import tkinter as tk

import config
from config import CalcConfig
from database import Database
from gui import RetroCalcGUI
from session import Session

logger = logging.getLogger(__name__)


def build_config(args) -> CalcConfig:
    """Turn command line switches into the calculator's locale settings"""
    overrides = {"uses_24_hour_clock": args.clock24}
    if args.date_order:
        overrides["date_field_order"] = tuple(args.date_order.upper())
    if args.short_form:
        return CalcConfig.short_form(**overrides)
    return CalcConfig(**overrides)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=f"{config.APP_NAME} {config.VERSION}")
    parser.add_argument("--24", dest="clock24", action="store_true", help="use a 24-hour clock")
    parser.add_argument("--short-form", action="store_true",
                        help="watch-style separators (dates as MM-DD-YYYY)")
    parser.add_argument("--date-order", metavar="ORDER",
                        help="date field order, e.g. MDY, DMY or YMD")
    parser.add_argument("--db", default=config.DB_PATH, help="where the memory register is kept")
    parser.add_argument("--debug", action="store_true", help="log every refused key press")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        calc_config = build_config(args)
    except ValueError as e:
        logger.error("Bad settings: %s", e)
        return 2

    db = Database(args.db)
    session = Session(calc_config, memory_store=db)
    logger.info("%s %s started (memory in %s)", config.APP_NAME, config.VERSION, args.db)

    root = tk.Tk()
    app = RetroCalcGUI(root, session)
    root.mainloop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
