"""
Entry point for the Google Ads ROI calculator.

Usage:
    python main.py                      # launches the web app at localhost:5000
    python main.py --cli                # runs the terminal interface
    python main.py --cli --report x.pdf # terminal run that also saves a PDF
"""

import argparse
import logging
from typing import List, Optional

import config as cfg


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Google Ads ROI Calculator",
    )
    parser.add_argument(
        "--cli",
        action="store_true",
        help="Run in terminal mode instead of launching the web app",
    )
    parser.add_argument(
        "--report",
        metavar="PATH",
        help="Terminal mode: save a PDF summary to PATH",
    )
    parser.add_argument("--host", default=cfg.WEB_HOST, help="Web server host")
    parser.add_argument("--port", type=int, default=cfg.WEB_PORT, help="Web server port")
    parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Do not open a browser tab when the web app starts",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Verbose logging and the Flask debugger",
    )
    args = parser.parse_args(argv)
    if args.report and not args.cli:
        parser.error("--report requires --cli")

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.cli:
        from cli import run_cli
        run_cli(report_path=args.report)
    else:
        from app import run_web
        run_web(
            host=args.host,
            port=args.port,
            debug=args.debug,
            open_browser=not args.no_browser,
        )


if __name__ == "__main__":
    main()
