"""
QuadLab Command-Line Entry Point

Prints the quadrature comparison report for the configured problem.
With no arguments the built-in problem is used:

    integral of (x+3)/(x^2+4) over [0, 2], epsilon = 1e-4
"""

import argparse
import sys
from typing import List, Optional

from .common.config import get_config
from .common.logging_config import setup_logging, ServiceLogger
from .report import run_comparison, format_report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='quadlab',
        description='Compare numerical quadrature methods against the exact integral'
    )
    parser.add_argument('--config', help='Path to configuration file')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level')
    parser.add_argument('--json-logs', action='store_true',
                        help='Emit log records as JSON lines')
    parser.add_argument('--log-file',
                        help='Also write log records to this file')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    setup_logging(
        service_name="quadlab",
        log_level=args.log_level,
        log_file=args.log_file,
        json_format=args.json_logs
    )
    logger = ServiceLogger("quadlab", "main")

    try:
        config = get_config(args.config)
        if args.config:
            logger.info(f"Using config: {args.config}")

        report = run_comparison(config)
        sys.stdout.write(format_report(report, precision=config.report.precision))
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
