import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from reqcheck import __version__
from reqcheck.checker import RequirementsChecker
from reqcheck.config import (
    configure_logging,
    default_format,
    load_env_file,
    load_requirements,
    parse_setting,
)
from reqcheck.environment import ProcessEnvironment
from reqcheck.errors import ReqCheckError
from reqcheck.ui import console, print_report, show_check_error
from reqcheck.views import RENDERERS
from reqcheck.views.console import summary_line

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


class ReqcheckCLI:
    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def check(self, args: argparse.Namespace) -> int:
        """Check one or more requirement files and print a single report.

        Returns:
            int: 0 when every mandatory requirement is met, 1 when at least
                one failed, 2 on malformed requirements or conditions.
        """
        try:
            load_env_file(args.env_file)

            files = [load_requirements(path) for path in args.files]
            settings: Dict[str, object] = {}
            for requirements_file in files:
                settings.update(requirements_file.settings)
            for assignment in args.set or []:
                name, value = parse_setting(assignment)
                settings[name] = value

            checker = RequirementsChecker(ProcessEnvironment(settings=settings))
            for requirements_file in files:
                logger.debug(f"Checking {requirements_file.path}")
                checker.check(requirements_file.requirements)

            result = checker.get_result()
            if args.format == "console" and not args.plain and not args.output:
                print_report(result, console)
            else:
                report = checker.render(args.format)
                if args.output:
                    Path(args.output).write_text(report, encoding="utf-8")
                    console.success(f"Report written to {args.output}")
                    if result.summary.warnings:
                        console.warning(summary_line(result))
                else:
                    sys.stdout.write(report)
        except ReqCheckError as e:
            show_check_error(e)
            return EXIT_USAGE
        except OSError as e:
            console.error(f"Cannot write report: {e}")
            return EXIT_USAGE

        return EXIT_FAILED if result.summary.errors else EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reqcheck",
        description="Check that the environment meets an application's requirements",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  reqcheck check requirements.yaml\n"
            "  reqcheck check base.yaml web.yaml --format web --output report.html\n"
            "  reqcheck check requirements.yaml --set upload_max_filesize=16M\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    check_parser = subparsers.add_parser("check", help="Check requirement files")
    check_parser.add_argument("files", nargs="+", help="YAML or JSON requirement files")
    check_parser.add_argument(
        "--format", "-f",
        choices=sorted(RENDERERS),
        default=default_format(),
        help="Report format (default: console, or $REQCHECK_FORMAT)",
    )
    check_parser.add_argument("--output", "-o", help="Write the report to a file")
    check_parser.add_argument("--env-file", help="Load option values from a .env file")
    check_parser.add_argument(
        "--set", action="append", metavar="NAME=VALUE",
        help="Override an option value (repeatable)",
    )
    check_parser.add_argument("--plain", action="store_true", help="Plain text instead of a table")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    if not args.command:
        parser.print_help()
        return EXIT_OK

    cli = ReqcheckCLI(verbose=args.verbose)
    if args.command == "check":
        return cli.check(args)

    parser.print_help()
    return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
