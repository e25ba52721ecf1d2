#!/usr/bin/env python3
"""
CLI entry for tinyunit (thin wrapper).
"""

import argparse
import importlib
import sys
from pathlib import Path

from tinyunit import __version__ as TINYUNIT_VERSION
from tinyunit.config import DEFAULT_VERBOSITY, output_type_from_env, verbosity_from_env
from tinyunit.exit_status import ExitStatus
from tinyunit.registry import default_registry
from tinyunit.reporter_type import ReporterType
from tinyunit.suite_runner import SuiteRunner
from tinyunit.test_result import Colors
from tinyunit.utilities import deduplicate


def get_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Gets and returns command line arguments.
    """
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="tinyunit",
        description="tinyunit - Minimal unit testing framework",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "names",
        nargs="*",
        help="Tests to run: Class, Class:method or function "
             "(default: every registered test)",
    )
    parser.add_argument(
        "-m",
        "--module",
        dest="modules",
        action="append",
        default=[],
        help="Import a module and register its tests (repeatable)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str.upper,
        choices=[t.value for t in ReporterType],
        help="Reporter to use (default: $TINYUNIT_OUTPUT or TEXT)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Directory for JUnit XML files (default: current directory)",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (repeatable)",
    )
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only print progress characters and the summary",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"tinyunit {TINYUNIT_VERSION}",
        help="Show program's version number and exit",
    )
    return parser.parse_args(argv)


def import_test_modules(modules: list[str]) -> list[str]:
    """
    Imports modules and registers their tests with the default registry.

    A directory containing the module is expected to be importable; the
    current directory is added to sys.path for convenience.

    Parameters
    ----------
    modules : list[str]
        Dotted module names

    Returns
    -------
    list[str]
        Names registered
    """
    if "" not in sys.path and str(Path.cwd()) not in sys.path:
        sys.path.insert(0, str(Path.cwd()))

    registered: list[str] = []
    for module_name in deduplicate(modules):
        module = importlib.import_module(module_name)
        registered.extend(default_registry.register_module(module))
    return registered


def resolve_verbosity(args: argparse.Namespace) -> int:
    if args.quiet:
        return 0
    if args.verbose:
        return DEFAULT_VERBOSITY + args.verbose
    return verbosity_from_env()


def main(argv: list[str] | None = None) -> int:
    """
    Main function for CLI.
    """
    args: argparse.Namespace | None = None
    try:
        args = get_arguments(argv)
        import_test_modules(args.modules)

        if not args.names and not default_registry.names():
            print(f"{Colors.YELLOW.value}No tests found{Colors.RESET.value}")
            return ExitStatus.ERROR.value

        runner = SuiteRunner(
            output_type=args.output or output_type_from_env() or ReporterType.TEXT,
            verbosity=resolve_verbosity(args),
            registry=default_registry,
            argv=args.names,
            output_dir=args.output_dir,
        )
        failures: int = runner.run_suite()

        return ExitStatus.from_failures(failures).value

    except KeyboardInterrupt:
        print(f"\n{Colors.YELLOW.value}Test execution interrupted by user{Colors.RESET.value}")
        return ExitStatus.ERROR.value

    except Exception as e:
        print(f"{Colors.RED.value}Error: {e}{Colors.RESET.value}")
        if args is not None and args.verbose:
            import traceback
            traceback.print_exc()
        return ExitStatus.ERROR.value


if __name__ == "__main__":
    sys.exit(main())
