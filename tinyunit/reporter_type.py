"""
Module providing the reporter selection enum.
"""

from enum import Enum
from pathlib import Path
from typing import Any

from tinyunit.config import DEFAULT_VERBOSITY
from tinyunit.errors import ConfigurationError
from tinyunit.junit_reporter import JUnitReporter
from tinyunit.reporter import NullReporter, Reporter
from tinyunit.tap_reporter import TapReporter
from tinyunit.test_result import TestResult
from tinyunit.text_reporter import TextReporter


class ReporterType(Enum):
    """
    Enum of the built-in reporters.
    """
    NIL = "NIL"
    TAP = "TAP"
    JUNIT = "JUNIT"
    TEXT = "TEXT"

    @classmethod
    def from_name(cls, name: str) -> "ReporterType":
        """
        Looks up a reporter type by name, ignoring case.

        Parameters
        ----------
        name : str
            One of NIL, TAP, JUNIT or TEXT in any case

        Returns
        -------
        ReporterType
            The matching member

        Raises
        ------
        ConfigurationError
            If no reporter has this name
        """
        try:
            return cls(name.strip().upper())
        except ValueError:
            raise ConfigurationError(f"No such format: {name}") from None


    @property
    def reporter_class(self) -> type[Reporter]:
        return {
            ReporterType.NIL: NullReporter,
            ReporterType.TAP: TapReporter,
            ReporterType.JUNIT: JUnitReporter,
            ReporterType.TEXT: TextReporter,
        }[self]


def create_reporter(
    output_type: "ReporterType | str | type[Reporter]",
    result: TestResult,
    verbosity: int = DEFAULT_VERBOSITY,
    runner: Any = None,
    output_dir: Path | None = None,
) -> Reporter:
    """
    Builds the reporter of a suite run.

    Parameters
    ----------
    output_type : ReporterType | str | type[Reporter]
        Built-in reporter, its name, or a Reporter subclass
    result : TestResult
        Result the reporter reads from
    verbosity : int, optional
        Output detail level, by default DEFAULT_VERBOSITY
    runner : Any, optional
        Runner driving the reporter
    output_dir : Path | None, optional
        Directory for file based reporters, by default the current directory

    Returns
    -------
    Reporter
        A new reporter bound to result

    Raises
    ------
    ConfigurationError
        If output_type is neither a known name nor a Reporter subclass
    """
    if isinstance(output_type, str):
        output_type = ReporterType.from_name(output_type)
    if isinstance(output_type, ReporterType):
        output_type = output_type.reporter_class
    if not (isinstance(output_type, type) and issubclass(output_type, Reporter)):
        raise ConfigurationError(f"Not a reporter: {output_type!r}")

    if issubclass(output_type, JUnitReporter):
        return output_type(result, verbosity, runner, output_dir=output_dir)
    return output_type(result, verbosity, runner)
