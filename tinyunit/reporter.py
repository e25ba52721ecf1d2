"""
Reporter contract driven by the suite runner, and the silent reporter.
"""

from abc import ABC
from typing import Any

from tinyunit.config import DEFAULT_VERBOSITY
from tinyunit.test_result import TestResult


class Reporter(ABC):
    """
    Sink for the lifecycle and outcome events of a suite run.

    The runner constructs one reporter per suite and calls, in order,
    start_suite, then for every class start_class / (start_test,
    add_failure*, end_test)* / end_class, and finally end_suite.
    Every hook is a no-op by default.

    Attributes
    ----------
    result : TestResult
        State of the running suite, read only from the reporter side
    verbosity : int
        How much detail to print
    runner : Any
        Suite runner driving this reporter, if any
    """
    def __init__(
        self,
        result: TestResult,
        verbosity: int = DEFAULT_VERBOSITY,
        runner: Any = None,
    ) -> None:
        self.result: TestResult = result
        self.verbosity: int = verbosity
        self.runner: Any = runner


    def start_suite(self) -> None:
        pass


    def start_class(self, class_name: str) -> None:
        pass


    def start_test(self, test_name: str) -> None:
        pass


    def add_failure(self, message: str, stack_trace: str) -> None:
        pass


    def end_test(self, has_failure: bool) -> None:
        pass


    def end_class(self) -> None:
        pass


    def end_suite(self) -> int:
        """
        Finishes the report.

        Returns
        -------
        int
            Number of failed tests
        """
        return self.result.failure_count


    def close(self) -> None:
        """
        Release resources held by the reporter without finishing the report.
        """


class NullReporter(Reporter):
    """
    Reporter that prints nothing.
    """
