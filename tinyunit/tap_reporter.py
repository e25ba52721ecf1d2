"""
Reporter writing the Test Anything Protocol.
"""

from typing import Any

from tinyunit.config import DEFAULT_VERBOSITY
from tinyunit.reporter import Reporter
from tinyunit.test_result import MessageTag, TestResult
from tinyunit.utilities import prefix_lines


class TapReporter(Reporter):
    """
    Prints one TAP line per test and the plan line at the end.

    The message of a failure is printed at verbosity >= 1 and its stack
    trace at verbosity >= 2, indented beneath the "not ok" line.
    """
    INDENT: str = "    "

    def __init__(
        self,
        result: TestResult,
        verbosity: int = DEFAULT_VERBOSITY,
        runner: Any = None,
    ) -> None:
        super().__init__(result, verbosity, runner)
        self._failure_reported: bool = False


    def start_test(self, test_name: str) -> None:
        self._failure_reported = False


    def add_failure(self, message: str, stack_trace: str) -> None:
        # A test failing in several phases still gets a single "not ok" line
        if not self._failure_reported:
            print(
                f"{MessageTag.FAIL.value} {self.result.test_count}\t"
                f"{self.result.current_test_name}"
            )
            self._failure_reported = True
        if self.verbosity > 0:
            print(prefix_lines(self.INDENT, message))
        if self.verbosity > 1:
            print(prefix_lines(self.INDENT, stack_trace))


    def end_test(self, has_failure: bool) -> None:
        if not has_failure:
            print(
                f"{MessageTag.PASS.value} {self.result.test_count}\t"
                f"{self.result.current_test_name}"
            )


    def end_suite(self) -> int:
        print(f"1..{self.result.test_count}")
        return self.result.failure_count
