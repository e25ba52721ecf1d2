"""
Module for displaying test results as plain text.
"""

import sys
from typing import Any

from tinyunit.config import DEFAULT_VERBOSITY
from tinyunit.reporter import Reporter
from tinyunit.test_result import Failure, MessageTag, TestResult


class TextReporter(Reporter):
    """
    Human readable console reporter.

    At verbosity 0 a single character is written per test ("." or "F").
    At higher verbosity classes and tests get banners and failures are
    printed inline. Every failure is listed again at the end of the suite,
    followed by the success rate.
    """
    CLASS_BANNER: str = ">>>>>>>>> "
    TEST_BANNER: str = ">>> "
    SEPARATOR: str = "=" * 57

    def __init__(
        self,
        result: TestResult,
        verbosity: int = DEFAULT_VERBOSITY,
        runner: Any = None,
    ) -> None:
        super().__init__(result, verbosity, runner)
        self.failures: list[tuple[str, Failure]] = []


    def start_class(self, class_name: str) -> None:
        if self.verbosity > 0:
            print(f"{self.CLASS_BANNER}{self.result.current_class_name}")


    def start_test(self, test_name: str) -> None:
        if self.verbosity > 0:
            print(f"{self.TEST_BANNER}{self.result.current_test_name}")


    def add_failure(self, message: str, stack_trace: str) -> None:
        self.failures.append(
            (self.result.current_test_name, Failure(message, stack_trace))
        )
        if self.verbosity == 0:
            self._write_progress(MessageTag.PROGRESS_FAIL)
        else:
            print(message)
            print(MessageTag.FAILED.value)


    def end_test(self, has_failure: bool) -> None:
        if not has_failure and self.verbosity == 0:
            self._write_progress(MessageTag.PROGRESS_PASS)


    def end_class(self) -> None:
        if self.verbosity > 0:
            print()


    def print_failed_tests(self) -> None:
        """
        Print every failure recorded during the suite.
        """
        if not self.failures:
            return
        print("Failed tests:")
        print("-------------")
        for test_name, failure in self.failures:
            print(f"{self.TEST_BANNER}{test_name} failed")
            print(failure.message)
            if self.verbosity > 1:
                print(failure.stack_trace)
        print()


    def end_suite(self) -> int:
        """
        Print the failure list and the summary line.

        Returns
        -------
        int
            Number of failed tests
        """
        if self.verbosity == 0:
            print()
        else:
            print(self.SEPARATOR)
        self.print_failed_tests()
        print(
            f"Success : {self.result.success_percent}% - "
            f"{self.result.success_count} / {self.result.test_count}"
        )
        return self.result.failure_count


    def _write_progress(self, tag: MessageTag) -> None:
        sys.stdout.write(tag.value)
        sys.stdout.flush()
