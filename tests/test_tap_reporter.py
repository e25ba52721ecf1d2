"""
Tests of tinyunit/tap_reporter.py
"""

import pytest

from tinyunit.fixture import TestFixture
from tinyunit.registry import TestRegistry
from tinyunit.reporter_type import ReporterType
from tinyunit.suite_runner import SuiteRunner


def failing() -> None:
    raise ValueError("boom")


def passing() -> None:
    pass


class BrokenFixture(TestFixture):
    def setUp(self) -> None:
        raise RuntimeError("no setUp")

    def tearDown(self) -> None:
        raise RuntimeError("no tearDown")

    def testNothing(self) -> None:
        pass


@pytest.fixture
def registry() -> TestRegistry:
    registry = TestRegistry()
    registry.register(failing, name="testA")
    registry.register(passing, name="testB")
    registry.register(BrokenFixture, name="TestBroken")
    return registry


def run_tap(registry: TestRegistry, verbosity: int, *names: str) -> int:
    return SuiteRunner(output_type=ReporterType.TAP, verbosity=verbosity, registry=registry).run_suite(*names)


def test_tap_output(registry: TestRegistry, capsys: pytest.CaptureFixture) -> None:
    """
    Test TAP output of a two test suite whose first test fails.
    Verify that lines follow the run order and end with the plan.
    """
    failures = run_tap(registry, 0, "testA", "testB")

    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "not ok 1\t<TestFunction>:testA",
        "ok 2\t<TestFunction>:testB",
        "1..2",
    ]
    assert failures == 1


def test_tap_failure_message(registry: TestRegistry, capsys: pytest.CaptureFixture) -> None:
    """
    Test TAP output at verbosity 1.
    Verify that the failure message is indented under the test line.
    """
    run_tap(registry, 1, "testA")

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "not ok 1\t<TestFunction>:testA"
    assert lines[1] == "    ValueError: boom"
    assert lines[-1] == "1..1"
    assert not any("Traceback" in line for line in lines)


def test_tap_stack_trace(registry: TestRegistry, capsys: pytest.CaptureFixture) -> None:
    run_tap(registry, 2, "testA")

    out = capsys.readouterr().out
    assert "    Traceback (most recent call last):" in out
    assert "in failing" in out


def test_tap_single_line_per_failed_test(registry: TestRegistry, capsys: pytest.CaptureFixture) -> None:
    """
    Test a test failing in setUp and tearDown.
    Verify that one "not ok" line is printed with both messages.
    """
    run_tap(registry, 1, "TestBroken")

    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "not ok 1\tTestBroken:testNothing",
        "    RuntimeError: no setUp",
        "    RuntimeError: no tearDown",
        "1..1",
    ]
