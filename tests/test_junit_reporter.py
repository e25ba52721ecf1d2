"""
Tests of tinyunit/junit_reporter.py
"""

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from tinyunit.errors import ConfigurationError
from tinyunit.junit_reporter import JUnitReporter
from tinyunit.registry import TestRegistry
from tinyunit.suite_runner import SuiteRunner
from tinyunit.test_result import TestResult


class Sample:
    def testPass(self) -> None:
        pass

    def testFail(self) -> None:
        raise ValueError("a < b & c")


class Other:
    def testOk(self) -> None:
        pass


def passing() -> None:
    pass


@pytest.fixture
def registry() -> TestRegistry:
    registry = TestRegistry()
    registry.register(Sample, name="TestSample")
    registry.register(Other, name="TestOther")
    registry.register(passing, name="testFoo")
    return registry


def run_junit(registry: TestRegistry, output_dir: Path, *names: str) -> SuiteRunner:
    runner = SuiteRunner(output_type="junit", registry=registry, output_dir=output_dir)
    runner.run_suite(*names)
    return runner


def test_file_name_for() -> None:
    """
    Test file_name_for.
    Verify that names are lower-cased and stripped of unsafe characters.
    """
    assert JUnitReporter.file_name_for("TestSample") == "testsample.xml"
    assert JUnitReporter.file_name_for("<TestFunction>") == "testfunction.xml"
    assert JUnitReporter.file_name_for("<>") == "tests.xml"


def test_junit_document(registry: TestRegistry, tmp_path: Path) -> None:
    """
    Test the XML written for a class with a passing and a failing test.
    """
    runner = run_junit(registry, tmp_path, "TestSample")

    root = ET.parse(tmp_path / "testsample.xml").getroot()
    assert root.tag == "testsuite"
    assert root.get("name") == "TestSample"

    cases = root.findall("testcase")
    assert [case.get("name") for case in cases] == ["TestSample:testFail", "TestSample:testPass"]
    assert {case.get("classname") for case in cases} == {"TestSample"}

    failure = cases[0].find("failure")
    assert failure is not None
    assert failure.get("type") == JUnitReporter.FAILURE_TYPE
    assert failure.text == "ValueError: a < b & c"
    assert "in testFail" in cases[0].find("system-err").text
    assert cases[1].find("failure") is None
    assert runner.reporter.written_files == [tmp_path / "testsample.xml"]


def test_one_file_per_class(registry: TestRegistry, tmp_path: Path) -> None:
    """
    Test a suite with two classes and a function.
    Verify that every class gets its own, complete, file.
    """
    run_junit(registry, tmp_path, "TestSample", "TestOther", "testFoo")

    names = sorted(path.name for path in tmp_path.iterdir())
    assert names == ["testfunction.xml", "testother.xml", "testsample.xml"]
    for path in tmp_path.iterdir():
        assert ET.parse(path).getroot().tag == "testsuite"


def test_file_closed_on_configuration_error(registry: TestRegistry, tmp_path: Path) -> None:
    """
    Test a suite aborted by an unknown name.
    Verify that the file already started is finished and closed.
    """
    with pytest.raises(ConfigurationError):
        run_junit(registry, tmp_path, "TestOther", "missing")

    root = ET.parse(tmp_path / "testother.xml").getroot()
    assert len(root.findall("testcase")) == 1


def test_cdata_terminator_in_trace(tmp_path: Path) -> None:
    """
    Test add_failure with a trace containing the CDATA terminator.
    """
    result = TestResult()
    reporter = JUnitReporter(result, output_dir=tmp_path)
    result.current_class_name = "Cls"
    reporter.start_class("Cls")
    result.start_test("Cls:testA")
    reporter.start_test("Cls:testA")
    reporter.add_failure("message", "a]]>b")
    reporter.end_test(True)

    assert reporter.end_suite() == 0

    root = ET.parse(tmp_path / "cls.xml").getroot()
    assert root.find("testcase/system-err").text == "a]]>b"


def test_events_without_class_are_ignored(tmp_path: Path) -> None:
    reporter = JUnitReporter(TestResult(), output_dir=tmp_path)
    reporter.start_test("x")
    reporter.add_failure("m", "t")
    reporter.end_test(True)
    reporter.close()

    assert list(tmp_path.iterdir()) == []


def test_class_run_twice_gets_second_file(registry: TestRegistry, tmp_path: Path) -> None:
    """
    Test a class coming back later in the same suite.
    Verify that its first document is kept and the second gets a suffix.
    """
    runner = run_junit(registry, tmp_path, "TestSample", "TestOther", "TestSample:testPass")

    assert runner.reporter.written_files == [
        tmp_path / "testsample.xml",
        tmp_path / "testother.xml",
        tmp_path / "testsample_2.xml",
    ]
    first = ET.parse(tmp_path / "testsample.xml").getroot()
    second = ET.parse(tmp_path / "testsample_2.xml").getroot()
    assert len(first.findall("testcase")) == 2
    assert [case.get("name") for case in second.findall("testcase")] == ["TestSample:testPass"]


def test_names_differing_in_case(registry: TestRegistry, tmp_path: Path) -> None:
    registry.register(Other, name="testsample")

    run_junit(registry, tmp_path, "TestSample", "testsample")

    assert ET.parse(tmp_path / "testsample.xml").getroot().get("name") == "TestSample"
    assert ET.parse(tmp_path / "testsample_2.xml").getroot().get("name") == "testsample"
