#!/usr/bin/env python3
"""
Module providing the suite runner: name resolution and suite lifecycle.
"""

import inspect
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, ClassVar, Iterable

from tinyunit.config import DEFAULT_VERBOSITY, output_type_from_env, verbosity_from_env
from tinyunit.errors import ConfigurationError
from tinyunit.protected_invoker import ProtectedInvoker
from tinyunit.registry import TestRegistry, default_registry
from tinyunit.reporter import Reporter
from tinyunit.reporter_type import ReporterType, create_reporter
from tinyunit.test_method_runner import TestMethodRunner
from tinyunit.test_result import TestResult
from tinyunit.utilities import sorted_members


@dataclass(frozen=True)
class TestTarget:
    """
    A resolved test, ready to run.

    Attributes
    ----------
    class_name : str | None
        Reported class name, None for a test function
    method_name : str
        Name of the test method or function
    method : Any
        Test method as found on the class, or the test function
    make_instance : Callable[[], Any] | None
        Returns the fixture instance the method runs on, None for a function
    """
    __test__ = False
    class_name: str | None
    method_name: str
    method: Any
    make_instance: Callable[[], Any] | None = None


class SuiteRunner:
    """
    Resolves test names and runs them as one suite.

    A name is either "Class:method", the name of a test class (all its
    methods starting with "test" are run in name order) or the name of a
    test function. Names are looked up in a TestRegistry.

    Attributes
    ----------
    output_type : ReporterType | str | type[Reporter]
        Reporter used for the suite
    verbosity : int
        Reporter verbosity
    registry : TestRegistry
        Where names are looked up
    argv : list[str]
        Names run when run_suite is called without names
    output_dir : Path | None
        Directory for file based reporters
    result : TestResult
        State of the current (or last) suite
    reporter : Reporter | None
        Reporter of the current (or last) suite
    last_class_name : str | None
        Class of the previous test, None outside a class
    """
    TEST_METHOD_PREFIX: ClassVar[str] = "test"

    def __init__(self,
        output_type: "ReporterType | str | type[Reporter]" = ReporterType.TEXT,
        verbosity: int = DEFAULT_VERBOSITY,
        registry: TestRegistry | None = None,
        argv: Iterable[str] = (),
        output_dir: Path | None = None,
    ) -> None:
        self.output_type: ReporterType | str | type[Reporter] = output_type
        self.verbosity: int = verbosity
        self.registry: TestRegistry = registry if registry is not None else default_registry
        self.argv: list[str] = list(argv)
        self.output_dir: Path | None = output_dir
        self.result: TestResult = TestResult()
        self.reporter: Reporter | None = None
        self.last_class_name: str | None = None

        self._invoker: ProtectedInvoker = ProtectedInvoker(self.add_failure)
        self._method_runner: TestMethodRunner = TestMethodRunner(self, self._invoker)


    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start_suite(self) -> None:
        """
        Create a fresh result and reporter. No-op while a suite is running.
        """
        if self.result.suite_started:
            return
        result: TestResult = TestResult()
        reporter: Reporter = create_reporter(
            self.output_type,
            result,
            verbosity=self.verbosity,
            runner=self,
            output_dir=self.output_dir,
        )
        result.suite_started = True
        self.result = result
        self.reporter = reporter
        self.last_class_name = None
        self.reporter.start_suite()


    def start_class(self, class_name: str) -> None:
        self.result.current_class_name = class_name
        self._reporter.start_class(class_name)


    def enter_class(self, class_name: str) -> None:
        """
        Emit class boundaries when class_name differs from the previous test's.
        """
        if self.last_class_name == class_name:
            return
        if self.last_class_name is not None:
            self.end_class()
        self.start_class(class_name)
        self.last_class_name = class_name


    def start_test(self, test_name: str) -> None:
        self.result.start_test(test_name)
        self._reporter.start_test(test_name)


    def add_failure(self, message: str, stack_trace: str) -> None:
        """
        Record a failure of the running test.

        The failure count grows once per test, but the reporter sees every
        failing phase.
        """
        self.result.add_failure()
        self._reporter.add_failure(message, stack_trace)


    def end_test(self) -> None:
        self._reporter.end_test(self.result.current_test_has_failure)
        self.result.end_test()


    def end_class(self) -> None:
        self._reporter.end_class()


    def end_suite(self) -> int:
        """
        Finish the suite.

        Returns
        -------
        int
            Number of failed tests
        """
        self.result.suite_started = False
        self.last_class_name = None
        return self._reporter.end_suite()


    def abort_suite(self) -> None:
        """
        Give up the running suite after an exception escaped it.

        Files opened by the reporter are closed; no summary is printed.
        """
        self.result.suite_started = False
        self.last_class_name = None
        if self.reporter is not None:
            self.reporter.close()


    @property
    def _reporter(self) -> Reporter:
        if self.reporter is None:
            raise ConfigurationError("Suite not started")
        return self.reporter


    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, name: str, instance: Any = None) -> list[TestTarget]:
        """
        Turn a requested name into the tests it designates.

        Parameters
        ----------
        name : str
            "Class:method", a class name or a function name
        instance : Any, optional
            Class, object or function to use instead of a registry lookup

        Returns
        -------
        list[TestTarget]
            Tests to run, in order

        Raises
        ------
        ConfigurationError
            If the name cannot be resolved
        """
        if not name:
            raise ConfigurationError("Name is required!")

        separator: str = TestMethodRunner.SEPARATOR
        if separator in name:
            class_name, method_name = name.split(separator, 1)
            target: Any = instance if instance is not None else self.registry.lookup(class_name)
            if target is None:
                raise ConfigurationError(f"No such class: {class_name}")
            if inspect.isroutine(target):
                raise ConfigurationError("Instance must be a class or an object")

            fixture_class: type = target if inspect.isclass(target) else type(target)
            method: Any = getattr(fixture_class, method_name, None)
            if method is None:
                raise ConfigurationError(
                    f"Could not find method in class {class_name} for method {method_name}"
                )
            return [
                TestTarget(class_name, method_name, method, self._instance_factory(target, class_name))
            ]

        target = instance if instance is not None else self.registry.lookup(name)
        if target is None:
            raise ConfigurationError(f"No such variable: {name}")

        if inspect.isclass(target) or not callable(target):
            if isinstance(target, (str, bytes, int, float, bool)):
                raise ConfigurationError("Instance must be function or class")
            fixture_class = target if inspect.isclass(target) else type(target)
            make_instance: Callable[[], Any] = self._instance_factory(target, name)
            return [
                TestTarget(name, member_name, member, make_instance)
                for member_name, member in sorted_members(fixture_class)
                if member_name.startswith(self.TEST_METHOD_PREFIX) and callable(member)
            ]

        return [TestTarget(None, name, target)]


    @staticmethod
    def _instance_factory(target: Any, class_name: str) -> Callable[[], Any]:
        """
        Returns a callable giving the fixture instance for each test.

        A class is instantiated anew for every test; an object is reused.
        Classes whose constructor needs arguments are rejected here, before
        any test runs.
        """
        if not inspect.isclass(target):
            return lambda: target

        try:
            inspect.signature(target).bind()
        except TypeError as e:
            raise ConfigurationError(f"Cannot instantiate {class_name}: {e}") from e
        except ValueError:
            # No signature available (builtin or extension type)
            pass
        return target


    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def run_target(self, target: TestTarget) -> bool:
        """
        Run one resolved test.

        Returns
        -------
        bool
            True if the test passed
        """
        instance: Any = target.make_instance() if target.make_instance is not None else None
        return self._method_runner.run(
            target.class_name, target.method_name, instance, target.method
        )


    def run_some_test(self, name: str, instance: Any = None) -> None:
        """
        Run a test class, a test method or a test function.

        The suite is started if needed. Examples::

            runner.run_some_test("TestToto")
            runner.run_some_test("TestToto:testTiti")
            runner.run_some_test("testFunction", test_function)

        Parameters
        ----------
        name : str
            "Class:method", a class name or a function name
        instance : Any, optional
            Object to run instead of looking name up in the registry
        """
        self.start_suite()
        for target in self.resolve(name, instance):
            self.run_target(target)


    def test_names(self, names: Iterable[str] = ()) -> list[str]:
        """
        Names to run: the given ones, else argv, else the registered tests.
        """
        requested: list[str] = list(names)
        if not requested:
            requested = list(self.argv)
        if not requested:
            requested = self.registry.names()
        return requested


    def run_suite(self, *names: str) -> int:
        """
        Run the named tests as one suite.

        Parameters
        ----------
        *names : str
            Tests to run; when empty, argv then the registry are used

        Returns
        -------
        int
            Number of failed tests

        Raises
        ------
        ConfigurationError
            If a name cannot be resolved

        Any exception escaping the suite aborts it before propagating.
        """
        self.start_suite()
        try:
            for name in self.test_names(names):
                self.run_some_test(name)
        except BaseException:
            self.abort_suite()
            raise

        if self.last_class_name is not None:
            self.end_class()
        return self.end_suite()


def run(
    *names: str,
    output_type: "ReporterType | str | type[Reporter] | None" = None,
    verbosity: int | None = None,
    argv: Iterable[str] | None = None,
    registry: TestRegistry | None = None,
    output_dir: Path | None = None,
) -> int:
    """
    Run tests with settings taken from the environment when not given.

    Parameters
    ----------
    *names : str
        Tests to run
    output_type : ReporterType | str | type[Reporter] | None, optional
        Reporter, by default $TINYUNIT_OUTPUT or TEXT
    verbosity : int | None, optional
        Verbosity, by default $TINYUNIT_VERBOSITY or DEFAULT_VERBOSITY
    argv : Iterable[str] | None, optional
        Fallback names, by default the command line arguments
    registry : TestRegistry | None, optional
        Registry to look names up in, by default the default registry
    output_dir : Path | None, optional
        Directory for file based reporters

    Returns
    -------
    int
        Number of failed tests
    """
    if output_type is None:
        output_type = output_type_from_env() or ReporterType.TEXT
    if verbosity is None:
        verbosity = verbosity_from_env()
    if argv is None:
        argv = sys.argv[1:]

    runner: SuiteRunner = SuiteRunner(
        output_type=output_type,
        verbosity=verbosity,
        registry=registry,
        argv=argv,
        output_dir=output_dir,
    )
    return runner.run_suite(*names)
