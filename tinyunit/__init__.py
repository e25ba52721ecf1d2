"""
tinyunit - Minimal unit testing framework.

Test functions and classes are registered explicitly, run with each
setUp / test / tearDown phase isolated, and reported as text, TAP,
JUnit XML, or not at all.
"""

__version__ = "0.1.0"

from tinyunit.errors import ConfigurationError, TestFailure, fail
from tinyunit.fixture import TestFixture
from tinyunit.registry import TestRegistry, default_registry, register
from tinyunit.reporter import NullReporter, Reporter
from tinyunit.reporter_type import ReporterType
from tinyunit.suite_runner import SuiteRunner, run

__all__ = [
    "ConfigurationError",
    "TestFailure",
    "fail",
    "TestFixture",
    "TestRegistry",
    "default_registry",
    "register",
    "Reporter",
    "NullReporter",
    "ReporterType",
    "SuiteRunner",
    "run",
]
