"""
Exceptions raised by tinyunit.
"""


class ConfigurationError(Exception):
    """
    Usage mistake that aborts a run: unknown name, non callable target,
    unknown reporter type.
    """


class TestFailure(AssertionError):
    """
    Failure signal raised from test code.

    Attributes
    ----------
    message : str
        Description of the failure
    """
    __test__ = False
    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message: str = message


def fail(message: str = "") -> None:
    """
    Fails the running test with a message.

    Parameters
    ----------
    message : str, optional
        Description of the failure, by default ""

    Raises
    ------
    TestFailure
        Always
    """
    raise TestFailure(message)
