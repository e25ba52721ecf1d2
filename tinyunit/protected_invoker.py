"""
Failure isolating invocation of test code.
"""

import traceback
from typing import Any, Callable

from tinyunit.errors import ConfigurationError, TestFailure
from tinyunit.test_result import Failure


class ProtectedInvoker:
    """
    Calls one piece of test code and turns a raised exception into a Failure.

    KeyboardInterrupt and SystemExit are not caught.

    Parameters
    ----------
    on_failure : Callable[[str, str], None] | None
        Called with (message, stack_trace) as soon as a failure is caught
    """
    def __init__(self, on_failure: Callable[[str, str], None] | None = None) -> None:
        self._on_failure: Callable[[str, str], None] | None = on_failure


    def invoke(self, receiver: Any, func: Any) -> Failure | None:
        """
        Run func, with receiver as first argument unless it is None.

        Parameters
        ----------
        receiver : Any
            Fixture instance for method calls, None for plain functions
        func : Any
            The callable to run

        Returns
        -------
        Failure | None
            The caught failure, or None on success

        Raises
        ------
        ConfigurationError
            If func is not callable
        """
        if not callable(func):
            raise ConfigurationError(
                f"{func!r} must be callable, not {type(func).__name__}"
            )

        try:
            if receiver is not None:
                func(receiver)
            else:
                func()
        except Exception as e:
            failure: Failure = self.make_failure(e)
            if self._on_failure is not None:
                self._on_failure(failure.message, failure.stack_trace)
            return failure
        return None


    @staticmethod
    def make_failure(error: BaseException) -> Failure:
        """
        Build a Failure from a caught exception.

        The first traceback entry is the frame of invoke itself and is
        dropped so the trace starts at the test code.

        Parameters
        ----------
        error : BaseException
            Exception raised by the test code

        Returns
        -------
        Failure
            Message and formatted stack trace
        """
        if isinstance(error, TestFailure):
            message: str = error.message
        else:
            message = traceback.format_exception_only(type(error), error)[-1].rstrip("\n")

        tb = error.__traceback__
        if tb is not None and tb.tb_next is not None:
            tb = tb.tb_next
        stack_trace: str = "".join(
            ["Traceback (most recent call last):\n"] + traceback.format_tb(tb)
        ).rstrip("\n")
        return Failure(message, stack_trace)
