"""
Module providing exit status enum.
"""
from enum import Enum


class ExitStatus(Enum):
    """
    Enum of exit status
    """
    SUCCESS = 0
    ERROR = 1

    @classmethod
    def from_failures(cls, failure_count: int) -> "ExitStatus":
        """
        Maps the failure count of a suite run to an exit status.

        Parameters
        ----------
        failure_count : int
            Number of failed tests returned by the suite run

        Returns
        -------
        ExitStatus
            SUCCESS when no test failed, ERROR otherwise
        """
        return cls.SUCCESS if failure_count == 0 else cls.ERROR
