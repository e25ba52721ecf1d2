"""
A module providing functions for general purposes.
"""

from typing import Any, TypeVar, Iterable

T = TypeVar("T")


def deduplicate(input_list: Iterable[T]) -> list[T]:
    """
    Returns a list of unique elements while preserving original order.

    Parameters
    ----------
    input_list : Iterable[T]
        The sequence of elements to be filtered.
    
    Returns
    -------
    list[T]
        A new list with unique elements in their original order.
    """
    return list(dict.fromkeys(input_list))


def sorted_members(obj: Any) -> list[tuple[str, Any]]:
    """
    Returns the attributes of an object as (name, value) pairs sorted by name.

    Attributes raising on access are skipped.

    Parameters
    ----------
    obj : Any
        Class or object whose members are listed.

    Returns
    -------
    list[tuple[str, Any]]
        Members in lexicographic order of their names.
    """
    members: list[tuple[str, Any]] = []
    for name in sorted(dir(obj)):
        try:
            members.append((name, getattr(obj, name)))
        except AttributeError:
            continue
    return members


def prefix_lines(prefix: str, text: str) -> str:
    """
    Prepends a prefix to every line of a text.

    Parameters
    ----------
    prefix : str
        String inserted at the start of each line.
    text : str
        Text, possibly spanning several lines.

    Returns
    -------
    str
        The prefixed text.
    """
    return "\n".join(prefix + line for line in text.split("\n"))
