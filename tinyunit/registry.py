"""
Module providing the explicit registry tests are discovered from.
"""

import inspect
from types import ModuleType
from typing import Any, ClassVar

from tinyunit.errors import ConfigurationError


class TestRegistry:
    """
    Maps names to test functions, test classes and test objects.

    Attributes
    ----------
    TEST_PREFIX : str
        Prefix, compared case-insensitively, of names run when no name is
        requested explicitly
    """
    __test__ = False

    TEST_PREFIX: ClassVar[str] = "test"

    def __init__(self) -> None:
        self._entries: dict[str, Any] = {}


    def register(self, obj: Any = None, *, name: str | None = None) -> Any:
        """
        Register a test function, class or object.

        Can be called directly or used as a decorator, with or without
        arguments::

            @registry.register
            def test_something(): ...

            @registry.register(name="TestLegacy")
            class Legacy: ...

        Parameters
        ----------
        obj : Any, optional
            The object to register
        name : str | None, optional
            Registration name, by default obj.__name__

        Returns
        -------
        Any
            obj itself, or a decorator when obj is omitted

        Raises
        ------
        ConfigurationError
            If no name can be determined or the name is taken by another object
        """
        if obj is None:
            def decorator(target: Any) -> Any:
                return self.register(target, name=name)
            return decorator

        key: str | None = name if name is not None else getattr(obj, "__name__", None)
        if not key:
            raise ConfigurationError(f"Cannot determine a name for {obj!r}")
        if ":" in key:
            raise ConfigurationError(f"Test names cannot contain ':': {key}")
        existing: Any = self._entries.get(key)
        if existing is not None and existing is not obj:
            raise ConfigurationError(f"Name already registered: {key}")
        self._entries[key] = obj
        return obj


    def register_module(self, module: ModuleType) -> list[str]:
        """
        Register the test classes and functions defined in a module.

        Only public attributes whose name starts with the test prefix and
        whose __module__ is this module are taken, so imported helpers are
        left out.

        Parameters
        ----------
        module : ModuleType
            Imported module to scan

        Returns
        -------
        list[str]
            Names registered, sorted
        """
        registered: list[str] = []
        for attr_name, value in sorted(vars(module).items()):
            if not self.is_test_name(attr_name):
                continue
            if not (inspect.isclass(value) or callable(value)):
                continue
            if getattr(value, "__module__", None) != module.__name__:
                continue
            self.register(value, name=attr_name)
            registered.append(attr_name)
        return registered


    def lookup(self, name: str) -> Any:
        """
        Returns the object registered under name, or None.
        """
        return self._entries.get(name)


    def names(self) -> list[str]:
        """
        Returns the registered names starting with the test prefix, sorted.
        """
        return sorted(key for key in self._entries if self.is_test_name(key))


    def clear(self) -> None:
        self._entries.clear()


    @classmethod
    def is_test_name(cls, name: str) -> bool:
        return name[:len(cls.TEST_PREFIX)].lower() == cls.TEST_PREFIX


    def __contains__(self, name: object) -> bool:
        return name in self._entries


    def __len__(self) -> int:
        return len(self._entries)


default_registry: TestRegistry = TestRegistry()


def register(obj: Any = None, *, name: str | None = None) -> Any:
    """
    Register obj with the default registry. See TestRegistry.register.
    """
    return default_registry.register(obj, name=name)
