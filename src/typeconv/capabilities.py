"""Interfaces a value type implements to take part in its own conversion."""

from abc import ABC, abstractmethod
from typing import Any, Callable

__all__ = ["ConversionListener", "ConvertibleType"]


class ConvertibleType(ABC):
    """A value that supplies its own converter.

    When a value implements this interface the registry is never consulted
    for it.  Returning None means no conversion exists for `target_type_key`
    and the conversion fails with `ConversionNotFound`.
    """

    @abstractmethod
    def get_conversion(self, target_type_key: Any) -> Callable[[Any], Any] | None:
        """Return a converter for `target_type_key` or None."""


class ConversionListener(ABC):
    """A value that is told about its own conversion.

    `before_conversion` is called once before the converter runs, and the
    value returned from `after_conversion` replaces the converted result.
    """

    @abstractmethod
    def before_conversion(self, target_type_key: Any) -> None: ...

    @abstractmethod
    def after_conversion(self, target_type_key: Any, converted_value: Any) -> Any: ...
