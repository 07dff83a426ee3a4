"""Type conversion registry."""

import logging
import threading
from collections.abc import Hashable, Iterator, Mapping
from typing import Any, Callable

from .conversions import BUILTIN_CONVERSIONS, Conversion
from .errors import InvalidRegistration

__all__ = ["ConversionRegistry", "registry"]

log = logging.getLogger(__name__)

Converter = Callable[[Any], Any]


class ConversionRegistry(Mapping):
    """A mapping of type keys to converters.

    Keys are any hashable value and are compared by equality, so `int`,
    "builtins.int" and "int" are three unrelated entries.  Registering a
    key twice replaces the earlier converter.  All access is guarded by a
    lock, so one registry may be shared between threads.
    """

    def __init__(self, conversions: Mapping[Any, Converter] | None = None):
        self._lock = threading.Lock()
        self._conversions: dict[Any, Converter] = {}
        if conversions:
            for key, converter in conversions.items():
                self.register(key, converter)

    @classmethod
    def with_builtins(cls) -> "ConversionRegistry":
        """A registry holding every built-in conversion under all its keys."""
        instance = cls()
        instance.register_conversions(*BUILTIN_CONVERSIONS)
        return instance

    def register(self, key: Any, converter: Converter) -> None:
        """Store converter under key, replacing any existing entry.

        Raises:
            InvalidRegistration: key is None or unhashable, or converter is
                not callable.
        """
        if key is None:
            raise InvalidRegistration("Conversion key must not be None")
        if not isinstance(key, Hashable):
            raise InvalidRegistration(
                f"Conversion key must be hashable: {key!r}", value=key
            )
        if not callable(converter):
            raise InvalidRegistration(
                f"Conversion for {key!r} is not callable: {converter!r}",
                value=converter,
                target=key,
            )
        with self._lock:
            previous = self._conversions.get(key)
            self._conversions[key] = converter
        if previous is not None and previous is not converter:
            log.debug("Replaced conversion for %r: %r -> %r", key, previous, converter)

    def register_conversions(self, *conversions: Conversion) -> None:
        """Register each conversion under every one of its `type_keys`."""
        for conversion in conversions:
            if not conversion.type_keys:
                raise InvalidRegistration(
                    f"{conversion!r} declares no type keys", value=conversion
                )
            for key in conversion.type_keys:
                self.register(key, conversion)

    def lookup(self, key: Any) -> Converter | None:
        """The converter for key, None when there is none."""
        if not isinstance(key, Hashable):
            return None
        with self._lock:
            return self._conversions.get(key)

    def conversions(self) -> dict[Any, Converter]:
        """A snapshot of every entry.  Iteration order is not meaningful."""
        with self._lock:
            return dict(self._conversions)

    def copy(self) -> "ConversionRegistry":
        return type(self)(self.conversions())

    def __getitem__(self, key: Any) -> Converter:
        converter = self.lookup(key)
        if converter is None:
            raise KeyError(key)
        return converter

    def __iter__(self) -> Iterator[Any]:
        return iter(self.conversions())

    def __len__(self) -> int:
        with self._lock:
            return len(self._conversions)

    def __repr__(self):
        return f"<{type(self).__name__} with {len(self)} conversions>"


registry = ConversionRegistry.with_builtins()
