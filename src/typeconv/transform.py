"""Convert CSV text rows into values for a SQLAlchemy table.

Example:

    transform = TransformData(User.__table__)
    transform({"id": "7", "joined": "2024-01-15", "score": ""})
    {'id': 7, 'joined': datetime.date(2024, 1, 15), 'score': None}

    rows = transform_csv(User.__table__, Path("csv/user.csv"))
"""

import enum
import functools
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from sqlalchemy import BigInteger, Column, SmallInteger, Table
from sqlalchemy.types import NullType

from .conversions import Conversion, trim
from .converter import TypeConverter
from .dict_reader import LowerCaseDictReader
from .errors import ConversionError, ConversionNotFound
from .primitives import Int16, Int64

__all__ = ["ConvertCol", "EnumConversion", "TransformData", "transform_csv"]

log = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass
class ConvertCol:
    name: str
    nullable: bool
    type_key: Any
    from_str: Callable[[str], Any]

    def __call__(self, input: str) -> Any:
        if not input and self.nullable:
            return None
        value = self.from_str(input)
        if value is None and not self.nullable:
            raise ConversionError(
                f"{self.name} requires a value, got {input!r}",
                value=input,
                target=self.type_key,
            )
        return value


class TransformData:
    def __init__(
        self,
        table: Table,
        extra_converters: dict[Any, Callable] | None = None,
        converter: TypeConverter | None = None,
    ):
        """A transform for the fields in table.

        Args:
            table: from sqlalchemy
            extra_converters:
                A dict of additional converters.
                The dict key can be any of
                    fieldname: str, ie 'when_created'
                    type key: ie datetime.datetime, "sqldate", enum.Enum
            converter: supplies the conversions, the shared registry when
                omitted.  It is never modified.

        Raises:
            ConversionNotFound for a column type without a converter.
        """
        self.name: str = table.name
        self.columns: list[ConvertCol] = []

        base = converter or TypeConverter()
        self.converter = TypeConverter(base.registry.copy())
        extra_converters = extra_converters or {}
        column_names = {col.name for col in table.columns}
        for key, func in extra_converters.items():
            if key not in column_names:
                self.converter.register_conversion(key, func)

        for col in table.columns:
            # Convert by field name, type is irrelevant
            if col.name in extra_converters:
                type_key = None
                func = extra_converters[col.name]
            # Seen when type is subclass instance of TypeDecorators
            elif getattr(col.type, "_is_type_decorator", None):
                type_key = col.type.__class__
                func = functools.partial(col.type.process_result_value, dialect=None)
            else:
                type_key = self.get_type_key(col)
                func = self.get_converter(col, type_key)

            self.columns.append(ConvertCol(col.name, bool(col.nullable), type_key, func))
        log.debug("Transform for %s: %d columns", self.name, len(self.columns))

    def __len__(self) -> int:
        return len(self.columns)

    def __call__(self, input: dict[str, str]) -> dict[str, Any]:
        output = {}
        for column in self.columns:
            # Ignore Table fields not in CSV, they may not be required.
            if column.name in input:
                output[column.name] = column(input[column.name])
        return output

    def __iter__(self):
        return iter(self.columns)

    def __repr__(self):
        lines = [self.name]
        lines.extend(("  " + repr(_)) for _ in self.columns)
        return "\n".join(lines)

    @staticmethod
    def get_type_key(column: Column) -> Any:
        """The type key for a column's values.

        Integer widths follow the SQL type, everything else its python_type.
        """
        if isinstance(column.type, NullType) and column.foreign_keys:
            return int
        if isinstance(column.type, BigInteger):
            return Int64
        if isinstance(column.type, SmallInteger):
            return Int16
        try:
            return column.type.python_type
        except NotImplementedError:
            raise ConversionNotFound(column.type, column.name) from None

    def get_converter(self, column: Column, type_key: Any) -> Callable[[str], Any]:
        registry = self.converter.registry
        if type_key not in registry:
            if isinstance(type_key, type) and issubclass(type_key, enum.Enum):
                registry.register(type_key, EnumConversion(type_key))
            else:
                raise ConversionNotFound(type_key, column.name)
        return functools.partial(self.converter.convert, type_key)


class EnumConversion(Conversion):
    """Convert text to a member of an Enum or Flag class.

    Members match by name, case-insensitive, or by value.  Flag classes
    also accept an integer or names joined with '|', ie 'READ|WRITE'.
    """

    def __init__(self, enum_cls: type[enum.Enum]):
        self.enum_cls = enum_cls
        self.type_keys = (enum_cls,)

    def convert(self, value: Any) -> Any:
        if value is None or isinstance(value, self.enum_cls):
            return value
        text = trim(str(value))
        if not text:
            return None
        if issubclass(self.enum_cls, enum.Flag):
            return self.flag_from_text(text)
        return self.member_from_text(text)

    def member_from_text(self, text: str) -> enum.Enum:
        member = self.member_by_name(text)
        if member is not None:
            return member
        is_int = _INTEGER.fullmatch(text) is not None
        for member in self.enum_cls:
            if isinstance(member.value, str):
                if text.casefold() == member.value.casefold():
                    return member
            elif isinstance(member.value, int):
                if is_int and int(text) == member.value:
                    return member
            elif text == str(member.value):
                return member
        raise self.invalid(text)

    def flag_from_text(self, text: str) -> enum.Flag:
        if _INTEGER.fullmatch(text):
            try:
                return self.enum_cls(int(text))
            except ValueError as ex:
                raise self.invalid(text) from ex
        flags = self.enum_cls(0)
        for name in text.split("|"):
            member = self.member_by_name(name.strip())
            if member is None:
                raise self.invalid(text)
            flags |= member
        return flags

    def member_by_name(self, name: str) -> enum.Enum | None:
        folded = name.casefold()
        for member_name, member in self.enum_cls.__members__.items():
            if member_name.casefold() == folded:
                return member
        return None

    def invalid(self, text: str) -> ConversionError:
        return ConversionError(
            f"No conversion from {text!r} to {self.enum_cls.__name__}",
            value=text,
            target=self.enum_cls,
        )

    def __repr__(self):
        return f"<EnumConversion {self.enum_cls.__name__}>"


def transform_csv(
    table: Table, path: Path, converter: TypeConverter | None = None
) -> list[dict[str, Any]]:
    """Converted rows of a CSV file for table.

    Args:
        table: for mapping CSV data.
        path: of CSV file, headers match column names in any case.
        converter: supplies the conversions, see `TransformData`.

    Returns:
        List of dicts keyed by column name.

    Raises:
        ValueError: Converting CSV values to column types, with file and line.
    """
    data = []
    transform = TransformData(table, converter=converter)

    with open(path, newline="") as csv_file:
        reader = LowerCaseDictReader(csv_file)
        transform_column_names = {_.name for _ in transform}
        # CSV column headers should be in transform
        headers = set(reader.fieldnames or [])
        if unknown := headers.difference(transform_column_names):
            log.warning("%s has unexpected headers: %s", path.name, sorted(unknown))

        for row in reader:
            try:
                data.append(transform(row))
            except ValueError as ex:
                log.error("ERROR %s %s: %s", table.name, reader.line_num, ex)
                raise ValueError(f"{path.name}:{reader.line_num}  {ex}") from ex

    return data
