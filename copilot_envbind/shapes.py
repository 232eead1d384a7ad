# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Shape classification for binding destinations.

Every destination type is classified once into a ShapeKind, which selects
the conversion rule the binder applies to it.
"""

import dataclasses
import types
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Annotated, Any, Callable, Union, get_args, get_origin


class ShapeKind(Enum):
    """Conversion categories, in converter priority order."""
    STRING_UNMARSHALER = "string_unmarshaler"
    TEXT_UNMARSHALER = "text_unmarshaler"
    STRUCT = "struct"
    TIME = "time"
    DURATION = "duration"
    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    BOOL = "bool"
    STRING = "string"
    POINTER = "pointer"
    SEQUENCE = "sequence"
    FIXED_ARRAY = "fixed_array"
    UNSUPPORTED = "unsupported"


class Unsigned(int):
    """Integer type that only accepts non-negative values."""

    def __new__(cls, value: Any = 0):
        obj = super().__new__(cls, value)
        if obj < 0:
            raise ValueError(f"{cls.__name__} cannot be negative: {value!r}")
        return obj


@dataclass(frozen=True)
class Shape:
    """Classified destination type.

    Attributes:
        kind: Conversion category
        type: The annotated Python type
        elements: Element shapes (sequence item, tuple positions, optional pointee)
    """
    kind: ShapeKind
    type: Any
    elements: tuple["Shape", ...] = ()

    @property
    def element(self) -> "Shape":
        return self.elements[0]

    @property
    def type_name(self) -> str:
        return type_name(self.type)


def type_name(tp: Any) -> str:
    """Readable name of a type or type annotation."""
    if isinstance(tp, type) and get_origin(tp) is None:
        return tp.__qualname__
    return repr(tp).replace("typing.", "")


def sequence_factory(shape: Shape) -> Callable[[Any], Any]:
    """Container constructor (list or tuple) for a SEQUENCE shape."""
    origin = get_origin(shape.type) or shape.type
    return tuple if origin is tuple else list


def classify(tp: Any) -> Shape:
    """Classify a type annotation into a Shape.

    Args:
        tp: Type or type annotation (``int``, ``list[str]``, ``Optional[X]``...)

    Returns:
        Shape; types without a conversion rule get ShapeKind.UNSUPPORTED
    """
    origin = get_origin(tp)

    if origin is Annotated:
        return classify(get_args(tp)[0])

    if origin is Union or origin is types.UnionType:
        args = get_args(tp)
        members = [arg for arg in args if arg is not type(None)]
        if len(members) == 1 and len(args) == 2:
            return Shape(ShapeKind.POINTER, tp, (classify(members[0]),))
        return Shape(ShapeKind.UNSUPPORTED, tp)

    if origin is list:
        args = get_args(tp)
        return Shape(ShapeKind.SEQUENCE, tp, (classify(args[0] if args else str),))

    if origin is tuple:
        args = get_args(tp)
        if len(args) == 2 and args[1] is Ellipsis:
            return Shape(ShapeKind.SEQUENCE, tp, (classify(args[0]),))
        if args == ((),):
            args = ()
        return Shape(ShapeKind.FIXED_ARRAY, tp, tuple(classify(arg) for arg in args))

    if origin is not None:
        return Shape(ShapeKind.UNSUPPORTED, tp)

    supertype = getattr(tp, "__supertype__", None)
    if supertype is not None:
        return classify(supertype)

    if not isinstance(tp, type):
        return Shape(ShapeKind.UNSUPPORTED, tp)

    if tp is list or tp is tuple:
        return Shape(ShapeKind.SEQUENCE, tp, (classify(str),))
    if callable(getattr(tp, "unmarshal_string", None)):
        return Shape(ShapeKind.STRING_UNMARSHALER, tp)
    if callable(getattr(tp, "unmarshal_text", None)):
        return Shape(ShapeKind.TEXT_UNMARSHALER, tp)
    if dataclasses.is_dataclass(tp):
        return Shape(ShapeKind.STRUCT, tp)
    if issubclass(tp, datetime):
        return Shape(ShapeKind.TIME, tp)
    if issubclass(tp, timedelta):
        return Shape(ShapeKind.DURATION, tp)
    if issubclass(tp, bool):
        return Shape(ShapeKind.BOOL, tp)
    if issubclass(tp, Unsigned):
        return Shape(ShapeKind.UINT, tp)
    if issubclass(tp, int):
        return Shape(ShapeKind.INT, tp)
    if issubclass(tp, float):
        return Shape(ShapeKind.FLOAT, tp)
    if issubclass(tp, str):
        return Shape(ShapeKind.STRING, tp)

    return Shape(ShapeKind.UNSUPPORTED, tp)
