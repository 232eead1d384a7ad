# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Field descriptions for dataclass destinations."""

import dataclasses
from dataclasses import MISSING, dataclass, field
from datetime import datetime, timedelta
from typing import Any, Mapping, Optional, get_type_hints

from .shapes import Shape, ShapeKind, Unsigned, classify, sequence_factory

DEFAULT_TAG_KEY = "env"

TIME_FORMAT_KEY = "time_format"
TIME_UTC_KEY = "time_utc"
TIME_LOCATION_KEY = "time_location"

_SCALAR_ZEROS: dict[ShapeKind, Any] = {
    ShapeKind.INT: 0,
    ShapeKind.UINT: Unsigned(0),
    ShapeKind.FLOAT: 0.0,
    ShapeKind.BOOL: False,
    ShapeKind.STRING: "",
    ShapeKind.TIME: datetime.min,
    ShapeKind.DURATION: timedelta(0),
}


@dataclass(frozen=True)
class FieldDescriptor:
    """A bindable field of a destination structure.

    Attributes:
        name: Field identifier (used to infer the key when the tag has no name)
        shape: Classified field type
        tags: Field annotations keyed by annotation name ("env", "time_format"...)
        default: Declared dataclass default, or MISSING
        default_factory: Declared dataclass default factory, or MISSING
    """
    name: str
    shape: Shape
    tags: Mapping[str, str] = field(default_factory=dict)
    default: Any = field(default_factory=lambda: MISSING)
    default_factory: Any = field(default_factory=lambda: MISSING)

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING or self.default_factory is not MISSING

    def unset_value(self) -> Any:
        """Value of the field when binding leaves it unset."""
        if self.default_factory is not MISSING:
            return self.default_factory()
        if self.default is not MISSING:
            return self.default
        return zero_value(self.shape)


def describe_fields(cls: type) -> list[FieldDescriptor]:
    """Describe the bindable fields of a dataclass, in declaration order.

    Fields excluded from ``__init__`` and fields whose name starts with an
    underscore are not bindable.
    """
    hints = get_type_hints(cls, include_extras=True)
    descriptors = []
    for dc_field in dataclasses.fields(cls):
        if not dc_field.init or dc_field.name.startswith("_"):
            continue
        descriptors.append(
            FieldDescriptor(
                name=dc_field.name,
                shape=classify(hints.get(dc_field.name, dc_field.type)),
                tags={str(k): str(v) for k, v in dc_field.metadata.items()},
                default=dc_field.default,
                default_factory=dc_field.default_factory,
            )
        )
    return descriptors


def zero_value(shape: Shape) -> Any:
    """Zero value for a shape: 0, "", False, empty containers, None..."""
    kind = shape.kind
    if kind in _SCALAR_ZEROS:
        return _SCALAR_ZEROS[kind]
    if kind is ShapeKind.SEQUENCE:
        return sequence_factory(shape)(())
    if kind is ShapeKind.FIXED_ARRAY:
        return tuple(zero_value(element) for element in shape.elements)
    if kind is ShapeKind.STRUCT:
        kwargs = {
            descriptor.name: zero_value(descriptor.shape)
            for descriptor in describe_fields(shape.type)
            if not descriptor.has_default
        }
        return shape.type(**kwargs)
    return None


def env_field(
    tag: Optional[str] = None,
    *,
    key: str = DEFAULT_TAG_KEY,
    time_format: Optional[str] = None,
    time_utc: Optional[bool] = None,
    time_location: Optional[str] = None,
    metadata: Optional[Mapping[str, Any]] = None,
    **kwargs: Any,
) -> Any:
    """Declare a dataclass field with binding annotations.

    Example:
        >>> @dataclass
        ... class Config:
        ...     port: int = env_field("PORT,default=8080")
        ...     deadline: datetime = env_field(",required", time_format="%Y-%m-%d")

    Args:
        tag: Binding tag stored under ``key``
        key: Annotation key the binder reads the tag from
        time_format: Layout for datetime fields ("rfc3339", "unix", "unixnano"
            or a ``strptime`` format)
        time_utc: Interpret zone-less datetimes as UTC
        time_location: IANA zone for zone-less datetimes (overrides time_utc)
        metadata: Extra field metadata
        **kwargs: Passed through to ``dataclasses.field``

    Returns:
        A ``dataclasses.Field`` carrying the annotations as metadata
    """
    annotations: dict[str, Any] = dict(metadata or {})
    if tag is not None:
        annotations[key] = tag
    if time_format is not None:
        annotations[TIME_FORMAT_KEY] = time_format
    if time_utc is not None:
        annotations[TIME_UTC_KEY] = "true" if time_utc else "false"
    if time_location is not None:
        annotations[TIME_LOCATION_KEY] = time_location
    return field(metadata=annotations, **kwargs)
