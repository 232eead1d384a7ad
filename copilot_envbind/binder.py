# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Binding engine: populates typed destinations from environment values."""

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Mapping, Optional, TypeVar

from .converters import (
    TimeOptions,
    parse_bool,
    parse_duration,
    parse_float,
    parse_int,
    parse_time,
    parse_uint,
)
from .exceptions import BindError, RequiredFieldError, UnsupportedTypeError
from .fields import FieldDescriptor, describe_fields, zero_value
from .formatting import format_key
from .params import DEFAULT_BIND_PARAMS, BindParams
from .provider import EnvironProvider, EnvProvider
from .shapes import Shape, ShapeKind, classify, sequence_factory
from .tag import TagDescriptor, parse_tag

logger = logging.getLogger(__name__)

T = TypeVar("T")

SKIP_TAG = "-"

_UNSET = object()

_SCALAR_PARSERS: dict[ShapeKind, Callable[[str], Any]] = {
    ShapeKind.DURATION: parse_duration,
    ShapeKind.INT: parse_int,
    ShapeKind.UINT: parse_uint,
    ShapeKind.FLOAT: parse_float,
    ShapeKind.BOOL: parse_bool,
}
_NUMERIC_KINDS = (ShapeKind.INT, ShapeKind.UINT, ShapeKind.FLOAT)


@dataclass(frozen=True)
class _Resolution:
    """Lookup context of a field, shared by its elements and pointee."""
    key: str
    field: FieldDescriptor
    tag: TagDescriptor
    from_default: bool


class Binder:
    """Binds environment values into dataclasses and single values.

    A Binder holds only immutable parameters and a provider reference, so one
    instance can serve any number of bind calls.

    Example:
        >>> @dataclass
        ... class Config:
        ...     host: str = env_field("HOST,required")
        ...     port: int = env_field(",default=8080")
        >>> params = DEFAULT_BIND_PARAMS.with_options(with_prefix("API"))
        >>> config = Binder(params).bind(Config)
    """

    def __init__(
        self,
        params: Optional[BindParams] = None,
        provider: Optional[EnvProvider] = None,
    ):
        """Initialize the binder.

        Args:
            params: Binding parameters (defaults to DEFAULT_BIND_PARAMS)
            provider: Environment value provider (defaults to the process environment)
        """
        self.params = params or DEFAULT_BIND_PARAMS
        self.provider = provider or EnvironProvider()

    def bind(self, cls: type[T]) -> T:
        """Create and populate an instance of ``cls``.

        Args:
            cls: Destination type, usually a dataclass

        Returns:
            Populated instance

        Raises:
            RequiredFieldError: If a required variable is missing
            BindError: If a value cannot be converted
            UnsupportedTypeError: If a field type has no conversion rule
            UnknownTagPartError: If a field annotation is malformed
        """
        return self.bind_field(FieldDescriptor(name="", shape=classify(cls)))

    def bind_value(self, tp: Any, tags: Mapping[str, str]) -> Any:
        """Bind a single value of type ``tp`` described by ``tags``.

        Args:
            tp: Destination type annotation (``int``, ``list[str]``, ``Optional[X]``...)
            tags: Annotations for the synthetic field, keyed like dataclass metadata

        Returns:
            Bound value
        """
        return self.bind_field(FieldDescriptor(name="", shape=classify(tp), tags=dict(tags)))

    def bind_field(self, field: FieldDescriptor) -> Any:
        """Bind a described field at the configured prefix."""
        value = self._resolve_field(field, self.params.prefix)
        if value is _UNSET:
            return field.unset_value()
        return value

    def _resolve_field(self, field: FieldDescriptor, prefix: str) -> Any:
        tag_value = field.tags.get(self.params.tag) or field.name
        if tag_value == SKIP_TAG:
            logger.debug("Skipping field %r tagged %r", field.name, SKIP_TAG)
            return _UNSET

        tag = parse_tag(tag_value)
        if not tag.name and self.params.auto_format_missing_keys:
            tag = replace(tag, name=format_key(field.name))
        logger.debug("Tag for %r: %s", field.name, tag)

        key = self._join_key(prefix, tag.name)
        raw = self.provider.lookup(key)

        if raw is None:
            logger.debug("Env key not found: %s", key)
            if not tag.has_default:
                if tag.required:
                    raise RequiredFieldError(field=key)
                if tag.skip_on_no_value:
                    logger.debug("Skipping %r: no value", key)
                    return _UNSET
        else:
            logger.debug("Found env key: %s", key)

        resolution = _Resolution(
            key=key,
            field=field,
            tag=tag,
            from_default=raw is None and tag.has_default,
        )
        if raw is None:
            raw = tag.default or ""
        return self._convert(field.shape, resolution, raw)

    def _join_key(self, prefix: str, name: str) -> str:
        if not name:
            return prefix
        if not prefix:
            return name
        return prefix + self.params.sep + name

    def _convert(self, shape: Shape, resolution: _Resolution, value: str) -> Any:
        kind = shape.kind

        if kind is ShapeKind.STRING_UNMARSHALER:
            return shape.type.unmarshal_string(value)
        if kind is ShapeKind.TEXT_UNMARSHALER:
            return shape.type.unmarshal_text(value.encode())
        if kind is ShapeKind.STRUCT:
            return self._bind_struct(shape.type, resolution.key)
        if kind in (ShapeKind.SEQUENCE, ShapeKind.FIXED_ARRAY):
            return self._bind_sequence(shape, resolution, value)
        if kind is ShapeKind.POINTER:
            # The pointee shares the field's key; indirection adds no prefix level.
            return self._convert(shape.element, resolution, value)
        if kind is ShapeKind.STRING and shape.type is str:
            return value

        if kind not in (ShapeKind.TIME, ShapeKind.STRING) and kind not in _SCALAR_PARSERS:
            raise UnsupportedTypeError(shape.type_name)

        try:
            if kind is ShapeKind.STRING:
                # str subclasses such as str-valued enums
                converted = shape.type(value)
            elif kind is ShapeKind.TIME:
                converted = parse_time(value, TimeOptions.from_tags(resolution.field.tags))
            else:
                converted = _SCALAR_PARSERS[kind](value)
            if kind in _NUMERIC_KINDS and type(converted) is not shape.type:
                # int subclasses such as Unsigned or IntEnum
                converted = shape.type(converted)
        except ValueError as exc:
            raise BindError(resolution.key, shape.type_name, exc) from exc
        return converted

    def _bind_sequence(self, shape: Shape, resolution: _Resolution, value: str) -> Any:
        if resolution.from_default:
            separator = resolution.tag.default_separator
        else:
            separator = self.params.arr_sep
        items = _split(value, separator)

        if shape.kind is ShapeKind.FIXED_ARRAY:
            if len(items) != len(shape.elements):
                raise BindError(
                    resolution.key,
                    shape.type_name,
                    ValueError(f"{items!r} is not a valid length for {shape.type_name}"),
                )
            return tuple(
                self._convert(element, resolution, item)
                for element, item in zip(shape.elements, items)
            )

        return sequence_factory(shape)(
            self._convert(shape.element, resolution, item) for item in items
        )

    def _bind_struct(self, cls: type, prefix: str) -> Any:
        kwargs = {}
        for field in describe_fields(cls):
            value = self._resolve_field(field, prefix)
            if value is _UNSET:
                if field.has_default:
                    continue
                value = zero_value(field.shape)
            kwargs[field.name] = value
        return cls(**kwargs)


def _split(value: str, separator: str) -> list[str]:
    if value == "":
        return []
    if separator == "":
        return list(value)
    return value.split(separator)
