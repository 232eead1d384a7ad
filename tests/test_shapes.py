# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tests for shape classification and field description."""

from dataclasses import MISSING, dataclass, field
from datetime import datetime, timedelta
from enum import IntEnum
from typing import Annotated, NewType, Optional, Union

import pytest

from copilot_envbind import FieldDescriptor, ShapeKind, Unsigned, classify, describe_fields, env_field
from copilot_envbind.fields import zero_value
from copilot_envbind.shapes import sequence_factory, type_name

Port = NewType("Port", int)


class Level(IntEnum):
    LOW = 1
    HIGH = 2


class Token:
    def __init__(self, raw):
        self.raw = raw

    @classmethod
    def unmarshal_string(cls, value):
        return cls(value)


class Blob:
    def __init__(self, data):
        self.data = data

    @classmethod
    def unmarshal_text(cls, data):
        return cls(data)


@dataclass
class Endpoint:
    host: str = env_field(",default=localhost")
    port: int = env_field(",default=80")


@dataclass
class HookedEndpoint:
    host: str = ""

    @classmethod
    def unmarshal_string(cls, value):
        return cls(host=value)


@dataclass
class Described:
    name: str = env_field("NAME,required")
    ratio: float = env_field(time_format="unix")
    retries: int = 3
    tags: list[str] = field(default_factory=list)
    computed: str = field(default="", init=False)
    _private: str = ""


@dataclass
class Zeroed:
    count: int
    label: str
    items: list[int]
    pair: tuple[int, str]
    nested: Endpoint
    maybe: Optional[int]
    with_default: int = 7


class TestClassify:
    """Tests for classify."""

    @pytest.mark.parametrize(
        "tp,kind",
        [
            (int, ShapeKind.INT),
            (bool, ShapeKind.BOOL),
            (float, ShapeKind.FLOAT),
            (str, ShapeKind.STRING),
            (Unsigned, ShapeKind.UINT),
            (Level, ShapeKind.INT),
            (datetime, ShapeKind.TIME),
            (timedelta, ShapeKind.DURATION),
            (Endpoint, ShapeKind.STRUCT),
            (Token, ShapeKind.STRING_UNMARSHALER),
            (Blob, ShapeKind.TEXT_UNMARSHALER),
            (HookedEndpoint, ShapeKind.STRING_UNMARSHALER),
            (Port, ShapeKind.INT),
            (Annotated[int, "meta"], ShapeKind.INT),
            (dict, ShapeKind.UNSUPPORTED),
            (dict[str, str], ShapeKind.UNSUPPORTED),
            (set[int], ShapeKind.UNSUPPORTED),
            (Union[int, str], ShapeKind.UNSUPPORTED),
            (Optional[Union[int, str]], ShapeKind.UNSUPPORTED),
            (bytes, ShapeKind.UNSUPPORTED),
        ],
    )
    def test_scalar_kinds(self, tp, kind):
        """Test classification of non-container types."""
        assert classify(tp).kind is kind

    def test_optional_is_pointer(self):
        """Test that Optional types classify as pointers to their member."""
        for tp in (Optional[int], int | None):
            shape = classify(tp)

            assert shape.kind is ShapeKind.POINTER
            assert shape.element.kind is ShapeKind.INT

    def test_list_is_sequence(self):
        """Test that lists classify as sequences."""
        shape = classify(list[int])

        assert shape.kind is ShapeKind.SEQUENCE
        assert shape.element.kind is ShapeKind.INT
        assert sequence_factory(shape) is list

    def test_bare_list_holds_strings(self):
        """Test that an unparameterized list holds strings."""
        assert classify(list).element.kind is ShapeKind.STRING

    def test_variadic_tuple_is_sequence(self):
        """Test that tuple[X, ...] classifies as a tuple-backed sequence."""
        shape = classify(tuple[float, ...])

        assert shape.kind is ShapeKind.SEQUENCE
        assert shape.element.kind is ShapeKind.FLOAT
        assert sequence_factory(shape) is tuple

    def test_fixed_tuple(self):
        """Test that fixed tuples keep one shape per position."""
        shape = classify(tuple[int, str, bool])

        assert shape.kind is ShapeKind.FIXED_ARRAY
        assert [element.kind for element in shape.elements] == [
            ShapeKind.INT,
            ShapeKind.STRING,
            ShapeKind.BOOL,
        ]

    def test_empty_tuple(self):
        """Test the zero-length tuple annotation."""
        shape = classify(tuple[()])

        assert shape.kind is ShapeKind.FIXED_ARRAY
        assert shape.elements == ()

    def test_nested_containers(self):
        """Test classification of containers of optionals."""
        shape = classify(list[Optional[Endpoint]])

        assert shape.element.kind is ShapeKind.POINTER
        assert shape.element.element.kind is ShapeKind.STRUCT


class TestTypeName:
    """Tests for type_name."""

    def test_plain_class(self):
        """Test that plain classes use their qualified name."""
        assert type_name(int) == "int"
        assert type_name(Endpoint) == "Endpoint"

    def test_generic_alias(self):
        """Test that generic annotations drop the typing module prefix."""
        assert type_name(list[int]) == "list[int]"
        assert type_name(Optional[int]) == "Optional[int]"


class TestDescribeFields:
    """Tests for describe_fields."""

    def test_skips_non_init_and_private_fields(self):
        """Test that only bindable fields are described, in order."""
        names = [descriptor.name for descriptor in describe_fields(Described)]

        assert names == ["name", "ratio", "retries", "tags"]

    def test_carries_metadata_and_defaults(self):
        """Test that annotations and declared defaults are captured."""
        name, ratio, retries, tags = describe_fields(Described)

        assert name.tags == {"env": "NAME,required"}
        assert name.has_default is False
        assert ratio.tags == {"time_format": "unix"}
        assert retries.default == 3
        assert retries.has_default is True
        assert tags.default is MISSING
        assert tags.has_default is True
        assert tags.shape.kind is ShapeKind.SEQUENCE

    def test_unset_value(self):
        """Test the fallback chain of an unset field."""
        name, _, retries, tags = describe_fields(Described)

        assert name.unset_value() == ""
        assert retries.unset_value() == 3
        assert tags.unset_value() == []
        assert tags.unset_value() is not tags.unset_value()

    def test_rejects_non_dataclass(self):
        """Test that plain classes cannot be described."""
        with pytest.raises(TypeError):
            describe_fields(Token)


class TestEnvField:
    """Tests for env_field."""

    def test_metadata(self):
        """Test that annotations are stored as field metadata."""
        dc_field = env_field(
            "DEADLINE,required",
            time_format="%Y-%m-%d",
            time_utc=True,
            time_location="Europe/Oslo",
        )

        assert dict(dc_field.metadata) == {
            "env": "DEADLINE,required",
            "time_format": "%Y-%m-%d",
            "time_utc": "true",
            "time_location": "Europe/Oslo",
        }

    def test_custom_key_and_extra_metadata(self):
        """Test storing the tag under another annotation key."""
        dc_field = env_field("HOST", key="cfg", metadata={"doc": "host name"}, default="x")

        assert dict(dc_field.metadata) == {"doc": "host name", "cfg": "HOST"}
        assert dc_field.default == "x"

    def test_no_tag(self):
        """Test that omitting the tag stores no binding annotation."""
        assert dict(env_field(time_utc=False).metadata) == {"time_utc": "false"}


class TestZeroValue:
    """Tests for zero_value."""

    def test_struct_zero(self):
        """Test the recursive zero value of a dataclass."""
        zero = zero_value(classify(Zeroed))

        assert zero == Zeroed(
            count=0,
            label="",
            items=[],
            pair=(0, ""),
            nested=Endpoint(host="", port=0),
            maybe=None,
        )
        assert zero.with_default == 7

    def test_scalar_zeros(self):
        """Test zero values of scalar kinds."""
        assert zero_value(classify(bool)) is False
        assert zero_value(classify(timedelta)) == timedelta(0)
        assert zero_value(classify(datetime)) == datetime.min
        assert zero_value(classify(tuple[str, ...])) == ()
        assert zero_value(classify(dict)) is None

    def test_descriptor_defaults(self):
        """Test a descriptor built without dataclass defaults."""
        descriptor = FieldDescriptor(name="port", shape=classify(int))

        assert descriptor.tags == {}
        assert descriptor.default is MISSING
        assert descriptor.default_factory is MISSING
        assert descriptor.has_default is False
        assert descriptor.unset_value() == 0
