# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Exceptions for environment binding."""


class EnvBindError(Exception):
    """Base exception for environment binding errors."""
    pass


class UnsupportedTypeError(EnvBindError):
    """Raised when a destination type has no conversion rule."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"unsupported type: {type_name}")


class RequiredFieldError(EnvBindError):
    """Raised when a required variable is absent and has no default.

    Attributes:
        field: Fully resolved environment key, including any prefix
    """

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"required field: {field}")


class BindError(EnvBindError):
    """Raised when a resolved value cannot be converted to its destination type.

    Attributes:
        field: Resolved environment key
        type_name: Name of the destination type
        err: Underlying conversion error
    """

    def __init__(self, field: str, type_name: str, err: Exception):
        self.field = field
        self.type_name = type_name
        self.err = err
        super().__init__(f"field {field!r} ({type_name}): {err}")


class UnknownTagPartError(EnvBindError):
    """Raised when an annotation contains an unrecognized ``key=value`` part."""

    def __init__(self, part: str, tag_name: str, tag_value: str):
        self.part = part
        self.tag_name = tag_name
        self.tag_value = tag_value
        super().__init__(
            f"unknown tag part {part!r} in tag {tag_name!r} with value {tag_value!r}"
        )


class InvalidTagError(EnvBindError):
    """Raised when an extra annotation part is not in ``key=value`` form."""

    def __init__(self, part: str):
        self.part = part
        super().__init__(f"invalid tag {part!r}")
