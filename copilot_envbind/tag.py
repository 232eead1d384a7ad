# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Field annotation (tag) parsing.

A tag is a comma-separated string whose first part is the explicit key name,
followed by keywords and ``key=value`` options::

    "PORT,required"
    ",default=8080"
    "ORIGINS,default=a.example b.example"
    "HEADERS,default=Content-Type|Authorization,sep=|"
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .exceptions import UnknownTagPartError

logger = logging.getLogger(__name__)

DEFAULT_VALUE_SEPARATOR = " "

_REQUIRED_KEYWORDS = ("required", "require", "req")
_SKIP_KEYWORDS = ("skip_on_no_value", "snv")
_SEPARATOR_KEYS = ("separator", "sep", "dsep")


@dataclass(frozen=True)
class TagDescriptor:
    """Parsed form of a field annotation.

    Attributes:
        name: Explicit key name ("" when the key should be inferred)
        default: Default value string, or None when no default was given
        required: Fail the bind when no value and no default exist
        skip_on_no_value: Leave the field unset when no value and no default exist
        default_separator: Separator used to split a default into sequence items
    """
    name: str = ""
    default: Optional[str] = None
    required: bool = False
    skip_on_no_value: bool = False
    default_separator: str = DEFAULT_VALUE_SEPARATOR

    @property
    def has_default(self) -> bool:
        return self.default is not None

    def encode(self) -> str:
        """Render the descriptor back into tag form.

        ``skip_on_no_value`` is not emitted.
        """
        parts = [self.name]
        if self.required:
            parts.append("required")
        if self.default is not None:
            parts.append(f"default={self.default}")
        parts.append(f"separator={self.default_separator}")
        return ",".join(parts)


def parse_tag(tag: str) -> TagDescriptor:
    """Parse a field annotation into a TagDescriptor.

    Args:
        tag: Annotation string

    Returns:
        Parsed descriptor; an empty tag yields the all-default descriptor

    Raises:
        UnknownTagPartError: If a ``key=value`` part uses an unrecognized key
    """
    if not tag:
        return TagDescriptor()

    parts = tag.split(",")
    name = parts[0]
    default: Optional[str] = None
    required = False
    skip_on_no_value = False
    default_separator = DEFAULT_VALUE_SEPARATOR

    for part in parts[1:]:
        if part in _REQUIRED_KEYWORDS:
            required = True
            continue
        if part in _SKIP_KEYWORDS:
            skip_on_no_value = True
            continue

        key, sep, value = part.partition("=")
        if not sep:
            logger.debug("Ignoring tag keyword %r in %r", part, tag)
            continue

        if key == "default":
            default = value
        elif key in _SEPARATOR_KEYS:
            default_separator = value
        else:
            raise UnknownTagPartError(part=part, tag_name=name, tag_value=tag)

    return TagDescriptor(
        name=name,
        default=default,
        required=required,
        skip_on_no_value=skip_on_no_value,
        default_separator=default_separator,
    )
