# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Bind entry points.

``bind`` and ``get`` raise on failure. The ``must_`` variants are meant for
application startup: they log the failure and exit the process.
"""

import logging
import sys
from dataclasses import replace
from typing import Any, Iterable, Optional, TypeVar

from .binder import Binder
from .exceptions import InvalidTagError
from .fields import DEFAULT_TAG_KEY
from .params import DEFAULT_BIND_PARAMS, BindOption
from .provider import EnvProvider
from .shapes import type_name

logger = logging.getLogger(__name__)

T = TypeVar("T")


def bind(cls: type[T], *opts: BindOption, provider: Optional[EnvProvider] = None) -> T:
    """Create an instance of ``cls`` populated from the environment.

    Args:
        cls: Destination dataclass
        *opts: Binding options (``with_prefix``, ``with_sep``...), applied in order
        provider: Environment value provider (defaults to the process environment)

    Returns:
        Populated instance

    Example:
        >>> @dataclass
        ... class Database:
        ...     host: str = env_field("HOST,required")
        ...     port: int = env_field(",default=5432")
        >>> db = bind(Database, with_prefix("DB"))
    """
    params = DEFAULT_BIND_PARAMS.with_options(*opts)
    return Binder(params, provider).bind(cls)


def must_bind(cls: type[T], *opts: BindOption, provider: Optional[EnvProvider] = None) -> T:
    """Like ``bind``, but exits the process on failure."""
    try:
        return bind(cls, *opts, provider=provider)
    except Exception as exc:
        logger.error("Failed to bind %s from environment: %s", type_name(cls), exc, exc_info=True)
        sys.exit(1)


def encode_tags(parts: Iterable[str]) -> dict[str, str]:
    """Turn ``key=value`` parts into a field annotation mapping.

    Later parts override earlier ones with the same key.

    Raises:
        InvalidTagError: If a part has no ``=``
    """
    tags = {}
    for part in parts:
        key, sep, value = part.partition("=")
        if not sep:
            raise InvalidTagError(part)
        tags[key] = value
    return tags


def bind_value(
    tp: Any,
    tag: str,
    *tags: str,
    provider: Optional[EnvProvider] = None,
) -> Any:
    """Bind a single value as if it were a field tagged with ``tag``.

    Args:
        tp: Destination type annotation (``int``, ``list[str]``, ``Optional[X]``...)
        tag: Binding tag, e.g. "PORT,default=8080,required"
        *tags: Extra annotations as ``key=value``, e.g. "time_format=%H:%M"
        provider: Environment value provider (defaults to the process environment)

    Returns:
        Bound value
    """
    annotations = encode_tags([*tags, f"{DEFAULT_TAG_KEY}={tag}"])
    params = replace(DEFAULT_BIND_PARAMS, tag=DEFAULT_TAG_KEY)
    return Binder(params, provider).bind_value(tp, annotations)


def get(tp: Any, tag: str, *tags: str, provider: Optional[EnvProvider] = None) -> Any:
    """Create and bind a single value; alias of ``bind_value``.

    Example:
        >>> max_connections = get(int, "MAX_CONNECTIONS,default=100")
    """
    return bind_value(tp, tag, *tags, provider=provider)


def must_get(tp: Any, tag: str, *tags: str, provider: Optional[EnvProvider] = None) -> Any:
    """Like ``get``, but exits the process on failure."""
    try:
        return get(tp, tag, *tags, provider=provider)
    except Exception as exc:
        logger.error("Failed to bind %r from environment: %s", tag, exc, exc_info=True)
        sys.exit(1)


def get_string(tag: str, *tags: str, provider: Optional[EnvProvider] = None) -> str:
    return must_get(str, tag, *tags, provider=provider)
