# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Copilot-for-Consensus Environment Binding Adapter.

Binds environment variables into typed dataclasses using per-field
annotations for key names, defaults, separators and requiredness.

Example:
    >>> from dataclasses import dataclass
    >>> from copilot_envbind import bind, env_field, with_prefix
    >>>
    >>> @dataclass
    ... class Cors:
    ...     allowed_origins: list[str] = env_field(",default=*")
    ...     allowed_headers: list[str] = env_field(",default=Content-Type|Authorization,sep=|")
    >>>
    >>> @dataclass
    ... class ApiConfig:
    ...     port: int = env_field("PORT,default=8080")
    ...     cors: Cors = env_field("CORS")
    >>>
    >>> config = bind(ApiConfig, with_prefix("API"))  # reads API_PORT, API_CORS_ALLOWED_ORIGINS...
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .api import bind, bind_value, encode_tags, get, get_string, must_bind, must_get
from .binder import Binder
from .converters import DEFAULT_TIME_FORMAT, TimeOptions, parse_bool, parse_duration, parse_time
from .exceptions import (
    BindError,
    EnvBindError,
    InvalidTagError,
    RequiredFieldError,
    UnknownTagPartError,
    UnsupportedTypeError,
)
from .fields import FieldDescriptor, describe_fields, env_field
from .formatting import format_key
from .loader import DEFAULT_LOAD_CONFIG, LoadConfig, load, must_load
from .params import (
    DEFAULT_BIND_PARAMS,
    BindOption,
    BindParams,
    with_arr_sep,
    with_auto_format_missing_keys,
    with_prefix,
    with_sep,
    with_tag,
)
from .provider import EnvironProvider, EnvProvider, StaticEnvProvider, create_env_provider
from .shapes import Shape, ShapeKind, Unsigned, classify
from .tag import DEFAULT_VALUE_SEPARATOR, TagDescriptor, parse_tag

__all__ = [
    # Version
    "__version__",
    # Entry points
    "bind",
    "must_bind",
    "get",
    "must_get",
    "get_string",
    "bind_value",
    "encode_tags",
    "Binder",
    # Parameters
    "BindParams",
    "BindOption",
    "DEFAULT_BIND_PARAMS",
    "with_prefix",
    "with_sep",
    "with_tag",
    "with_arr_sep",
    "with_auto_format_missing_keys",
    # Field declaration
    "env_field",
    "FieldDescriptor",
    "describe_fields",
    "Shape",
    "ShapeKind",
    "Unsigned",
    "classify",
    # Tags and keys
    "TagDescriptor",
    "parse_tag",
    "DEFAULT_VALUE_SEPARATOR",
    "format_key",
    # Conversion
    "TimeOptions",
    "DEFAULT_TIME_FORMAT",
    "parse_bool",
    "parse_duration",
    "parse_time",
    # Providers
    "EnvProvider",
    "EnvironProvider",
    "StaticEnvProvider",
    "create_env_provider",
    # Env files
    "LoadConfig",
    "DEFAULT_LOAD_CONFIG",
    "load",
    "must_load",
    # Exceptions
    "EnvBindError",
    "BindError",
    "RequiredFieldError",
    "UnsupportedTypeError",
    "UnknownTagPartError",
    "InvalidTagError",
]
