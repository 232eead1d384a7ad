# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Binding parameters and options."""

from dataclasses import dataclass, replace
from typing import Callable

from .fields import DEFAULT_TAG_KEY


@dataclass(frozen=True)
class BindParams:
    """Parameters for a bind call.

    Attributes:
        prefix: Key prefix applied to every top-level field
        sep: Separator between key segments
        tag: Field metadata key holding the binding tag
        arr_sep: Separator for sequence values read from the environment
        auto_format_missing_keys: Infer a key from the field name when the tag has none
    """
    prefix: str = ""
    sep: str = "_"
    tag: str = DEFAULT_TAG_KEY
    arr_sep: str = ","
    auto_format_missing_keys: bool = True

    def with_options(self, *opts: "BindOption") -> "BindParams":
        """Return a copy with the options applied in order."""
        params = self
        for opt in opts:
            params = opt(params)
        return params


BindOption = Callable[[BindParams], BindParams]

DEFAULT_BIND_PARAMS = BindParams()


def with_prefix(prefix: str) -> BindOption:
    return lambda params: replace(params, prefix=prefix)


def with_sep(sep: str) -> BindOption:
    return lambda params: replace(params, sep=sep)


def with_tag(tag: str) -> BindOption:
    return lambda params: replace(params, tag=tag)


def with_arr_sep(arr_sep: str) -> BindOption:
    return lambda params: replace(params, arr_sep=arr_sep)


def with_auto_format_missing_keys(auto: bool) -> BindOption:
    return lambda params: replace(params, auto_format_missing_keys=auto)
