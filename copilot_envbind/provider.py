# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Environment value providers."""

import os
from abc import ABC, abstractmethod
from typing import Mapping, Optional


class EnvProvider(ABC):
    """Abstract base class for environment value providers."""

    @abstractmethod
    def lookup(self, key: str) -> Optional[str]:
        """Look up an environment value.

        Args:
            key: Resolved environment key

        Returns:
            The value, or None if the key is not set
        """
        raise NotImplementedError


class EnvironProvider(EnvProvider):
    """Provider that reads from the process environment (or any mapping)."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._environ = environ if environ is not None else os.environ

    def lookup(self, key: str) -> Optional[str]:
        return self._environ.get(key)


class StaticEnvProvider(EnvProvider):
    """Provider with static values (useful for tests)."""

    def __init__(self, values: Optional[dict[str, str]] = None):
        self._values = dict(values) if values is not None else {}

    def lookup(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


def create_env_provider(provider_type: Optional[str] = None, **kwargs) -> EnvProvider:
    """Create an environment value provider by type.

    Args:
        provider_type: Type of provider (required). Options: "environ", "static"
        **kwargs: Provider arguments ("environ" for environ, "values" for static)

    Returns:
        EnvProvider instance

    Raises:
        ValueError: If provider_type is missing or unknown
    """
    if not provider_type:
        raise ValueError(
            "provider_type parameter is required. "
            "Must be one of: environ, static"
        )

    provider_type = provider_type.lower()

    if provider_type in ("environ", "env"):
        return EnvironProvider(**kwargs)
    if provider_type == "static":
        return StaticEnvProvider(**kwargs)

    raise ValueError(
        f"Unknown provider_type: {provider_type}. "
        f"Must be one of: environ, static"
    )
