# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Environment key formatting."""


def format_key(name: str) -> str:
    """Format a field identifier as an environment variable key segment.

    Word boundaries are taken from letter case, so acronyms stay together:

    - "DBName" -> "DB_NAME"
    - "DB" -> "DB"
    - "AllowedOrigins" -> "ALLOWED_ORIGINS"
    - "UserID" -> "USER_ID"
    - "user_id" -> "USER_ID"

    Args:
        name: Field identifier

    Returns:
        Upper-case key segment, or "" for an empty identifier
    """
    if not name:
        return ""

    last = len(name) - 1
    result = [name[0]]
    for i in range(1, len(name)):
        char = name[i]
        if char.isupper() and (
            name[i - 1].islower() or (i < last and name[i + 1].islower())
        ):
            result.append("_")
        result.append(char)
    return "".join(result).upper()
