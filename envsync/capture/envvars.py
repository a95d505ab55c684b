"""Environment variable capture with redaction of sensitive values."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping

from envsync.models.snapshot import REDACTED, EnvVarSet

SENSITIVE_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"api[_-]?key",
        r"secret",
        r"password",
        r"token",
        r"private[_-]?key",
        r"database[_-]?url",
        r"db[_-]?url",
        r"connection[_-]?string",
        r"auth",
        r"credential",
        r"access[_-]?key",
    )
)


def is_sensitive(key: str) -> bool:
    return any(pattern.search(key) for pattern in SENSITIVE_PATTERNS)


class EnvVarCollector:
    """Reads variables from *environ* (``os.environ`` by default); never writes."""

    name = "env_vars"

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        *,
        redact_sensitive: bool = True,
    ) -> None:
        self._environ = environ
        self.redact_sensitive = redact_sensitive

    def collect(self) -> EnvVarSet:
        environ = os.environ if self._environ is None else self._environ
        variables: dict[str, str] = {}
        redacted: list[str] = []
        for key, value in environ.items():
            if self.redact_sensitive and is_sensitive(key):
                variables[key] = REDACTED
                redacted.append(key)
            else:
                variables[key] = value
        return EnvVarSet(variables=variables, redacted=redacted)

    def default(self) -> EnvVarSet:
        return EnvVarSet()
