"""
Layered environment lookup for the Dragonpay settings.

Values come from the process environment, an optional ``.env`` file and
explicit overrides, in increasing order of precedence. Only the resulting
mapping is handed to :class:`dragonpay_payments.core.config.GatewayConfig`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, MutableMapping, Optional


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _parse_env_file(path: Path) -> Dict[str, str]:
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except FileNotFoundError:
        return {}

    values: Dict[str, str] = {}
    for raw_line in lines:
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        values[key.strip()] = _unquote(value.strip())
    return values


def load_env_file(
    path: str = ".env",
    *,
    environ: Optional[MutableMapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Copy the entries of ``path`` into ``environ`` without replacing keys that
    are already set, and return the merged mapping.
    """
    target: MutableMapping[str, str] = os.environ if environ is None else environ
    for key, value in _parse_env_file(Path(path)).items():
        target.setdefault(key, value)
    return dict(target)


@dataclass(frozen=True)
class GatewayEnvironment:
    variables: Mapping[str, str]

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = self.variables.get(key)
        if value is None or value == "":
            return default
        return value


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> GatewayEnvironment:
    """
    Merge ``base`` (default :data:`os.environ`), ``env_file`` and ``overrides``.

    ``env_file=None`` skips the file. Entries from the file never replace
    values already present in ``base``.
    """
    merged: Dict[str, str] = dict(os.environ if base is None else base)
    if env_file is not None:
        for key, value in _parse_env_file(Path(env_file)).items():
            merged.setdefault(key, value)
    merged.update(overrides or {})
    return GatewayEnvironment(variables=merged)
