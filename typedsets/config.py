"""Runtime settings, read from the environment (and a ``.env`` file).

  TYPEDSETS_LOG_LEVEL          logging level name (default ``WARNING``)
  TYPEDSETS_ALLOW_CONJECTURES  register unverified conjectures (default true)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .result import Err, Ok, Result

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"
    allow_conjectures: bool = True

    @classmethod
    def from_env(cls) -> Result[Settings, ValueError]:
        load_dotenv()
        level = os.getenv("TYPEDSETS_LOG_LEVEL", cls.log_level).strip().upper()
        if level not in logging.getLevelNamesMapping():
            return Err(ValueError(f"TYPEDSETS_LOG_LEVEL: unknown level '{level}'"))

        raw = os.getenv("TYPEDSETS_ALLOW_CONJECTURES", "true").strip().lower()
        match raw:
            case flag if flag in _TRUE:
                allow = True
            case flag if flag in _FALSE:
                allow = False
            case _:
                return Err(
                    ValueError(f"TYPEDSETS_ALLOW_CONJECTURES: expected a boolean, got '{raw}'")
                )
        return Ok(cls(log_level=level, allow_conjectures=allow))
