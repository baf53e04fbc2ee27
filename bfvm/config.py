from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from bfvm.tape import OverflowMode

_ENV_FIELDS = {
    "strict_loops": "BFVM_STRICT_LOOPS",
    "cell_bits": "BFVM_CELL_BITS",
    "overflow": "BFVM_OVERFLOW",
    "trace": "BFVM_TRACE",
}


def repo_root() -> Path:
    # Project root is the directory that contains the `bfvm/` package.
    return Path(__file__).resolve().parents[1]


def load_env() -> None:
    # Prefer a project-local `.env`; fall back to searching from CWD.
    root_env = repo_root() / ".env"
    env_path = str(root_env) if root_env.exists() else (find_dotenv(usecwd=True) or str(root_env))
    load_dotenv(env_path)


class InterpreterSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Quirky entry (False) always runs a loop body at least once.
    strict_loops: bool = False
    cell_bits: int = Field(default=64, ge=8, le=64)
    overflow: OverflowMode = OverflowMode.WRAP
    trace: bool = False

    @field_validator("overflow", mode="before")
    @classmethod
    def _normalize_overflow(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v


def _env_overrides() -> dict[str, Any]:
    data: dict[str, Any] = {}
    for field_name, var in _ENV_FIELDS.items():
        raw = os.getenv(var)
        if raw is None or not raw.strip():
            continue
        data[field_name] = raw.strip()
    return data


def load_settings(**overrides: Any) -> InterpreterSettings:
    load_env()
    data = _env_overrides()
    data.update({k: v for k, v in overrides.items() if v is not None})
    return InterpreterSettings.model_validate(data)


def load_settings_file(path: Path, **overrides: Any) -> InterpreterSettings:
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError("settings file must be a YAML mapping")
    unknown = sorted(set(raw) - set(_ENV_FIELDS))
    if unknown:
        raise ValueError("unknown settings: " + ", ".join(str(k) for k in unknown))

    load_env()
    data = _env_overrides()
    data.update(raw)
    data.update({k: v for k, v in overrides.items() if v is not None})
    return InterpreterSettings.model_validate(data)
