# === FILE: butler/config.py ===
"""
Модуль для загрузки и валидации конфигурации краулера Butler.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)

from butler import __version__

_DEFAULT_CFG = Path("config.json")


class CrawlerConfig(BaseModel):
    """Конфигурация для одного запуска обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    allow_www: bool = Field(
        False,
        validation_alias=AliasChoices("allow_www", "allowWww", "www"),
        description="Канонизировать хосты к виду www.<host> (True) или <host> (False).",
    )
    domains: List[str] = Field(..., min_length=1, description="Разрешённые домены (host[:port]).")
    schemes: List[str] = Field(default_factory=lambda: ["http"], min_length=1, description="Допустимые схемы ссылок.")
    pool_size: int = Field(2, ge=1, description="Число параллельных воркеров.")
    timeout: Optional[float] = Field(None, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field(f"Butler/{__version__}", min_length=1, description="Заголовок User-Agent.")

    @field_validator("domains")
    @classmethod
    def _check_bare_hosts(cls, value: List[str]) -> List[str]:
        hosts = []
        for raw in value:
            host = raw.strip()
            if not host:
                raise ValueError("domain must not be empty")
            if "://" in host or "/" in host:
                raise ValueError(f"domain must be a bare host, got {raw!r}")
            hosts.append(host)
        return hosts

    @field_validator("schemes")
    @classmethod
    def _lower_schemes(cls, value: List[str]) -> List[str]:
        return [s.strip().lower() for s in value]


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.
    При отсутствии файла конфига бросает FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return CrawlerConfig(**data)


__all__ = ["CrawlerConfig", "load_config"]
