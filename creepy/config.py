"""
Модуль для загрузки и валидации набора правил обхода (RuleSet).
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
import tomllib
from datetime import timedelta
from pathlib import Path
from re import Pattern
from typing import Any, List, Optional, Union

import yaml
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
)

from creepy.crawler.link_extractor import compile_selector

__all__ = (
    "Credentials",
    "RuleSet",
    "load_config",
    "dump_config",
    "default_config",
    "full_config",
)


class Credentials(BaseModel):
    """Учётные данные для HTTP Basic авторизации."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    user: str
    password: str = Field("", validation_alias=AliasChoices("password", "pass"))


class RuleSet(BaseModel):
    """Набор правил для одного запуска обхода. Не меняется во время обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    seeds: List[HttpUrl] = Field(
        default_factory=list,
        validation_alias=AliasChoices("seeds", "domains"),
        description="Стартовые URL.",
    )
    deny: List[Pattern[str]] = Field(
        default_factory=list,
        validation_alias=AliasChoices("deny", "blacklist"),
        description="Регулярные выражения запрещённых URL.",
    )
    allow: List[Pattern[str]] = Field(
        default_factory=list,
        validation_alias=AliasChoices("allow", "whitelist"),
        description="Исключения из deny.",
    )
    override_deny: List[Pattern[str]] = Field(
        default_factory=list,
        validation_alias=AliasChoices("override_deny", "super_blacklist"),
        description="Безусловный запрет, allow его не отменяет.",
    )
    respect_robots_txt: bool = Field(False, description="Передаётся как есть, robots.txt не проверяется.")
    link_selector: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("link_selector", "link_criteria"),
        description="CSS-селектор ссылок (по умолчанию a[href]).",
    )
    match_selector: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("match_selector", "match_criteria"),
        description="CSS-селектор попадания; без него каждая страница считается hit.",
    )
    delay: float = Field(
        0.0,
        ge=0,
        validation_alias=AliasChoices("delay", "period"),
        description="Пауза между запросами (секунд).",
    )
    credentials: Optional[Credentials] = Field(
        None, validation_alias=AliasChoices("credentials", "basic_auth")
    )
    timeout: float = Field(8.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field("creepy/1.0", min_length=1, description="Заголовок User-Agent.")
    accept_invalid_certs: bool = Field(
        False, description="Отключить проверку TLS-сертификатов (небезопасно)."
    )
    concurrency: int = Field(1, ge=1, description="Число одновременных запросов.")

    @field_validator("link_selector", "match_selector")
    @classmethod
    def _check_selector(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            compile_selector(v)
        return v

    @field_validator("delay", mode="before")
    @classmethod
    def _duration_to_seconds(cls, v: Any) -> Any:
        if isinstance(v, timedelta):
            return v.total_seconds()
        if isinstance(v, dict) and set(v) <= {"secs", "nanos"}:
            return float(v.get("secs", 0)) + float(v.get("nanos", 0)) / 1e9
        return v


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(text: str, path: Path) -> Any:
    try:
        return yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc


def _read_json(text: str, path: Path) -> Any:
    try:
        return json.loads(text) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc


def _read_toml(text: str, path: Path) -> Any:
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Неправильный TOML в {path}: {exc}") from exc


_READERS = {
    ".yaml": _read_yaml,
    ".yml": _read_yaml,
    ".json": _read_json,
    ".toml": _read_toml,
}


def load_config(path: Union[str, Path, None]) -> RuleSet:
    """
    Читает YAML, JSON или TOML и возвращает проверенный RuleSet.
    При отсутствии файла бросает FileNotFoundError.
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
    reader = _READERS.get(suffix)
    if reader is None:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    data = reader(path_obj.read_text(encoding="utf-8"), path_obj)
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень конфига должен быть mapping, получено {type(data).__name__}")

    return RuleSet(**data)


def dump_config(rules: RuleSet) -> str:
    """Сериализует RuleSet в YAML (пригоден для load_config)."""
    data = rules.model_dump(mode="json")
    return yaml.safe_dump(data, allow_unicode=True, sort_keys=False)


def default_config() -> RuleSet:
    """Пустой набор правил со значениями по умолчанию."""
    return RuleSet()


def full_config() -> RuleSet:
    """Пример набора правил, в котором заполнено каждое поле."""
    return RuleSet(
        seeds=["https://github.com/goolord"],
        deny=[".*"],
        allow=["https://github.com/goolord.*"],
        override_deny=[r".*\.jpg"],
        respect_robots_txt=True,
        link_selector="a[href]",
        match_selector="form",
        delay=1.0,
        credentials=Credentials(user="username", password="pass"),
    )
