"""
Модуль для загрузки и валидации конфигурации сайта для RichCards.
Используется Pydantic для описания схемы и проверки данных.

Снимок конфигурации создаётся один раз при старте процесса и явно
передаётся в построитель метаданных (без глобального синглтона).
"""
from __future__ import annotations

import errno
import json
import os
from datetime import timezone as dt_timezone, tzinfo as TzInfo
from pathlib import Path
from typing import Any, Union
from urllib.parse import urlparse
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

__all__ = ["SiteConfig", "load_config", "read_mapping"]


class SiteConfig(BaseModel):
    """Настройки вики, нужные для построения JSON-LD."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    site_name: str = Field(..., min_length=1, description="Название сайта ($wgSitename).")
    server: str = Field(..., description="Адрес сервера без завершающего слеша ($wgServer).")
    logo: str = Field("", description="Путь к логотипу относительно server ($wgLogo).")
    annotate_articles: bool = Field(
        True, description="Флаг $wgGoogleRichCardsAnnotateArticles."
    )
    article_path: str = Field("/wiki/$1", description="Шаблон пути статьи ($wgArticlePath).")
    content_namespaces: frozenset[int] = Field(
        frozenset({0}), description="Пространства имён статей ($wgContentNamespaces)."
    )
    timezone: str = Field("UTC", description="Часовой пояс для дат ревизий.")

    @field_validator("server", mode="before")
    def _strip_trailing_slash(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().rstrip("/")
        return v

    @field_validator("server")
    def _check_server(cls, v: str) -> str:
        # протокол-относительный адрес (//host) допустим, как в MediaWiki
        parsed = urlparse(v)
        if not parsed.netloc or parsed.scheme not in ("", "http", "https"):
            raise ValueError(f"server должен быть http(s) или //host URL, получено {v!r}")
        return v

    @field_validator("article_path")
    def _check_article_path(cls, v: str) -> str:
        if "$1" not in v:
            raise ValueError("article_path должен содержать плейсхолдер $1")
        return v

    @field_validator("timezone")
    def _check_timezone(cls, v: str) -> str:
        if v == "UTC":
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Неизвестный часовой пояс: {v}") from exc
        return v

    @property
    def logo_url(self) -> str:
        return self.server + self.logo

    @property
    def tzinfo(self) -> TzInfo:
        # UTC не требует базы tzdata
        if self.timezone == "UTC":
            return dt_timezone.utc
        return ZoneInfo(self.timezone)


_DEFAULT_CFG = Path("configs/site.yaml")


def read_mapping(path: Path) -> dict[str, Any]:
    """Читает YAML или JSON файл и возвращает словарь верхнего уровня."""
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
        kind = "YAML"
    elif suffix == ".json":
        try:
            data = json.loads(text) or {}
        except json.JSONDecodeError as exc:
            raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
        kind = "JSON"
    else:
        raise ValueError(f"Неподдерживаемый формат файла: {suffix}")
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень {kind} должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> SiteConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект SiteConfig.
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

    data = read_mapping(path_obj)
    try:
        return SiteConfig(**data)
    except ValidationError:
        raise
