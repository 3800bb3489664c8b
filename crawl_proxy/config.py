# === FILE: crawl_proxy/config.py ===
"""
Модуль загрузки и валидации конфигурации прокси crawl_proxy.

Значения читаются один раз при старте процесса: значения по умолчанию,
затем необязательный YAML/JSON-файл, затем переменные окружения
(LISTEN_IP, LISTEN_PORT, CRAWL4AI_ENDPOINT), затем явные переопределения из CLI.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

from crawl_proxy.logger import logger

DEFAULT_ENDPOINT = "http://crawl4ai:11235/md"

ENV_LISTEN_IP = "LISTEN_IP"
ENV_LISTEN_PORT = "LISTEN_PORT"
ENV_ENDPOINT = "CRAWL4AI_ENDPOINT"


class ProxyConfig(BaseModel):
    """Неизменяемая конфигурация одного процесса прокси."""
    model_config = ConfigDict(extra="forbid", frozen=True, validate_default=True)

    listen_ip: str = Field("", description="Интерфейс для прослушивания; пустая строка - все интерфейсы.")
    listen_port: int = Field(8000, ge=0, le=65535, description="TCP-порт сервера.")
    crawl4ai_endpoint: HttpUrl = Field(
        DEFAULT_ENDPOINT, description="URL эндпоинта crawl4ai, принимающего POST с JSON."
    )

    @field_validator("listen_ip", mode="before")
    def _strip_ip(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @property
    def endpoint(self) -> str:
        return str(self.crawl4ai_endpoint)

    @property
    def listen_address(self) -> str:
        return f"{self.listen_ip}:{self.listen_port}"


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


def _read_file(path: Union[str, Path]) -> dict[str, Any]:
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def _from_environ(environ: Mapping[str, str]) -> dict[str, Any]:
    """Значения из окружения; пустые переменные и нечисловой порт игнорируются."""
    data: Dict[str, Any] = {}

    port = environ.get(ENV_LISTEN_PORT)
    if port:
        try:
            data["listen_port"] = int(port)
        except ValueError:
            logger.warning("Ignoring %s=%r: not an integer", ENV_LISTEN_PORT, port)

    ip = environ.get(ENV_LISTEN_IP)
    if ip:
        data["listen_ip"] = ip

    endpoint = environ.get(ENV_ENDPOINT)
    if endpoint:
        data["crawl4ai_endpoint"] = endpoint

    return data


def load_config(
    path: Union[str, Path, None] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> ProxyConfig:
    """
    Собирает и проверяет ProxyConfig.

    Приоритет (по возрастанию): значения по умолчанию, файл *path*,
    переменные окружения *environ* (по умолчанию os.environ), *overrides*.
    Ключи overrides со значением None пропускаются.
    """
    data: Dict[str, Any] = {}
    if path is not None:
        data.update(_read_file(path))

    data.update(_from_environ(os.environ if environ is None else environ))

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})

    return ProxyConfig(**data)


__all__ = ["ProxyConfig", "load_config", "DEFAULT_ENDPOINT"]
