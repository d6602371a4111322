import json
import logging
import os
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WindowConfig:
    width: int = 960
    height: int = 720
    fps: int = 120
    title: str = "Reaction Timer"


@dataclass(frozen=True)
class TrialConfig:
    min_delay_ms: int = 3500
    delay_span_ms: int = 5500  # delay is in [min, min + span)
    trials_per_session: int = 3


@dataclass(frozen=True)
class ServiceConfig:
    base_url: str = "http://localhost:3002"
    timeout_sec: float = 5.0


@dataclass(frozen=True)
class Theme:
    bg: Tuple[int, int, int] = (34, 34, 34)
    text: Tuple[int, int, int] = (255, 255, 255)
    neutral: Tuple[int, int, int] = (0, 0, 255)
    alert: Tuple[int, int, int] = (255, 0, 0)
    go: Tuple[int, int, int] = (0, 128, 0)
    button: Tuple[int, int, int] = (230, 230, 230)
    button_disabled: Tuple[int, int, int] = (120, 120, 120)


def load_service_config(
    settings_path: Path,
    env_url: str = "",
    env_timeout: str = "",
) -> ServiceConfig:
    env_url = (env_url or "").strip()
    env_timeout = (env_timeout or "").strip()

    config = ServiceConfig()
    if not settings_path.exists():
        try:
            save_service_config(settings_path, config)
        except OSError as exc:
            logger.warning("cannot write %s, using defaults: %s", settings_path, exc)
    else:
        try:
            payload = json.loads(settings_path.read_text(encoding="utf-8"))
            if isinstance(payload, dict):
                url = str(payload.get("base_url", config.base_url)).strip() or config.base_url
                timeout = _parse_timeout(payload.get("timeout_sec"), config.timeout_sec)
                config = replace(config, base_url=url, timeout_sec=timeout)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("cannot read %s, using defaults: %s", settings_path, exc)

    if env_url:
        config = replace(config, base_url=env_url)
    if env_timeout:
        config = replace(config, timeout_sec=_parse_timeout(env_timeout, config.timeout_sec))
    return config


def save_service_config(settings_path: Path, config: ServiceConfig) -> None:
    payload = {
        "base_url": config.base_url.strip(),
        "timeout_sec": config.timeout_sec,
    }
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    settings_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2),
        encoding="utf-8",
    )


def _parse_timeout(value, default: float) -> float:
    try:
        return max(0.5, float(value))
    except (TypeError, ValueError):
        return default


def default_settings_path() -> Path:
    if sys.platform.startswith("win"):
        root = Path(os.getenv("APPDATA") or Path.home() / "AppData" / "Roaming")
    elif sys.platform == "darwin":
        root = Path.home() / "Library" / "Application Support"
    else:
        root = Path.home() / ".local" / "share"
    return root / "ReactionTimer" / "service.json"
