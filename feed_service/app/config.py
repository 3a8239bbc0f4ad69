from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

import yaml


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE_NAME = "config.yaml"


@dataclass(slots=True)
class SocialConfig:
    # 자기 자신 팔로우 허용 여부. 제품 정책이 정해지기 전까지는 허용한다.
    allow_self_follow: bool = True


@dataclass(slots=True)
class AppConfig:
    """feed-service 전체 설정 루트.

    - 스토리지 연결 정보는 환경 변수(common.mongo.config)에서 읽고,
      이 파일에는 제품 정책에 해당하는 값만 둔다.
    """

    social: SocialConfig = field(default_factory=SocialConfig)


def _find_config_path() -> Path | None:
    """현재 작업 디렉토리 기준으로 상위로 올라가며 config.yaml 을 찾는다."""

    current = Path.cwd()
    for directory in (current, *current.parents):
        candidate = directory / DEFAULT_CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


def _parse_bool(value: object, *, key: str, path: Path) -> bool:
    if isinstance(value, bool):
        return value
    raise RuntimeError(f"invalid {key} in {path}: {value!r} (expected true/false)")


def load_config(path: Path | None = None) -> AppConfig:
    """feed-service 설정을 로드하여 AppConfig 로 반환한다.

    config.yaml 이 없으면 기본값을 사용한다.
    """

    if path is None:
        path = _find_config_path()
    if path is None:
        logger.info("%s not found, using default policy", DEFAULT_CONFIG_FILE_NAME)
        return AppConfig()

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    social_raw = data.get("social") or {}
    social = SocialConfig()
    if "allow_self_follow" in social_raw:
        social.allow_self_follow = _parse_bool(
            social_raw["allow_self_follow"], key="social.allow_self_follow", path=path
        )

    return AppConfig(social=social)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """프로세스 전역 설정 (FastAPI DI 에서도 사용)."""

    return load_config()
