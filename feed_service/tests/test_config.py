from __future__ import annotations

from pathlib import Path

import pytest

from common.mongo.config import DEFAULT_TIMEOUT_MS, get_mongo_timeout_ms
from feed_service.app.config import load_config


def test_load_config_reads_self_follow_policy(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("social:\n  allow_self_follow: false\n", encoding="utf-8")

    config = load_config(path)

    assert config.social.allow_self_follow is False


def test_load_config_defaults_for_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(path).social.allow_self_follow is True


def test_load_config_rejects_non_bool(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("social:\n  allow_self_follow: sometimes\n", encoding="utf-8")

    with pytest.raises(RuntimeError):
        load_config(path)


def test_mongo_timeout_defaults_and_validates(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MONGO_TIMEOUT_MS", raising=False)
    assert get_mongo_timeout_ms() == DEFAULT_TIMEOUT_MS

    monkeypatch.setenv("MONGO_TIMEOUT_MS", "250")
    assert get_mongo_timeout_ms() == 250

    monkeypatch.setenv("MONGO_TIMEOUT_MS", "-1")
    with pytest.raises(RuntimeError):
        get_mongo_timeout_ms()
