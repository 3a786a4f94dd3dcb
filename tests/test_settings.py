from __future__ import annotations

from pathlib import Path

import pytest

from core.exceptions import ConfigurationError
from core.settings import Settings, get_settings
from core.storage.local import LocalStorage
from core.storage.s3 import S3Storage
from services.api.dependencies import build_storage

CONFIG = """
storage:
  backend: {backend}
  bucket: sbomer-manifests
  region: us-east-1
  local_root: {root}
api:
  public_url: https://sbomer.example.com/
"""


def _write_config(tmp_path: Path, backend: str = "s3") -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG.format(backend=backend, root=tmp_path / "objects"), encoding="utf-8")
    return path


def test_load_settings(tmp_path):
    settings = Settings.load(_write_config(tmp_path))

    assert settings.storage.backend == "s3"
    assert settings.storage.bucket == "sbomer-manifests"
    assert settings.storage.max_attempts == 3
    assert settings.storage.path_style_access is False
    # trailing slash dropped so URLs never contain "//api"
    assert settings.api.public_url == "https://sbomer.example.com"


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        Settings.load(tmp_path / "missing.yaml")


def test_invalid_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("storage:\n  bucket: '  '\napi:\n  public_url: http://x\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        Settings.load(path)


def test_config_path_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("SBOM_STORAGE_CONFIG", str(_write_config(tmp_path, backend="local")))
    get_settings.cache_clear()
    try:
        assert get_settings().storage.backend == "local"
    finally:
        get_settings.cache_clear()


def test_default_config_is_valid():
    settings = Settings.load(Path(__file__).parent.parent / "config" / "default.yaml")
    assert settings.storage.bucket


def test_build_storage_selects_backend(tmp_path):
    local = build_storage(Settings.load(_write_config(tmp_path, backend="local")))
    assert isinstance(local, LocalStorage)
    assert local.root == tmp_path / "objects"

    s3 = build_storage(Settings.load(_write_config(tmp_path, backend="s3")))
    assert isinstance(s3, S3Storage)
    assert s3.bucket == "sbomer-manifests"
