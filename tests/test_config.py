from __future__ import annotations

import pytest

from pyzeit.config import ZeitConfig, _env_bool
from pyzeit.exceptions import ZeitConfigError


def test_defaults() -> None:
    config = ZeitConfig()
    assert config.max_write_depth == 32
    assert config.strict_clone is False
    assert config.clone_on_read is True
    assert config.log_patches is False


def test_invalid_depth_rejected() -> None:
    with pytest.raises(ZeitConfigError):
        ZeitConfig(max_write_depth=0)


@pytest.mark.parametrize(
    ("raw", "default", "expected"),
    [
        (None, True, True),
        ("yes", False, True),
        (" ON ", False, True),
        ("0", True, False),
        ("off", True, False),
        ("maybe", True, True),
    ],
)
def test_env_bool(raw: str | None, default: bool, expected: bool) -> None:
    assert _env_bool(raw, default) is expected


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYZEIT_MAX_WRITE_DEPTH", "4")
    monkeypatch.setenv("PYZEIT_STRICT_CLONE", "true")
    monkeypatch.setenv("PYZEIT_CLONE_ON_READ", "no")
    monkeypatch.delenv("PYZEIT_LOG_PATCHES", raising=False)

    config = ZeitConfig.from_env()

    assert config == ZeitConfig(max_write_depth=4, strict_clone=True, clone_on_read=False, log_patches=False)


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYZEIT_MAX_WRITE_DEPTH", "4")
    monkeypatch.setenv("PYZEIT_LOG_PATCHES", "1")

    config = ZeitConfig.from_env(max_write_depth=8, log_patches=False)

    assert config.max_write_depth == 8
    assert config.log_patches is False


def test_from_env_bad_depth(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYZEIT_MAX_WRITE_DEPTH", "lots")
    with pytest.raises(ZeitConfigError):
        ZeitConfig.from_env()
