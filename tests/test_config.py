"""Tests for tern.config — AppConfig frozen dataclass."""

import pytest

from tern.config import AppConfig


class TestAppConfig:
    def test_defaults(self) -> None:
        cfg = AppConfig()

        assert cfg.debug is False
        assert cfg.max_content_length == 16 * 1024 * 1024
        assert cfg.request_timeout is None

    def test_override(self) -> None:
        cfg = AppConfig(debug=True, max_content_length=10, request_timeout=1.5)

        assert cfg.debug is True
        assert cfg.max_content_length == 10
        assert cfg.request_timeout == 1.5

    def test_frozen(self) -> None:
        cfg = AppConfig()

        with pytest.raises(AttributeError):
            cfg.debug = True  # type: ignore[misc]
