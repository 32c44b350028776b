"""Tests for settings resolution."""

import pytest

from vj.config import Settings, resolve_settings


class TestResolveSettings:
    """Flags, then environment, then defaults."""

    def test_defaults(self):
        assert resolve_settings(environ={}) == Settings()
        assert Settings().theme == "dark"
        assert Settings().margin == 3
        assert Settings().log_file == ""

    def test_environment(self):
        env = {"VJ_THEME": "light", "VJ_MARGIN": "5", "VJ_LOG": "/tmp/vj.log"}
        settings = resolve_settings(environ=env)
        assert settings == Settings(theme="light", margin=5, log_file="/tmp/vj.log")

    def test_arguments_win_over_environment(self):
        env = {"VJ_THEME": "light", "VJ_MARGIN": "5"}
        settings = resolve_settings(theme="nocolor", margin=0, environ=env)
        assert settings.theme == "nocolor"
        assert settings.margin == 0

    def test_empty_env_values_fall_back(self):
        settings = resolve_settings(environ={"VJ_THEME": "", "VJ_MARGIN": ""})
        assert settings == Settings()

    def test_unknown_theme(self):
        with pytest.raises(ValueError, match="unknown theme"):
            resolve_settings(theme="neon", environ={})
        with pytest.raises(ValueError):
            resolve_settings(environ={"VJ_THEME": "neon"})

    def test_bad_margin(self):
        with pytest.raises(ValueError, match="VJ_MARGIN"):
            resolve_settings(environ={"VJ_MARGIN": "lots"})
        with pytest.raises(ValueError, match="negative"):
            resolve_settings(margin=-1, environ={})
