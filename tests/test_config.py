"""Tests for environment-driven settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from jlenv_update.config import REPO_MARKERS, Settings


class TestSettingsFromEnv:
    """Tests for Settings.from_env."""

    def test_defaults(self) -> None:
        settings = Settings.from_env({})
        assert settings.root is None
        assert settings.debug is False
        assert settings.executable == 'jlenv'
        assert settings.git == 'git'
        assert settings.markers == REPO_MARKERS

    def test_markers_are_jlenv_and_julia_build(self) -> None:
        assert REPO_MARKERS == ('jlenv', 'julia-build')

    def test_reads_environment(self, tmp_path: Path) -> None:
        settings = Settings.from_env(
            {
                'JLENV_ROOT': str(tmp_path),
                'JLENV_DEBUG': '1',
                'JLENV_EXECUTABLE': 'jlenv-dev',
                'JLENV_GIT': '/usr/local/bin/git',
            },
        )
        assert settings.root == tmp_path
        assert settings.debug is True
        assert settings.executable == 'jlenv-dev'
        assert settings.git == '/usr/local/bin/git'

    def test_empty_values_fall_back_to_defaults(self) -> None:
        settings = Settings.from_env({'JLENV_ROOT': '', 'JLENV_DEBUG': '', 'JLENV_GIT': ''})
        assert settings.root is None
        assert settings.debug is False
        assert settings.git == 'git'

    def test_whitespace_values_fall_back_to_defaults(self) -> None:
        settings = Settings.from_env(
            {'JLENV_ROOT': '  ', 'JLENV_EXECUTABLE': '   ', 'JLENV_GIT': '\t '},
        )
        assert settings.root is None
        assert settings.executable == 'jlenv'
        assert settings.git == 'git'

    def test_values_are_stripped(self) -> None:
        settings = Settings.from_env({'JLENV_GIT': ' /usr/bin/git '})
        assert settings.git == '/usr/bin/git'

    def test_uses_process_environment_by_default(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv('JLENV_ROOT', str(tmp_path))
        monkeypatch.delenv('JLENV_DEBUG', raising=False)
        settings = Settings.from_env()
        assert settings.root == tmp_path
        assert settings.debug is False

    def test_settings_are_frozen(self) -> None:
        settings = Settings()
        with pytest.raises(ValidationError):
            settings.debug = True

    def test_blank_git_rejected(self) -> None:
        with pytest.raises(ValidationError, match='Command name cannot be empty'):
            Settings(git='  ')
