from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from cilint.config import (
    ConfigLoadError,
    ConfigValidationError,
    LogLevel,
    deep_merge,
    load_settings,
    read_toml_file,
)

if TYPE_CHECKING:
    from pyfakefs.fake_filesystem import FakeFilesystem


class TestReadTomlFile:
    def test_reads_file(self, fs: "FakeFilesystem") -> None:
        fs.create_file("/config.toml", contents='gitlab_url = "https://x.org"\n')

        assert read_toml_file(Path("/config.toml")) == {"gitlab_url": "https://x.org"}

    def test_reports_syntax_error(self, fs: "FakeFilesystem") -> None:
        fs.create_file("/config.toml", contents='timeout = 5\ngitlab_url = "x\n')

        with pytest.raises(ConfigLoadError) as exc_info:
            read_toml_file(Path("/config.toml"))

        assert exc_info.value.path == Path("/config.toml")
        assert "Failed to parse TOML file" in str(exc_info.value)


class TestDeepMerge:
    def test_merges_nested_tables(self) -> None:
        base = {"timeout": 5, "logging": {"level": "info", "file": "a.log"}}
        override = {"logging": {"level": "debug"}}

        assert deep_merge(base, override) == {
            "timeout": 5,
            "logging": {"level": "debug", "file": "a.log"},
        }

    def test_does_not_modify_inputs(self) -> None:
        base = {"logging": {"level": "info"}}
        override = {"logging": {"file": "x.log"}}

        deep_merge(base, override)

        assert base == {"logging": {"level": "info"}}
        assert override == {"logging": {"file": "x.log"}}


class TestLoadSettings:
    @pytest.fixture
    def workdir(self, tmp_path: Path) -> Path:
        path = tmp_path / "work"
        path.mkdir()
        return path

    def test_defaults_without_sources(self, workdir: Path) -> None:
        settings = load_settings(cli_overrides={"directory": workdir})

        assert settings.directory == workdir
        assert settings.gitlab_url == ""

    def test_user_config_is_read(
        self, tmp_path: Path, workdir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        user_config = tmp_path / "user.toml"
        user_config.write_text('gitlab_url = "gitlab.example.com"\ntimeout = 3\n')
        monkeypatch.setattr(
            "cilint.config._load.get_user_config_path", lambda: user_config
        )

        settings = load_settings(cli_overrides={"directory": workdir})

        assert settings.gitlab_url == "https://gitlab.example.com"
        assert settings.timeout == 3

    def test_user_config_can_be_skipped(
        self, tmp_path: Path, workdir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        user_config = tmp_path / "user.toml"
        user_config.write_text("timeout = 3\n")
        monkeypatch.setattr(
            "cilint.config._load.get_user_config_path", lambda: user_config
        )

        settings = load_settings(
            cli_overrides={"directory": workdir}, include_user=False
        )

        assert settings.timeout != 3

    def test_precedence_of_sources(
        self, tmp_path: Path, workdir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        user_config = tmp_path / "user.toml"
        user_config.write_text(
            'project_path = "user/proj"\ntimeout = 3\n[logging]\nlevel = "info"\n'
        )
        monkeypatch.setattr(
            "cilint.config._load.get_user_config_path", lambda: user_config
        )
        explicit = tmp_path / "explicit.toml"
        explicit.write_text('project_path = "explicit/proj"\ntimeout = 7\n')

        settings = load_settings(
            config_path=explicit,
            cli_overrides={"directory": workdir, "timeout": 9.5},
        )

        assert settings.project_path == "explicit/proj"
        assert settings.timeout == 9.5
        assert settings.logging.level is LogLevel.INFO

    def test_missing_explicit_config(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError) as exc_info:
            load_settings(config_path=tmp_path / "nope.toml")

        assert exc_info.value.path == tmp_path / "nope.toml"

    def test_invalid_value_names_the_key(self, workdir: Path) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            load_settings(cli_overrides={"directory": workdir, "timeout": -1})

        assert exc_info.value.key == "timeout"
        assert "timeout" in str(exc_info.value)

    def test_invalid_nested_value(self, workdir: Path) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            load_settings(
                cli_overrides={"directory": workdir, "logging": {"level": "loud"}}
            )

        assert exc_info.value.key == "logging.level"

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigValidationError, match="does not exist") as exc_info:
            load_settings(cli_overrides={"directory": tmp_path / "missing"})

        assert exc_info.value.key == "directory"

    def test_directory_that_is_a_file(self, tmp_path: Path) -> None:
        path = tmp_path / "file.txt"
        path.write_text("")

        with pytest.raises(ConfigValidationError, match="is not a directory"):
            load_settings(cli_overrides={"directory": path})

    def test_missing_ci_file(self, workdir: Path) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            load_settings(
                cli_overrides={"directory": workdir, "ci_file": workdir / "ci.yml"}
            )

        assert exc_info.value.key == "ci_file"

    def test_ci_file_that_is_a_directory(self, workdir: Path) -> None:
        with pytest.raises(ConfigValidationError, match="is a directory"):
            load_settings(cli_overrides={"directory": workdir, "ci_file": workdir})
