"""Tests for the relsort command line."""

import tomllib
from pathlib import Path

import pytest
from typer.testing import CliRunner

from relsort._cli.main import app

runner = CliRunner()

ORDER = ["stdlib", "kernel", "zapp2", "app3", "app2", "zapp1", "app1"]

RELEASE = """
[[app]]
name = "app1"
vsn = "0.1"
active_deps = ["app2", "zapp1"]
library_deps = ["stdlib", "kernel"]

[[app]]
name = "app2"
active_deps = ["app3"]

[[app]]
name = "app3"
active_deps = ["kernel"]

[[app]]
name = "zapp1"
active_deps = ["app2", "app3", "zapp2"]

[[app]]
name = "stdlib"

[[app]]
name = "kernel"

[[app]]
name = "zapp2"
"""

CYCLE = """
[[app]]
name = "app1"
active_deps = ["app2"]

[[app]]
name = "app2"
active_deps = ["app1"]
"""


def printed_names(stdout: str) -> list[str]:
    return [line.strip() for line in stdout.splitlines() if line.strip() in ORDER]


@pytest.fixture
def release(tmp_path: Path) -> Path:
    path = tmp_path / "release.toml"
    path.write_text(RELEASE)
    return path


@pytest.fixture
def cycle(tmp_path: Path) -> Path:
    path = tmp_path / "cycle.toml"
    path.write_text(CYCLE)
    return path


class TestOrderCommand:
    def test_plain(self, release: Path) -> None:
        result = runner.invoke(app, ["order", str(release), "--plain"])
        assert result.exit_code == 0, result.output
        assert printed_names(result.stdout) == ORDER

    def test_table(self, release: Path) -> None:
        result = runner.invoke(app, ["order", str(release)])
        assert result.exit_code == 0, result.output
        assert "Install order" in result.stdout
        assert "zapp1" in result.stdout

    def test_export(self, release: Path, tmp_path: Path) -> None:
        output = tmp_path / "order.toml"
        result = runner.invoke(app, ["order", str(release), "-o", str(output)])
        assert result.exit_code == 0, result.output
        with output.open("rb") as f:
            data = tomllib.load(f)
        assert data["order"] == ORDER

    def test_cycle(self, cycle: Path) -> None:
        result = runner.invoke(app, ["order", str(cycle)])
        assert result.exit_code == 1
        assert "Cycle detected" in result.output
        assert "app1 -> app2 -> app2 -> app1" in result.output

    def test_invalid_manifest(self, tmp_path: Path) -> None:
        manifest = tmp_path / "bad.toml"
        manifest.write_text("[[app]]\nvsn = '1.0'\n")
        result = runner.invoke(app, ["order", str(manifest)])
        assert result.exit_code == 1

    def test_manifest_from_config(self, release: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "pyproject.toml").write_text(
            '[tool.relsort]\nmanifest = "release.toml"\noutput = "_build/order.toml"\n',
        )
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["order", "--plain"])

        assert result.exit_code == 0, result.output
        assert printed_names(result.stdout) == ORDER
        assert (tmp_path / "_build" / "order.toml").is_file()

    def test_explicit_manifest_ignores_broken_config(
        self,
        release: Path,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        (tmp_path / "pyproject.toml").write_text("[tool.relsort\n")
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["order", str(release), "--plain"])

        assert result.exit_code == 0, result.output
        assert printed_names(result.stdout) == ORDER

    def test_broken_config_without_manifest(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "pyproject.toml").write_text("[tool.relsort\n")
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["order"])

        assert result.exit_code == 1
        assert "Invalid TOML" in result.output

    def test_no_manifest(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "pyproject.toml").write_text("[project]\nname = 'test'\n")
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["order"])

        assert result.exit_code == 1


class TestCheckCommand:
    def test_valid(self, release: Path) -> None:
        result = runner.invoke(app, ["check", str(release)])
        assert result.exit_code == 0, result.output
        assert "7 applications can be ordered" in result.output

    def test_cycle(self, cycle: Path) -> None:
        result = runner.invoke(app, ["--verbose", "check", str(cycle)])
        assert result.exit_code == 1
        assert "Cycle detected" in result.output
