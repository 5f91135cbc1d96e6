"""
Tests for the per-profile tool catalogs.
"""

import shutil

import pytest

from config.settings import ExtraTool, Settings
from devsetup.core import catalog
from devsetup.core.catalog import CARGO_TOOLS, build_specs, extra_tool_spec
from devsetup.core.probes import AnyProbe, CommandProbe
from devsetup.core.provisioner import Provisioner
from devsetup.errors import ConfigurationError
from devsetup.integrations.package_managers import (
    AptInstall,
    BrewInstall,
    HomebrewBootstrap,
    NpmGlobalInstall,
    WingetInstall,
    WslInstall,
)
from devsetup.models.installation import ProvisionStatus

from conftest import FakeRunner


class TestWindowsCatalog:
    def test_runtimes_then_wsl(self):
        specs = build_specs("windows", Settings(), FakeRunner())
        names = [s.name for s in specs]
        assert names == ["Git", "Node.js", "Python", "Go", "Rust", "Java", ".NET", "WSL"]
        assert all(isinstance(s.install, WingetInstall) for s in specs[:-1])
        assert isinstance(specs[-1].install, WslInstall)

    def test_wsl_distribution_from_settings(self):
        settings = Settings(windows={"wsl_distribution": "Debian"})
        wsl = build_specs("windows", settings, FakeRunner())[-1]
        assert wsl.install.distribution == "Debian"
        assert "Debian" in wsl.fallback_message

    def test_every_spec_has_guidance(self):
        for spec in build_specs("windows", Settings(), FakeRunner()):
            assert spec.fallback_message


class TestWslCatalog:
    def test_order_apt_homebrew_brew_extras(self):
        specs = build_specs("wsl", Settings(), FakeRunner())
        kinds = [type(s.install) for s in specs]
        homebrew = kinds.index(HomebrewBootstrap)
        assert all(k is AptInstall for k in kinds[:homebrew])
        assert kinds[homebrew + 1] is BrewInstall
        assert specs[-1].name == "cargo-watch"

    def test_homebrew_detects_linuxbrew_prefix(self):
        specs = build_specs("wsl", Settings(), FakeRunner())
        homebrew = next(s for s in specs if s.name == "Homebrew")
        assert isinstance(homebrew.detect, AnyProbe)

    def test_names_are_unique(self):
        names = [s.name for s in build_specs("wsl", Settings(), FakeRunner())]
        assert len(names) == len(set(names))

    def test_includes_original_tool_set(self):
        names = {s.name for s in build_specs("wsl", Settings(), FakeRunner())}
        for expected in ("build-essential", "jq", "python@3.12", "ripgrep", "fzf", "poetry", "pnpm"):
            assert expected in names


class TestCustomisation:
    def test_skip_tools_case_insensitive(self):
        settings = Settings(skip_tools=["java", ".NET"])
        names = [s.name for s in build_specs("windows", settings, FakeRunner())]
        assert "Java" not in names
        assert ".NET" not in names
        assert "Git" in names

    def test_extra_tools_appended(self):
        settings = Settings(extra_tools=[
            {"name": "lazygit", "manager": "brew", "package": "lazygit"},
            {"name": "tsc", "manager": "npm", "package": "typescript", "fallback": "npm i -g typescript"},
        ])
        specs = build_specs("wsl", settings, FakeRunner())
        assert [s.name for s in specs[-2:]] == ["lazygit", "tsc"]
        assert isinstance(specs[-1].install, NpmGlobalInstall)
        assert specs[-1].fallback_message == "npm i -g typescript"

    def test_extra_tool_detect_command(self):
        spec = extra_tool_spec(ExtraTool(name="ripgrep-all", manager="brew", package="rga", command="rga"))
        assert isinstance(spec.detect, CommandProbe)
        assert spec.detect.command == "rga"
        assert "brew" in spec.fallback_message

    def test_unknown_profile(self):
        with pytest.raises(ConfigurationError, match="Unknown profile"):
            build_specs("macos", Settings())


# ── Detection ────────────────────────────────────────────────────────


def _on_path(monkeypatch, executables):
    monkeypatch.setattr(
        shutil, "which",
        lambda cmd: f"/usr/bin/{cmd}" if cmd in executables else None
    )


class TestDetection:
    def test_windows_python_must_answer_a_version_query(self):
        runner = FakeRunner(return_code=1)
        python = next(s for s in build_specs("windows", Settings(), runner) if s.name == "Python")
        assert python.detect.command == ["python", "--version"]
        assert python.detect.is_present() is False
        assert runner.commands == [["python", "--version"]]

    def test_npm_extras_include_project_generators(self):
        specs = {s.name: s for s in build_specs("wsl", Settings(), FakeRunner())}
        assert specs["@vue/cli"].detect.command == "vue"
        assert specs["@vue/cli"].install.packages == ["@vue/cli"]
        assert specs["create-react-app"].detect.command == "create-react-app"

    def test_cargo_edit_detected_by_an_executable_it_ships(self):
        specs = {s.name: s for s in build_specs("wsl", Settings(), FakeRunner())}
        assert specs["cargo-edit"].detect.command == "cargo-upgrade"

    def test_cargo_extras_present_on_second_run(self, monkeypatch, reporter):
        installed = set()
        _on_path(monkeypatch, installed)
        runner = FakeRunner(available={"cargo"})
        specs = [s for s in build_specs("wsl", Settings(), runner) if s.name in CARGO_TOOLS]
        provisioner = Provisioner(reporter=reporter)

        first = provisioner.run(specs, interactive=False)
        assert all(r.status == ProvisionStatus.INSTALLED for r in first)
        # cargo-edit 0.12+ ships cargo-upgrade and cargo-set-version only
        installed.update({"cargo-upgrade", "cargo-set-version", "cargo-watch"})

        second = provisioner.run(specs, interactive=False)
        assert all(r.status == ProvisionStatus.ALREADY_PRESENT for r in second)
        assert len(runner.commands) == 2

    def test_brew_formulae_ignore_apt_binaries(self, monkeypatch, tmp_path, reporter):
        monkeypatch.setattr(catalog, "LINUXBREW_PREFIX", tmp_path)
        _on_path(monkeypatch, {"gcc", "make", "python3.12"})
        runner = FakeRunner(available={"brew"})
        wanted = ["gcc", "make", "python@3.12"]
        specs = [s for s in build_specs("wsl", Settings(), runner) if s.name in wanted]

        results = Provisioner(reporter=reporter).run(specs, interactive=False)

        assert all(r.status == ProvisionStatus.INSTALLED for r in results)
        assert runner.commands == [["/usr/bin/brew", "install", f] for f in wanted]

    def test_brew_formula_present_under_prefix(self, monkeypatch, tmp_path):
        monkeypatch.setattr(catalog, "LINUXBREW_PREFIX", tmp_path)
        (tmp_path / "opt" / "gcc").mkdir(parents=True)
        specs = {s.name: s for s in build_specs("wsl", Settings(), FakeRunner())}
        assert specs["gcc"].detect.is_present() is True
        assert specs["make"].detect.is_present() is False
