"""Unit tests for runtime dependency checks."""

import subprocess

import pytest

import full_height_pdf.dependencies as dependencies


@pytest.mark.unit
def test_all_required_modules_present(capsys):
    assert dependencies.check_dependencies() is True
    assert "playwright is available" in capsys.readouterr().out


@pytest.mark.unit
def test_missing_module_reported(monkeypatch, capsys):
    monkeypatch.setattr(dependencies, "REQUIRED_MODULES", [("no_such_module_xyz", "no-such-module")])

    assert dependencies.check_dependencies(verbose=False) is False
    assert "no-such-module is required" in capsys.readouterr().out


@pytest.mark.unit
def test_install_browser_runs_playwright(monkeypatch):
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, 0, "", "")

    monkeypatch.setattr(dependencies.subprocess, "run", fake_run)

    assert dependencies.install_browser() is True
    assert calls[0][1:] == ["-m", "playwright", "install", "chromium"]


@pytest.mark.unit
def test_install_browser_failure(monkeypatch):
    def fake_run(cmd, **kwargs):
        raise subprocess.CalledProcessError(1, cmd, stderr="network down")

    monkeypatch.setattr(dependencies.subprocess, "run", fake_run)

    assert dependencies.install_browser() is False
