"""Unit tests for allure-envs run command"""
import sys
from argparse import Namespace
from unittest.mock import MagicMock, patch

import pytest

from allure_envs.cli.commands import run
from allure_envs.cli.exceptions import UnknownEnvironmentError
from allure_envs.cli.scenarios import Scenario


def make_args(scenarios_file, **kwargs):
    defaults = dict(
        file=str(scenarios_file),
        env=None,
        alluredir=None,
        clean_alluredir=False,
        fail_fast=False,
        pytest_args=[],
    )
    defaults.update(kwargs)
    return Namespace(**defaults)


def completed(returncode=0):
    result = MagicMock()
    result.returncode = returncode
    return result


def test_build_pytest_command(tmp_path):
    scenario = Scenario(name="staging", targets=["tests/api"], exclude=["tests/api/slow"])

    cmd = run.build_pytest_command(scenario, tmp_path / "results", ["-k", "smoke"], clean=True)

    assert cmd == [
        sys.executable,
        "-m",
        "pytest",
        "tests/api",
        "--alluredir",
        str(tmp_path / "results"),
        "--clean-alluredir",
        "--ignore",
        "tests/api/slow",
        "-k",
        "smoke",
    ]


def test_build_environment_loads_env_file(scenarios_file, monkeypatch):
    """env_file の値が読み込まれ、ALLURE_ENVIRONMENT はシナリオ名で上書きされること"""
    monkeypatch.setenv("INHERITED", "yes")
    scenario = Scenario(name="staging", env_file="envs/.env.staging")

    env = run.build_environment(scenario, scenarios_file)

    assert env["BASE_URL"] == "https://staging.example.com"
    assert env["INHERITED"] == "yes"
    assert env["ALLURE_ENVIRONMENT"] == "staging"


def test_build_environment_missing_env_file(scenarios_file, capsys):
    scenario = Scenario(name="qa", env_file="envs/.env.qa")

    env = run.build_environment(scenario, scenarios_file)

    assert env["ALLURE_ENVIRONMENT"] == "qa"
    assert "Environment file not found" in capsys.readouterr().out


def test_build_environment_does_not_leak_into_process(scenarios_file):
    import os

    run.build_environment(Scenario(name="staging", env_file="envs/.env.staging"), scenarios_file)

    assert "BASE_URL" not in os.environ
    assert "ALLURE_ENVIRONMENT" not in os.environ


@patch("subprocess.run")
def test_run_all_scenarios(mock_run, scenarios_file, tmp_path):
    """全シナリオが定義順に同じ --alluredir で実行されること"""
    mock_run.return_value = completed(0)

    run.run(make_args(scenarios_file, clean_alluredir=True))

    assert mock_run.call_count == 2
    first, second = mock_run.call_args_list

    first_cmd = first[0][0]
    assert first_cmd[3:5] == ["tests/api", "tests/ui"]
    assert "--clean-alluredir" in first_cmd
    assert first[1]["env"]["ALLURE_ENVIRONMENT"] == "staging"
    assert first[1]["cwd"] == scenarios_file.resolve().parent

    second_cmd = second[0][0]
    assert "--clean-alluredir" not in second_cmd
    assert second[1]["env"]["ALLURE_ENVIRONMENT"] == "production"

    alluredir = str((tmp_path / "allure-results").resolve())
    assert first_cmd[first_cmd.index("--alluredir") + 1] == alluredir
    assert second_cmd[second_cmd.index("--alluredir") + 1] == alluredir


@patch("subprocess.run")
def test_run_selected_environment_with_pytest_args(mock_run, scenarios_file):
    mock_run.return_value = completed(0)

    run.run(make_args(scenarios_file, env=["production"], pytest_args=["--", "-k", "smoke"]))

    mock_run.assert_called_once()
    cmd = mock_run.call_args[0][0]
    assert cmd[-2:] == ["-k", "smoke"]
    assert "--" not in cmd
    assert mock_run.call_args[1]["env"]["ALLURE_ENVIRONMENT"] == "production"


@patch("subprocess.run")
def test_run_unknown_environment(mock_run, scenarios_file):
    with pytest.raises(UnknownEnvironmentError):
        run.run(make_args(scenarios_file, env=["qa"]))

    mock_run.assert_not_called()


@patch("subprocess.run")
def test_run_failure_continues_and_exits(mock_run, scenarios_file, capsys):
    """失敗しても残りのシナリオを実行し、最初の失敗コードで終了すること"""
    mock_run.side_effect = [completed(1), completed(0)]

    with pytest.raises(SystemExit) as e:
        run.run(make_args(scenarios_file))

    assert e.value.code == 1
    assert mock_run.call_count == 2
    assert "Failed scenarios: staging" in capsys.readouterr().out


@patch("subprocess.run")
def test_run_fail_fast(mock_run, scenarios_file):
    mock_run.return_value = completed(2)

    with pytest.raises(SystemExit) as e:
        run.run(make_args(scenarios_file, fail_fast=True))

    assert e.value.code == 2
    mock_run.assert_called_once()


@patch("subprocess.run")
def test_run_without_environments(mock_run, tmp_path, capsys):
    path = tmp_path / "environments.yml"
    path.write_text("environments: []\n", encoding="utf-8")

    run.run(make_args(path))

    mock_run.assert_not_called()
    assert "No environments defined" in capsys.readouterr().out
