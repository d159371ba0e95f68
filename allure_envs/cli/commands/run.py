"""
allure-envs run - 環境ごとに pytest を実行

Usage:
    allure-envs run [-e NAME ...] [--alluredir DIR] [--clean-alluredir] [--fail-fast] [-- PYTEST_ARGS]

Examples:
    allure-envs run                         # 全環境を順に実行
    allure-envs run -e staging              # staging のみ
    allure-envs run --clean-alluredir -- -k smoke

全環境の結果は同じ --alluredir に出力され、env パラメータと Parent Suite で区別される。
"""

import os
import subprocess
import sys
from pathlib import Path
from typing import Dict, List

from dotenv import dotenv_values

from allure_envs.cli import config as cli_config
from allure_envs.cli.core import logging
from allure_envs.cli.scenarios import Scenario, load_scenarios, resolve_env_file
from allure_envs.config import ENVIRONMENT_VARIABLE

DEFAULT_ALLUREDIR = "allure-results"


def build_environment(scenario: Scenario, scenarios_path: Path) -> Dict[str, str]:
    """サブプロセスに渡す環境変数を構築する"""
    env = os.environ.copy()

    env_path = resolve_env_file(scenario, scenarios_path)
    if env_path is not None:
        if env_path.exists():
            values = dotenv_values(env_path)
            env.update({key: value for key, value in values.items() if value is not None})
            logging.info(f"Loaded environment from: {logging.highlight(env_path)}")
        else:
            logging.warning(f"Environment file not found: {env_path}")

    # シナリオ名が常に優先される
    env[ENVIRONMENT_VARIABLE] = scenario.name
    return env


def build_pytest_command(
    scenario: Scenario, alluredir: Path, extra_args: List[str], clean: bool = False
) -> List[str]:
    cmd = [sys.executable, "-m", "pytest"] + scenario.targets + ["--alluredir", str(alluredir)]
    if clean:
        cmd.append("--clean-alluredir")

    for excl in scenario.exclude:
        cmd.extend(["--ignore", excl])

    return cmd + extra_args


def run(args):
    scenarios_path = cli_config.resolve_scenarios_file(getattr(args, "file", None))
    scenarios = load_scenarios(scenarios_path)
    selected = scenarios.select(getattr(args, "env", None))

    if not selected:
        logging.warning(f"No environments defined in {logging.highlight(scenarios_path)}")
        return

    alluredir = Path(getattr(args, "alluredir", None) or DEFAULT_ALLUREDIR).resolve()
    extra_args = list(getattr(args, "pytest_args", None) or [])
    if extra_args and extra_args[0] == "--":
        extra_args = extra_args[1:]

    clean = getattr(args, "clean_alluredir", False)
    fail_fast = getattr(args, "fail_fast", False)

    failed: List[str] = []
    exit_code = 0

    for index, scenario in enumerate(selected):
        logging.step(f"Running scenario: {logging.highlight(scenario.name)}")

        env = build_environment(scenario, scenarios_path)
        # 結果ディレクトリのクリアは最初の実行のみ
        cmd = build_pytest_command(scenario, alluredir, extra_args, clean=clean and index == 0)

        result = subprocess.run(cmd, cwd=scenarios_path.parent, env=env, check=False)

        if result.returncode != 0:
            logging.error(f"Scenario {scenario.name} failed (exit code {result.returncode})")
            failed.append(scenario.name)
            exit_code = exit_code or result.returncode
            if fail_fast:
                break
        else:
            logging.success(f"Scenario {scenario.name} passed")

    logging.info(f"Allure results: {logging.highlight(alluredir)}")

    if failed:
        logging.error(f"Failed scenarios: {', '.join(failed)}")
        sys.exit(exit_code)

    logging.success("All scenarios passed!")
