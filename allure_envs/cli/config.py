import os
from pathlib import Path
from typing import Optional

SCENARIOS_FILE_NAME = "environments.yml"
SCENARIOS_FILE_ENV = "ALLURE_ENVS_FILE"


def find_project_root(current_path: Path = None) -> Path:
    """pyproject.toml を探してプロジェクトルートを特定する"""
    if current_path is None:
        current_path = Path.cwd()

    for path in [current_path] + list(current_path.parents):
        if (path / "pyproject.toml").exists():
            return path

    return current_path


def resolve_scenarios_file(explicit: Optional[str] = None) -> Path:
    """シナリオファイルのパスを解決する"""
    # パス優先順位:
    # 1. CLI 引数 --file
    # 2. 環境変数 ALLURE_ENVS_FILE
    # 3. カレントディレクトリの environments.yml
    # 4. プロジェクトルート直下の environments.yml
    if explicit:
        return Path(explicit).resolve()

    env_file = os.environ.get(SCENARIOS_FILE_ENV)
    if env_file:
        return Path(env_file).resolve()

    cwd_file = Path.cwd() / SCENARIOS_FILE_NAME
    if cwd_file.exists():
        return cwd_file

    return find_project_root() / SCENARIOS_FILE_NAME
