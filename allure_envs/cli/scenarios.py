"""
シナリオ定義

environments.yml を読み込み、環境ごとの実行設定を Pydantic モデルとして提供します。

environments:
  - name: staging
    env_file: envs/.env.staging
    targets: [tests]
    exclude: []
"""

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from allure_envs.cli.exceptions import ScenarioFileError, UnknownEnvironmentError


class Scenario(BaseModel):
    """1 環境分の実行設定"""

    name: str = Field(..., min_length=1, description="環境名 (ALLURE_ENVIRONMENT に設定される)")
    env_file: Optional[str] = Field(None, description="読み込む .env ファイル (シナリオファイルからの相対パス)")
    targets: List[str] = Field(default_factory=lambda: ["tests"], description="pytest の対象")
    exclude: List[str] = Field(default_factory=list, description="--ignore で除外するパス")

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class ScenarioFile(BaseModel):
    """シナリオファイル全体"""

    environments: List[Scenario] = Field(default_factory=list)

    @field_validator("environments")
    @classmethod
    def unique_names(cls, value: List[Scenario]) -> List[Scenario]:
        seen = set()
        for scenario in value:
            if scenario.name in seen:
                raise ValueError(f"duplicate environment: {scenario.name}")
            seen.add(scenario.name)
        return value

    @property
    def names(self) -> List[str]:
        return [scenario.name for scenario in self.environments]

    def select(self, names: Optional[List[str]] = None) -> List[Scenario]:
        """指定された環境を定義順で返す (未指定なら全環境)"""
        if not names:
            return list(self.environments)

        for name in names:
            if name not in self.names:
                raise UnknownEnvironmentError(name, self.names)
        return [scenario for scenario in self.environments if scenario.name in names]


def load_scenarios(path: Path) -> ScenarioFile:
    """シナリオファイルを読み込む"""
    if not path.exists():
        raise ScenarioFileError(path, "file not found (run 'allure-envs init' to create one)")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ScenarioFileError(path, f"YAML parse error: {e}") from e

    if not isinstance(data, dict):
        raise ScenarioFileError(path, "top level must be a mapping")

    try:
        return ScenarioFile.model_validate(data)
    except ValidationError as e:
        raise ScenarioFileError(path, str(e)) from e


def resolve_env_file(scenario: Scenario, scenarios_path: Path) -> Optional[Path]:
    """env_file をシナリオファイル基準の絶対パスにする"""
    if not scenario.env_file:
        return None
    env_path = Path(scenario.env_file)
    if not env_path.is_absolute():
        env_path = scenarios_path.parent / env_path
    return env_path.resolve()
