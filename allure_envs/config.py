"""
Annotator設定定義

環境変数から設定をロードし、Pydanticモデルとして提供します。
pydantic-settings を使用して型安全性とデフォルト値を管理します。
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENVIRONMENT_VARIABLE = "ALLURE_ENVIRONMENT"


class AnnotatorConfig(BaseSettings):
    """
    Allure 環境ラベル付与の設定管理
    """

    ALLURE_ENVIRONMENT: Optional[str] = Field(
        default=None, description="テスト実行環境名 (env パラメータ / Parent Suite)"
    )
    LOG_LEVEL: str = Field(default="INFO", description="ログレベル")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )


def load_config() -> AnnotatorConfig:
    """
    設定をロードする

    テスト中に環境変数が変わることがあるため、キャッシュせず毎回インスタンス化する。
    """
    return AnnotatorConfig()


def read_environment() -> Optional[str]:
    """
    ALLURE_ENVIRONMENT をプロセスの環境変数のみから読み込む

    .env の値は env パラメータ / Parent Suite に使わない。
    """
    return AnnotatorConfig(_env_file=None).ALLURE_ENVIRONMENT
