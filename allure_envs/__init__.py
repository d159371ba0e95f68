"""
allure-envs

テスト実行環境 (ALLURE_ENVIRONMENT) と Suite 階層を Allure レポートに付与する pytest プラグイン。
"""

__version__ = "0.1.0"
