"""
カスタム例外クラス

シナリオファイルの読み込みと環境選択に関するエラーを表現します。
"""

from pathlib import Path


class AllureEnvsError(Exception):
    """allure-envs CLI の基底例外クラス"""

    pass


class ScenarioFileError(AllureEnvsError):
    """シナリオファイルが存在しない、または不正な場合の例外"""

    def __init__(self, path: Path, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid scenario file {path}: {detail}")


class UnknownEnvironmentError(AllureEnvsError):
    """シナリオファイルに定義されていない環境が指定された場合の例外"""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(
            f"Unknown environment: {name} (available: {', '.join(available) or 'none'})"
        )
