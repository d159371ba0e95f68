"""
レポートラベル出力

Allure のテスト結果レコードへパラメータ / Suite ラベルを書き込むシンク。
"""

from typing import Protocol

import allure


class ReportLabels(Protocol):
    """実行中テストのレポートレコードへの書き込み口"""

    def add_test_parameter(self, name: str, value: str) -> None: ...

    def add_parent_suite(self, name: str) -> None: ...

    def add_suite(self, name: str) -> None: ...

    def add_sub_suite(self, name: str) -> None: ...


class AllureReportLabels:
    """
    allure-pytest の動的 API (allure.dynamic) へ委譲する実装

    --alluredir 未指定で allure-pytest が無効な場合、各呼び出しは何もしない。
    """

    def add_test_parameter(self, name: str, value: str) -> None:
        allure.dynamic.parameter(name, value)

    def add_parent_suite(self, name: str) -> None:
        allure.dynamic.parent_suite(name)

    def add_suite(self, name: str) -> None:
        allure.dynamic.suite(name)

    def add_sub_suite(self, name: str) -> None:
        allure.dynamic.sub_suite(name)
