"""
TestEnvironmentAnnotator

テスト終了後、実行環境と Suite 階層をレポートレコードに付与します。

- env パラメータ / Parent Suite: ALLURE_ENVIRONMENT (空なら付与しない)
- Suite: テストの namespace (空なら付与しない)
- Sub Suite: テストの宣言クラス名 (常に付与)
"""

import logging
from typing import Optional

from allure_envs.config import read_environment
from allure_envs.core.case_context import CaseContext
from allure_envs.reporting import ReportLabels

logger = logging.getLogger(__name__)

ENV_PARAMETER_NAME = "env"


class TestEnvironmentAnnotator:
    """テストごとに 1 回、テスト本体の後に呼び出される"""

    # pytest に テストクラスとして収集させない
    __test__ = False

    def __init__(self, labels: ReportLabels, environment_override: Optional[str] = None):
        self.labels = labels
        self.environment_override = environment_override

    def resolve_environment(self) -> Optional[str]:
        """--allure-env 指定があればそれを、なければ ALLURE_ENVIRONMENT を返す"""
        if self.environment_override:
            return self.environment_override
        return read_environment()

    def annotate(self, context: CaseContext) -> None:
        environment = self.resolve_environment()
        if environment:
            self.labels.add_test_parameter(ENV_PARAMETER_NAME, environment)
            self.labels.add_parent_suite(environment)

        if context.namespace:
            self.labels.add_suite(context.namespace)

        self.labels.add_sub_suite(context.class_name)

        logger.debug(
            f"Annotated {context.nodeid}: env={environment!r} "
            f"suite={context.namespace!r} sub_suite={context.class_name!r}"
        )
