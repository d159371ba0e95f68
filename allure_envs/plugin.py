"""
pytest プラグイン

pytest11 エントリポイントとして登録され、各テストの teardown で
TestEnvironmentAnnotator を呼び出します。

無効化する場合: pytest -p no:allure_envs
"""

import logging

import pytest

from allure_envs.annotator import TestEnvironmentAnnotator
from allure_envs.config import ENVIRONMENT_VARIABLE, load_config
from allure_envs.core.case_context import CaseContext, clear_case_context, set_case_context
from allure_envs.core.logging_config import (
    PLUGIN_LOGGER_NAME,
    configure_plugin_logging,
    remove_plugin_logging,
    resolve_level,
)
from allure_envs.reporting import AllureReportLabels

logger = logging.getLogger(__name__)

ANNOTATOR_KEY = pytest.StashKey[TestEnvironmentAnnotator]()
LOG_HANDLER_KEY = pytest.StashKey[tuple]()


def pytest_addoption(parser):
    group = parser.getgroup("allure-envs", "Allure environment labels")
    group.addoption(
        "--allure-env",
        action="store",
        dest="allure_env",
        default=None,
        metavar="NAME",
        help=f"Environment name for the env parameter and parent suite (overrides {ENVIRONMENT_VARIABLE})",
    )


def pytest_configure(config):
    try:
        level = resolve_level(load_config().LOG_LEVEL)
    except ValueError as e:
        raise pytest.UsageError(str(e)) from e

    previous_level = logging.getLogger(PLUGIN_LOGGER_NAME).level
    config.stash[LOG_HANDLER_KEY] = (configure_plugin_logging(level), previous_level)

    config.stash[ANNOTATOR_KEY] = TestEnvironmentAnnotator(
        AllureReportLabels(), environment_override=config.getoption("allure_env")
    )


def pytest_unconfigure(config):
    stashed = config.stash.get(LOG_HANDLER_KEY, None)
    if stashed is not None:
        remove_plugin_logging(*stashed)


def pytest_report_header(config):
    annotator = config.stash.get(ANNOTATOR_KEY, None)
    if annotator is None:
        return None
    environment = annotator.resolve_environment()
    return f"allure environment: {environment or '(not set)'}"


@pytest.hookimpl(wrapper=True)
def pytest_runtest_protocol(item, nextitem):
    set_case_context(CaseContext.from_nodeid(item.nodeid))
    try:
        return (yield)
    finally:
        clear_case_context()


@pytest.hookimpl(tryfirst=True)
def pytest_runtest_teardown(item):
    # fixture の後処理より先に実行し、後処理の失敗でラベルが欠けないようにする
    annotator = item.config.stash.get(ANNOTATOR_KEY, None)
    if annotator is None:
        return
    annotator.annotate(CaseContext.from_nodeid(item.nodeid))
