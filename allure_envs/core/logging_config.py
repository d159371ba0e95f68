"""
Logging Configuration
Python JSON Logger を使用した構造化ログの設定を行います。

実行中テストがあれば、その node id と Suite 情報をログに含めます。
"""

import logging
import sys
from datetime import datetime, timezone

from pythonjsonlogger.json import JsonFormatter

from .case_context import get_case_context


class CustomJsonFormatter(JsonFormatter):
    """
    アプリケーション固有のフィールドを追加するカスタムフォーマッタ
    """

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        if not log_record.get("timestamp"):
            log_record["timestamp"] = datetime.now(timezone.utc).strftime(
                "%Y-%m-%dT%H:%M:%S.%fZ"
            )
        if log_record.get("level"):
            log_record["level"] = log_record["level"].upper()
        else:
            log_record["level"] = record.levelname

        context = get_case_context()
        if context is not None:
            log_record.setdefault("test_nodeid", context.nodeid)
            if context.namespace:
                log_record.setdefault("test_suite", context.namespace)
            log_record.setdefault("test_sub_suite", context.class_name)


def setup_logging(level=logging.INFO):
    """
    JSONロギングのセットアップ
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    handler.setFormatter(formatter)

    # 既存のハンドラをクリア
    logger.handlers = []
    logger.addHandler(handler)

    # ライブラリのログレベル調整
    logging.getLogger("allure_commons").setLevel(logging.WARNING)


PLUGIN_LOGGER_NAME = "allure_envs"


def resolve_level(name: str) -> int:
    """LOG_LEVEL の文字列をログレベルに変換する (不正な値は ValueError)"""
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown LOG_LEVEL: {name}")
    return level


def configure_plugin_logging(level=logging.INFO) -> logging.Handler:
    """
    pytest プロセス内で allure_envs ロガーに JSON ハンドラを追加する

    ルートロガーには触れないため、pytest のログキャプチャはそのまま動作する。
    """
    logger = logging.getLogger(PLUGIN_LOGGER_NAME)
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    logger.addHandler(handler)
    return handler


def remove_plugin_logging(handler: logging.Handler, previous_level=logging.NOTSET) -> None:
    logger = logging.getLogger(PLUGIN_LOGGER_NAME)
    logger.removeHandler(handler)
    logger.setLevel(previous_level)
