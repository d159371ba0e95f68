"""
allure-envs init - シナリオファイルの雛形を作成

Usage:
    allure-envs init [--force]
"""

from allure_envs.cli import config as cli_config
from allure_envs.cli.core import logging

SCENARIOS_TEMPLATE = """\
# allure-envs scenario file
# 環境ごとに pytest を実行し、結果を 1 つの Allure レポートにまとめる
environments:
  - name: staging
    env_file: envs/.env.staging
    targets: [tests]
  - name: production
    env_file: envs/.env.production
    targets: [tests]
"""


def run(args):
    path = cli_config.resolve_scenarios_file(getattr(args, "file", None))

    if path.exists() and not getattr(args, "force", False):
        logging.warning(f"{logging.highlight(path)} already exists (use --force to overwrite)")
        return

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(SCENARIOS_TEMPLATE, encoding="utf-8")
    logging.success(f"Created {logging.highlight(path)}")
