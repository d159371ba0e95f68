"""
allure-envs list - 定義済み環境の一覧表示
"""

from allure_envs.cli import config as cli_config
from allure_envs.cli.core import logging
from allure_envs.cli.scenarios import load_scenarios


def run(args):
    path = cli_config.resolve_scenarios_file(getattr(args, "file", None))
    scenarios = load_scenarios(path)

    if not scenarios.environments:
        logging.warning(f"No environments defined in {logging.highlight(path)}")
        return

    logging.step(f"Environments in {logging.highlight(path)}")
    for scenario in scenarios.environments:
        env_file = scenario.env_file or "-"
        logging.info(
            f"{logging.highlight(scenario.name)}  env_file={env_file}  "
            f"targets={' '.join(scenario.targets)}"
        )
