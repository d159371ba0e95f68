from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def isolate_cli(monkeypatch, tmp_path):
    """シナリオファイル探索とロギング設定をテストごとに隔離する"""
    monkeypatch.delenv("ALLURE_ENVS_FILE", raising=False)
    monkeypatch.delenv("ALLURE_ENVIRONMENT", raising=False)
    monkeypatch.chdir(tmp_path)
    with patch("allure_envs.cli.main.setup_logging"):
        yield


@pytest.fixture
def scenarios_file(tmp_path):
    path = tmp_path / "environments.yml"
    path.write_text(
        """
environments:
  - name: staging
    env_file: envs/.env.staging
    targets: [tests/api, tests/ui]
    exclude: [tests/ui/slow]
  - name: production
    targets: [tests]
""",
        encoding="utf-8",
    )
    envs_dir = tmp_path / "envs"
    envs_dir.mkdir()
    (envs_dir / ".env.staging").write_text(
        "BASE_URL=https://staging.example.com\nALLURE_ENVIRONMENT=ignored\n", encoding="utf-8"
    )
    return path
