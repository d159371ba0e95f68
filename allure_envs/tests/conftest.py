import pytest


class RecordingReportLabels:
    """ReportLabels の呼び出しを記録するテストダブル"""

    def __init__(self):
        self.calls = []

    def add_test_parameter(self, name, value):
        self.calls.append(("parameter", name, value))

    def add_parent_suite(self, name):
        self.calls.append(("parent_suite", name))

    def add_suite(self, name):
        self.calls.append(("suite", name))

    def add_sub_suite(self, name):
        self.calls.append(("sub_suite", name))

    def of(self, kind):
        return [call[1:] for call in self.calls if call[0] == kind]


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    """
    シェルの ALLURE_ENVIRONMENT やカレントの .env に影響されないようにする
    """
    monkeypatch.delenv("ALLURE_ENVIRONMENT", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def recorder():
    return RecordingReportLabels()
