"""
CaseContext コンテキスト管理

pytest の node id から実行中テストの namespace / クラス名を導出し、
ContextVar を使用して実行中のテスト情報を共有します。
"""

from contextvars import ContextVar
from dataclasses import dataclass
from typing import Optional

NODEID_SEPARATOR = "::"


@dataclass(frozen=True)
class CaseContext:
    """
    実行中テストのメタデータ

    namespace: Suite ラベルに使うドット区切りのパス (ルート直下のモジュールでは None)
    class_name: Sub Suite ラベルに使う宣言スコープ名 (クラス名、クラス外ならモジュール名)
    """

    nodeid: str
    namespace: Optional[str]
    class_name: str

    @classmethod
    def from_nodeid(cls, nodeid: str) -> "CaseContext":
        """
        node id (例: tests/api/test_users.py::TestUsers::test_get[1]) から生成する

        - クラス内のテスト: class_name = 最も内側のクラス、namespace = モジュールパス + 外側のクラス
        - モジュール直下のテスト: class_name = モジュール名、namespace = パッケージパス
        """
        # パラメータ ID ([...]) には "::" が含まれ得るため、分割前に除去する
        base = nodeid
        first_separator = nodeid.find(NODEID_SEPARATOR)
        if first_separator >= 0:
            bracket = nodeid.find("[", first_separator)
            if bracket >= 0:
                base = nodeid[:bracket]

        path, *scopes = base.split(NODEID_SEPARATOR)

        segments = [s for s in path.replace("\\", "/").split("/") if s not in ("", ".", "..")]
        if segments:
            # 拡張子を除去 (test_users.py -> test_users)
            segments[-1] = segments[-1].rsplit(".", 1)[0]

        # 末尾はテスト関数名なので除外
        classes = scopes[:-1]

        if classes:
            class_name = classes[-1]
            namespace_parts = segments + classes[:-1]
        else:
            class_name = segments[-1] if segments else path
            namespace_parts = segments[:-1]

        namespace = ".".join(namespace_parts) or None
        return cls(nodeid=nodeid, namespace=namespace, class_name=class_name)


# 実行中テストの CaseContext を格納するコンテキスト変数
_case_context_var: ContextVar[Optional[CaseContext]] = ContextVar("case_context", default=None)


def get_case_context() -> Optional[CaseContext]:
    """現在の CaseContext を取得"""
    return _case_context_var.get()


def set_case_context(context: CaseContext) -> CaseContext:
    """CaseContext を設定する"""
    _case_context_var.set(context)
    return context


def clear_case_context() -> None:
    """CaseContext をクリア"""
    _case_context_var.set(None)
