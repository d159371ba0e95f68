"""
CLI 向けのコンソール出力ヘルパー

ステップ / 成功 / 警告 / エラーを色付きで標準出力に表示する。
"""

import sys

RESET = "\033[0m"
BOLD = "\033[1m"
CYAN = "\033[36m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
RED = "\033[31m"


def _use_color() -> bool:
    return sys.stdout.isatty()


def _paint(text: str, color: str) -> str:
    if not _use_color():
        return text
    return f"{color}{text}{RESET}"


def highlight(value) -> str:
    """値を強調表示する"""
    return _paint(str(value), BOLD)


def step(message: str) -> None:
    print(_paint(f"▶ {message}", CYAN))


def info(message: str) -> None:
    print(f"  {message}")


def success(message: str) -> None:
    print(_paint(f"✅ {message}", GREEN))


def warning(message: str) -> None:
    print(_paint(f"⚠️  {message}", YELLOW))


def error(message: str) -> None:
    print(_paint(f"❌ {message}", RED))
