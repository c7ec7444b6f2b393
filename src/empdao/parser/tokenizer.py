"""SQL コメント内パラメータの字句解析."""

from __future__ import annotations

import re
from dataclasses import dataclass

# パラメータパターン
# /* name */'default' : コメント直後のリテラルはサンプル値として置換される
PARAM_PATTERN = re.compile(
    r"/\*\s*(\w+)\s*\*/\s*"
    r"("
    r"'(?:''|[^'])*'"  # 'string' (SQL escape: '')
    r"|-?\d+(?:\.\d+)?"  # number
    r"|NULL\b"  # NULL
    r"|\w+"  # identifier
    r")?"
)

# 文字列リテラルとコメント（コメント内の引用符はリテラルの開始とみなさない）
LITERAL_OR_COMMENT = re.compile(r"'(?:''|[^'])*'|/\*.*?\*/|--[^\n]*", re.DOTALL)


@dataclass(frozen=True)
class Token:
    """パラメータトークン."""

    name: str
    """パラメータ名."""

    default: str
    """デフォルト値文字列."""

    start: int
    """元文字列内の開始位置."""

    end: int
    """元文字列内の終了位置."""


def tokenize(sql: str) -> list[Token]:
    """SQL からパラメータトークンを抽出する.

    文字列リテラルの内側にあるコメントは対象外とする。

    Args:
        sql: SQL 文字列

    Returns:
        Token のリスト（出現順）

    """
    literal_ranges = [
        (m.start(), m.end())
        for m in LITERAL_OR_COMMENT.finditer(sql)
        if m.group().startswith("'")
    ]
    tokens: list[Token] = []
    for m in PARAM_PATTERN.finditer(sql):
        if _inside(m.start(), literal_ranges):
            continue
        tokens.append(
            Token(
                name=m.group(1),
                default=m.group(2) or "",
                start=m.start(),
                end=m.end(),
            )
        )
    return tokens


def _inside(pos: int, ranges: list[tuple[int, int]]) -> bool:
    """位置が既存範囲の内側にあるか判定する."""
    return any(r_start < pos < r_end for r_start, r_end in ranges)
