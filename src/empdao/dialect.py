"""Dialect enum: RDBMS ごとの SQL 方言定義."""

from __future__ import annotations

from enum import Enum
from typing import Any


class Dialect(Enum):
    """RDBMS ごとの SQL 方言.

    POSTGRESQL と MYSQL は同じプレースホルダ ``%s`` を使用するが、
    方言固有ファイルの拡張子が異なるため別メンバーとして定義する。
    """

    SQLITE = ("sqlite", "?")
    POSTGRESQL = ("postgresql", "%s")
    MYSQL = ("mysql", "%s")
    ORACLE = ("oracle", ":name")

    def __init__(self, dialect_id: str, placeholder_fmt: str) -> None:
        self._dialect_id = dialect_id
        self._placeholder_fmt = placeholder_fmt

    @property
    def dialect_id(self) -> str:
        """方言固有 SQL ファイルの接尾辞を返す."""
        return self._dialect_id

    @property
    def placeholder(self) -> str:
        """プレースホルダ文字列を返す."""
        return self._placeholder_fmt

    @property
    def has_native_date(self) -> bool:
        """DATE 型をドライバがそのまま扱えるか.

        SQLite には DATE 型がないため、日付は ISO 形式の文字列で保存する。
        """
        match self:
            case Dialect.SQLITE:
                return False
            case _:
                return True


def detect_dialect(connection: Any) -> Dialect | None:
    """Connection オブジェクトのモジュール名から Dialect を推定する."""
    module = type(connection).__module__
    if "sqlite3" in module:
        return Dialect.SQLITE
    if "psycopg" in module:
        return Dialect.POSTGRESQL
    if "pymysql" in module:
        return Dialect.MYSQL
    if "oracledb" in module:
        return Dialect.ORACLE
    return None
