"""empdao 例外クラス."""

from __future__ import annotations


class EmpdaoError(Exception):
    """empdao の基底例外."""


class SqlParseError(EmpdaoError):
    """SQL パースエラー."""


class MappingError(EmpdaoError):
    """マッピングエラー."""


class SqlFileNotFoundError(EmpdaoError):
    """SQL ファイルが見つからない."""


class PersistenceError(EmpdaoError):
    """データアクセス操作の失敗.

    接続断・制約違反・不正な検索結果など、操作中に発生した例外を
    ``__cause__`` に保持して送出される。
    """

    def __init__(self, message: str, *, sql_path: str | None = None) -> None:
        super().__init__(message)
        self.sql_path = sql_path

    @property
    def cause(self) -> BaseException | None:
        """元の例外を返す."""
        return self.__cause__
