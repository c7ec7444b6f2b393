"""Database: SQL ファイルの読み込み・実行・結果マッピングを統合する."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

from empdao.dialect import Dialect, detect_dialect
from empdao.exceptions import MappingError, PersistenceError
from empdao.loader import DEFAULT_SQL_DIR, SqlLoader
from empdao.mapper.dataclass import DataclassMapper
from empdao.parser.twoway import ParsedSQL, parse_sql

if TYPE_CHECKING:
    from empdao.mapper.protocol import RowMapper

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Database:
    """PEP 249 (DB-API 2.0) 接続の上で SQL ファイルを実行する.

    接続の生成・クローズは呼び出し側の責務で、このクラスは行わない。
    1 回の呼び出しにつき 1 つのカーソルを使い、終了時には必ずクローズする。

    Examples:
        >>> db = Database(connection)
        >>> rows = db.query(Employee, "employee/find_by_id.sql", {"employee_id": 1})
        >>> affected = db.execute("employee/delete_by_id.sql", {"employee_id": 1})

    """

    def __init__(
        self,
        connection: Any,
        *,
        sql_dir: str | Path = DEFAULT_SQL_DIR,
        dialect: Dialect | None = None,
        auto_commit: bool = False,
    ) -> None:
        """初期化.

        Args:
            connection: DB 接続オブジェクト（PEP 249 DB-API 2.0 準拠）
            sql_dir: SQL ファイルのベースディレクトリ
            dialect: RDBMS 方言（None の場合は接続から自動検出を試みる）
            auto_commit: True の場合、execute() 後に自動で commit する

        """
        self._connection = connection
        self._loader = SqlLoader(sql_dir)
        self._dialect = dialect if dialect is not None else detect_dialect(connection)
        self._auto_commit = auto_commit

    @property
    def dialect(self) -> Dialect | None:
        return self._dialect

    def commit(self) -> None:
        """トランザクションをコミットする（connection.commit() のラッパー）."""
        self._connection.commit()

    def rollback(self) -> None:
        """トランザクションをロールバックする（connection.rollback() のラッパー）."""
        self._connection.rollback()

    def query(
        self,
        entity: type[T],
        sql_path: str,
        params: dict[str, Any] | None = None,
        *,
        mapper: RowMapper[T] | None = None,
    ) -> list[T]:
        """SELECT を実行し、結果をエンティティのリストで返す.

        Args:
            entity: dataclass のエンティティクラス
            sql_path: SQL ファイルパス（sql_dir からの相対パス）
            params: パラメータ辞書
            mapper: 行マッパー（省略時は DataclassMapper）

        Returns:
            エンティティのリスト

        Raises:
            PersistenceError: 実行またはマッピングに失敗した場合

        """
        rows = self._execute_query(sql_path, params)
        row_mapper: RowMapper[T] = mapper if mapper is not None else DataclassMapper(entity)
        try:
            return row_mapper.map_rows(rows)
        except MappingError as exc:
            logger.warning("Malformed result from %s: %s", sql_path, exc)
            msg = f"Failed to map result of {sql_path}"
            raise PersistenceError(msg, sql_path=sql_path) from exc

    def query_one(
        self,
        entity: type[T],
        sql_path: str,
        params: dict[str, Any] | None = None,
        *,
        mapper: RowMapper[T] | None = None,
    ) -> T | None:
        """SELECT を実行し、最初の1行をエンティティで返す.

        Returns:
            エンティティ、または結果がない場合は None

        """
        entities = self.query(entity, sql_path, params, mapper=mapper)
        if not entities:
            return None
        return entities[0]

    def execute(
        self,
        sql_path: str,
        params: dict[str, Any] | None = None,
    ) -> int:
        """INSERT/UPDATE/DELETE を実行し、影響行数を返す.

        Args:
            sql_path: SQL ファイルパス（sql_dir からの相対パス）
            params: パラメータ辞書

        Returns:
            影響を受けた行数

        Raises:
            PersistenceError: 実行に失敗した場合

        """
        result = self._parse(sql_path, params)
        with self._cursor(sql_path) as cursor:
            cursor.execute(result.sql, self._adapt(result))
            if self._auto_commit:
                self._connection.commit()
            affected = cursor.rowcount
        logger.debug("%s affected %d row(s)", sql_path, affected)
        return affected

    def _execute_query(
        self,
        sql_path: str,
        params: dict[str, Any] | None,
    ) -> list[dict[str, Any]]:
        """SELECT を実行し、結果を辞書のリストで返す."""
        result = self._parse(sql_path, params)
        with self._cursor(sql_path) as cursor:
            cursor.execute(result.sql, self._adapt(result))
            if cursor.description is None:
                return []
            columns = [desc[0] for desc in cursor.description]
            rows = [
                dict(row) if isinstance(row, Mapping) else dict(zip(columns, row))
                for row in cursor.fetchall()
            ]
        logger.debug("%s returned %d row(s)", sql_path, len(rows))
        return rows

    @contextmanager
    def _cursor(self, sql_path: str) -> Iterator[Any]:
        """カーソルを開き、終了時に必ずクローズする.

        ドライバの例外は PersistenceError に包んで送出する。
        先行する失敗がある場合、クローズ時の例外はログに残して元の失敗を優先する。
        """
        try:
            cursor = self._connection.cursor()
        except Exception as exc:
            raise self._failure(sql_path, exc) from exc
        try:
            yield cursor
        except Exception as exc:
            self._close_after_failure(sql_path, cursor)
            raise self._failure(sql_path, exc) from exc
        except BaseException:
            self._close_after_failure(sql_path, cursor)
            raise
        try:
            cursor.close()
        except Exception as exc:
            raise self._failure(sql_path, exc) from exc

    @staticmethod
    def _close_after_failure(sql_path: str, cursor: Any) -> None:
        try:
            cursor.close()
        except Exception as exc:
            logger.warning("Closing cursor for %s failed: %s", sql_path, exc)

    @staticmethod
    def _failure(sql_path: str, exc: Exception) -> PersistenceError:
        logger.warning("Statement %s failed: %s", sql_path, exc)
        msg = f"Failed to execute {sql_path}"
        return PersistenceError(msg, sql_path=sql_path)

    def _parse(self, sql_path: str, params: dict[str, Any] | None) -> ParsedSQL:
        """SQL ファイルを読み込み、方言に合わせてパースする."""
        sql_template = self._loader.load(sql_path, dialect=self._dialect)
        result = parse_sql(sql_template, params or {}, dialect=self._dialect)
        logger.debug(
            "Executing %s with %d parameter(s)",
            sql_path,
            len(result.named_params or result.params),
        )
        return result

    def _adapt(self, result: ParsedSQL) -> list[Any] | dict[str, Any]:
        """ドライバが扱えない値を変換する."""
        if self._dialect is None or self._dialect.has_native_date:
            return result.bind_values
        if result.named_params:
            return {k: self._to_text(v) for k, v in result.named_params.items()}
        return [self._to_text(v) for v in result.params]

    @staticmethod
    def _to_text(value: Any) -> Any:
        if isinstance(value, (date, datetime)):
            return value.isoformat()
        return value
