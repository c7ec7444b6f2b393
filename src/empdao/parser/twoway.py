"""2way SQL パーサー.

SQL ファイルはそのまま DB クライアントで実行できる形で記述し、
バインドパラメータは ``/* name */サンプル値`` の形式で埋め込む。
パース時にコメントとサンプル値をプレースホルダへ置換する。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from empdao.exceptions import SqlParseError
from empdao.parser.tokenizer import tokenize

if TYPE_CHECKING:
    from empdao.dialect import Dialect

_PLACEHOLDERS = frozenset({"?", "%s", ":name"})


@dataclass
class ParsedSQL:
    """パース結果."""

    sql: str
    params: list[Any] = field(default_factory=list)
    """?, %s 形式用."""

    named_params: dict[str, Any] = field(default_factory=dict)
    """:name 形式用."""

    @property
    def bind_values(self) -> list[Any] | dict[str, Any]:
        """プレースホルダ形式に応じて cursor.execute に渡す値を返す."""
        return self.named_params if self.named_params else self.params


class TwoWaySQLParser:
    """2way SQL パーサー."""

    def __init__(
        self,
        sql: str,
        placeholder: str = "?",
        *,
        dialect: Dialect | None = None,
    ) -> None:
        """初期化.

        Args:
            sql: SQL テンプレート
            placeholder: プレースホルダ形式 ("?", "%s", ":name")
            dialect: RDBMS 方言。指定時は dialect.placeholder を使用する。

        Raises:
            ValueError: dialect と placeholder (デフォルト以外) を同時に指定した場合、
                または未知のプレースホルダ形式の場合

        """
        if dialect is not None and placeholder != "?":
            msg = "dialect と placeholder は同時に指定できません"
            raise ValueError(msg)
        if placeholder not in _PLACEHOLDERS:
            msg = f"Unsupported placeholder: {placeholder!r}"
            raise ValueError(msg)
        self.original_sql = sql
        self.dialect = dialect
        self.placeholder = dialect.placeholder if dialect is not None else placeholder

    def parse(self, params: dict[str, Any]) -> ParsedSQL:
        """SQL をパースしてパラメータをバインド.

        Raises:
            SqlParseError: SQL 中のパラメータが params に存在しない場合

        """
        named = self.placeholder == ":name"
        pieces: list[str] = []
        bind_params: list[Any] = []
        named_bind_params: dict[str, Any] = {}
        pos = 0
        for token in tokenize(self.original_sql):
            if token.name not in params:
                line_number = self.original_sql.count("\n", 0, token.start) + 1
                msg = f"Parameter '{token.name}' is not given (line {line_number})"
                raise SqlParseError(msg)
            pieces.append(self.original_sql[pos : token.start])
            value = params[token.name]
            if named:
                pieces.append(f":{token.name}")
                named_bind_params[token.name] = value
            else:
                pieces.append(self.placeholder)
                bind_params.append(value)
            pos = token.end
        pieces.append(self.original_sql[pos:])
        sql = self._clean_sql("".join(pieces))
        return ParsedSQL(sql=sql, params=bind_params, named_params=named_bind_params)

    @staticmethod
    def _clean_sql(sql: str) -> str:
        """空行と末尾のセミコロンを取り除く."""
        lines = [line.rstrip() for line in sql.splitlines() if line.strip()]
        return "\n".join(lines).rstrip(";")


def parse_sql(
    sql: str,
    params: dict[str, Any],
    *,
    placeholder: str = "?",
    dialect: Dialect | None = None,
) -> ParsedSQL:
    """SQL をパースする便利関数.

    Args:
        sql: SQL テンプレート
        params: パラメータ辞書
        placeholder: プレースホルダ形式 ("?", "%s", ":name")
        dialect: RDBMS 方言。指定時は dialect.placeholder を使用する。

    Returns:
        パース結果

    """
    parser = TwoWaySQLParser(sql, placeholder=placeholder, dialect=dialect)
    return parser.parse(params)
