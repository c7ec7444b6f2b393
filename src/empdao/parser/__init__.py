"""SQL パーサーパッケージ."""

from empdao.parser.tokenizer import Token, tokenize
from empdao.parser.twoway import ParsedSQL, TwoWaySQLParser, parse_sql

__all__ = ["ParsedSQL", "Token", "TwoWaySQLParser", "parse_sql", "tokenize"]
