"""empdao: EMPLOYEE テーブル用のデータアクセス層."""

from empdao.dao import EmployeeDAO
from empdao.database import Database
from empdao.dialect import Dialect
from empdao.exceptions import (
    EmpdaoError,
    MappingError,
    PersistenceError,
    SqlFileNotFoundError,
    SqlParseError,
)
from empdao.loader import SqlLoader
from empdao.mapper import Column, DataclassMapper, RowMapper
from empdao.models import Employee
from empdao.parser import ParsedSQL, TwoWaySQLParser, parse_sql

__all__ = [
    "Column",
    "DataclassMapper",
    "Database",
    "Dialect",
    "EmpdaoError",
    "Employee",
    "EmployeeDAO",
    "MappingError",
    "ParsedSQL",
    "PersistenceError",
    "RowMapper",
    "SqlFileNotFoundError",
    "SqlLoader",
    "SqlParseError",
    "TwoWaySQLParser",
    "parse_sql",
]
