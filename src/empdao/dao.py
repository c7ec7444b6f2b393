"""EmployeeDAO: EMPLOYEE テーブルへのアクセス."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from empdao.database import Database
from empdao.mapper.dataclass import DataclassMapper
from empdao.models import Employee

if TYPE_CHECKING:
    from empdao.dialect import Dialect

logger = logging.getLogger(__name__)


class EmployeeDAO:
    """EMPLOYEE テーブルに対する CRUD 操作.

    各メソッドは 1 文の SQL を実行する。失敗時は元の例外を cause に持つ
    ``PersistenceError`` を送出し、リトライやロールバックは行わない。
    接続は呼び出し側が所有し、複数スレッドからの同時利用は呼び出し側で直列化すること。

    Examples:
        >>> dao = EmployeeDAO(connection)
        >>> dao.select_employee(10001)
        Employee(employee_id=10001, employee_name='Alice', ...)
        >>> dao.update_employee_salary("SALES", 3000)
        3

    """

    def __init__(
        self,
        connection: Any,
        *,
        dialect: Dialect | None = None,
        auto_commit: bool = False,
    ) -> None:
        self._db = Database(connection, dialect=dialect, auto_commit=auto_commit)
        self._mapper = DataclassMapper(Employee)

    def select_employee(self, employee_id: int) -> Employee | None:
        """主キーで検索する. 該当行がなければ None."""
        return self._db.query_one(
            Employee,
            "employee/find_by_id.sql",
            {"employee_id": employee_id},
            mapper=self._mapper,
        )

    def select_employees_by_salary(self, lower_salary: int, upper_salary: int) -> list[Employee]:
        """月給が lower_salary 以上 upper_salary 以下の社員を検索する.

        並び順は保証しない。lower_salary > upper_salary の場合は空リスト。
        """
        return self._db.query(
            Employee,
            "employee/find_by_salary_range.sql",
            {"lower_salary": lower_salary, "upper_salary": upper_salary},
            mapper=self._mapper,
        )

    def insert_employee(self, employee: Employee) -> None:
        """1 行挿入する. 主キー重複時は PersistenceError."""
        self._db.execute("employee/insert.sql", self._mapper.to_params(employee))
        logger.debug("Inserted employee %d", employee.employee_id)

    def delete_employee(self, employee_id: int) -> int:
        """主キーで削除し、削除件数を返す. 該当なしは 0."""
        return self._db.execute("employee/delete_by_id.sql", {"employee_id": employee_id})

    def update_employee_salary(self, department_name: str, increase: int) -> int:
        """部署の全社員の月給に increase を加算し、更新件数を返す."""
        return self._db.execute(
            "employee/update_salary_by_department.sql",
            {"department_name": department_name, "increase": increase},
        )
