"""Employee エンティティ."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Annotated

from empdao.mapper.column import Column


@dataclass(frozen=True)
class Employee:
    """EMPLOYEE テーブルの 1 行を表す."""

    employee_id: Annotated[int, Column("EMPLOYEE_ID")]
    employee_name: Annotated[str, Column("EMPLOYEE_NAME")]
    department_name: Annotated[str, Column("DEPARTMENT_NAME")]
    entrance_date: Annotated[date, Column("ENTRANCE_DATE")]
    job_name: Annotated[str | None, Column("JOB_NAME")]
    salary: Annotated[int, Column("SALARY")]
