"""Column アノテーション."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Column:
    """カラム名を指定するアノテーション."""

    name: str
