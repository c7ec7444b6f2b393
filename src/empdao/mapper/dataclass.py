"""DataclassMapper: dataclass 用の自動マッパー."""

from __future__ import annotations

import types
from dataclasses import dataclass, fields, is_dataclass
from datetime import date, datetime
from typing import Annotated, Any, ClassVar, Union, get_args, get_origin, get_type_hints

from empdao.exceptions import MappingError
from empdao.mapper.column import Column


@dataclass(frozen=True)
class _FieldSpec:
    """フィールドごとのマッピング情報."""

    column: str
    base_type: Any
    nullable: bool


class DataclassMapper:
    """Dataclass 用の自動マッパー.

    ``Annotated[T, Column("X")]`` で指定したカラム名、なければフィールド名で
    行辞書から値を取り出す。カラム名の大文字・小文字は区別しない。
    """

    _spec_cache: ClassVar[dict[type, dict[str, _FieldSpec]]] = {}

    def __init__(self, entity_cls: type) -> None:
        if not is_dataclass(entity_cls):
            msg = f"{entity_cls} is not a dataclass"
            raise TypeError(msg)
        self.entity_cls = entity_cls
        self._specs = self._get_specs(entity_cls)

    @property
    def columns(self) -> dict[str, str]:
        """フィールド名→カラム名のマッピングを返す."""
        return {name: spec.column for name, spec in self._specs.items()}

    @classmethod
    def _get_specs(cls, entity_cls: type) -> dict[str, _FieldSpec]:
        """フィールド情報を取得（キャッシュ付き）."""
        if entity_cls not in cls._spec_cache:
            cls._spec_cache[entity_cls] = cls._build_specs(entity_cls)
        return cls._spec_cache[entity_cls]

    @classmethod
    def _build_specs(cls, entity_cls: type) -> dict[str, _FieldSpec]:
        hints = get_type_hints(entity_cls, include_extras=True)
        specs: dict[str, _FieldSpec] = {}
        for f in fields(entity_cls):
            type_hint = hints.get(f.name, Any)
            column = f.name
            if get_origin(type_hint) is Annotated:
                args = get_args(type_hint)
                type_hint = args[0]
                for arg in args[1:]:
                    if isinstance(arg, Column):
                        column = arg.name
                        break
            base_type, nullable = cls._unwrap_optional(type_hint)
            specs[f.name] = _FieldSpec(column=column, base_type=base_type, nullable=nullable)
        return specs

    @staticmethod
    def _unwrap_optional(type_hint: Any) -> tuple[Any, bool]:
        """``T | None`` を (T, True) に分解する."""
        if get_origin(type_hint) in (Union, types.UnionType):
            args = [a for a in get_args(type_hint) if a is not type(None)]
            nullable = len(args) != len(get_args(type_hint))
            base = args[0] if len(args) == 1 else Any
            return base, nullable
        return type_hint, type_hint is Any

    def map_row(self, row: dict[str, Any]) -> Any:
        """1行をエンティティに変換.

        Raises:
            MappingError: 必須フィールドのカラムが存在しない、または NULL の場合、
                日付カラムの値を解釈できない場合

        """
        row_lower = {k.lower(): v for k, v in row.items()}
        kwargs: dict[str, Any] = {}
        for field_name, spec in self._specs.items():
            if spec.column in row:
                value = row[spec.column]
            elif spec.column.lower() in row_lower:
                value = row_lower[spec.column.lower()]
            elif spec.nullable:
                value = None
            else:
                msg = f"Column {spec.column!r} is missing for {self.entity_cls.__name__}"
                raise MappingError(msg)

            if value is None:
                if not spec.nullable:
                    msg = f"Column {spec.column!r} is NULL but {field_name!r} is required"
                    raise MappingError(msg)
            elif spec.base_type is date:
                value = self._to_date(spec.column, value)
            kwargs[field_name] = value
        return self.entity_cls(**kwargs)

    def map_rows(self, rows: list[dict[str, Any]]) -> list[Any]:
        """複数行をエンティティのリストに変換."""
        return [self.map_row(row) for row in rows]

    def to_params(self, obj: Any) -> dict[str, Any]:
        """エンティティをフィールド名→値のパラメータ辞書に変換."""
        return {name: getattr(obj, name) for name in self._specs}

    @staticmethod
    def _to_date(column: str, value: Any) -> date:
        """DB から返った値を date に正規化する."""
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            try:
                return date.fromisoformat(value[:10])
            except ValueError as exc:
                msg = f"Column {column!r} has an invalid date: {value!r}"
                raise MappingError(msg) from exc
        msg = f"Column {column!r} has an unexpected type for date: {type(value).__name__}"
        raise MappingError(msg)
