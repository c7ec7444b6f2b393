"""empdao マッパーパッケージ."""

from empdao.mapper.column import Column
from empdao.mapper.dataclass import DataclassMapper
from empdao.mapper.protocol import RowMapper

__all__ = ["Column", "DataclassMapper", "RowMapper"]
