"""esquery 操作符定义模块."""

from enum import Enum


class BoolOccurrence(str, Enum):
    """bool 查询中子句的出现类型."""

    MUST = "must"
    SHOULD = "should"
    MUST_NOT = "must_not"
    FILTER = "filter"


class RangeOperator(str, Enum):
    """Range 简写支持的比较操作符."""

    GT = ">"
    LT = "<"
    GTE = ">="
    LTE = "<="

    @property
    def option(self) -> str:
        """对应的 range 选项名."""
        return _RANGE_OPTIONS[self]


_RANGE_OPTIONS = {
    RangeOperator.GT: "gt",
    RangeOperator.LT: "lt",
    RangeOperator.GTE: "gte",
    RangeOperator.LTE: "lte",
}


class SortOrder(str, Enum):
    """排序方向."""

    ASC = "asc"
    DESC = "desc"
