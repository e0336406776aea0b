"""构建器配置数据模型模块.

提供分页参数（Paging）和查询配置（QueryConfig），创建时自动校验。
"""

from __future__ import annotations

import numbers
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from esquery.core.constants import QueryBodyKeys
from esquery.core.expression import Expression
from esquery.exceptions import ConfigurationError


def _validate_paging_value(name: str, value: Any) -> None:
    """校验 from / size 取值，必须为非负整数（布尔值不算）."""
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(
            f"{name} must be a non-negative int, got {type(value).__name__}: {value!r}"
        )
    if value < 0:
        raise ConfigurationError(f"{name} must be >= 0, got {value}")


def check_expression_argument(expression: Any) -> None:
    """
    校验变长参数中的单个表达式.

    数字作为表达式传入时无法区分是子句还是分页参数，直接拒绝。

    Raises:
        ConfigurationError: 表达式为数字或布尔值时
    """
    if isinstance(expression, (numbers.Number, bool)):
        raise ConfigurationError(
            f"Numeric argument {expression!r} is ambiguous; "
            f"pass paging as from_=/size= keywords or use QueryConfig"
        )


@dataclass(frozen=True)
class Paging:
    """分页参数.

    Attributes:
        from_: 起始偏移量，None 表示不设置
        size: 返回数量，None 表示不设置。0 是合法值（只返回聚合结果）

    Raises:
        ConfigurationError: 取值不是非负整数时抛出

    Examples:
        >>> Paging(from_=10, size=5).to_dict()
        {'from': 10, 'size': 5}
        >>> Paging().to_dict()
        {}
    """

    from_: int | None = None
    size: int | None = None

    def __post_init__(self) -> None:
        """校验分页参数."""
        _validate_paging_value("from", self.from_)
        _validate_paging_value("size", self.size)

    def to_dict(self) -> dict[str, int]:
        """转换为查询体中的分页字段，只包含已设置的字段."""
        result: dict[str, int] = {}
        if self.from_ is not None:
            result[QueryBodyKeys.FROM] = self.from_
        if self.size is not None:
            result[QueryBodyKeys.SIZE] = self.size
        return result


@dataclass
class QueryConfig:
    """查询构建配置.

    用显式字段代替 "最后两个数字参数是 from/size" 的位置约定。

    Attributes:
        expressions: 子句列表，元素可以是子句映射、构建器或返回子句列表的函数
        from_: 起始偏移量
        size: 返回数量

    Examples:
        config = QueryConfig(
            expressions=[match("title", "es"), term("status", "active")],
            from_=0,
            size=20,
        )
        OrQuery.from_config(config)
    """

    expressions: list[Mapping[str, Any] | Expression | Callable[[], Any]] = field(
        default_factory=list
    )
    from_: int | None = None
    size: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.expressions, (list, tuple)):
            raise ConfigurationError(
                f"QueryConfig.expressions must be a list, "
                f"got {type(self.expressions).__name__}"
            )
        self.expressions = list(self.expressions)
        for expression in self.expressions:
            check_expression_argument(expression)
        _validate_paging_value("from", self.from_)
        _validate_paging_value("size", self.size)

    @property
    def paging(self) -> Paging:
        """分页参数."""
        return Paging(from_=self.from_, size=self.size)
