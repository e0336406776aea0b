"""表达式基类模块.

构建器（Must、Query、Sort 等）持有可变状态，纯数据部分通过 to_dict() 导出。
序列化和组合只接触 to_dict() 的结果，不会接触构建器的方法。
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from esquery.exceptions import ValidationError


class Expression(ABC):
    """可组合的查询表达式抽象基类."""

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """
        导出为纯数据字典.

        Returns:
            新的字典，修改它不会影响构建器自身的状态
        """
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {self.to_dict()}>"


def resolve_expression(expression: Expression | Mapping[str, Any]) -> dict[str, Any]:
    """
    将表达式转换为独立的数据字典.

    构建器会被导出为快照，映射会被深拷贝，之后修改来源不会影响返回值。

    Args:
        expression: 构建器或映射

    Returns:
        数据字典

    Raises:
        ValidationError: 既不是构建器也不是映射时
    """
    if isinstance(expression, Expression):
        return expression.to_dict()
    if isinstance(expression, Mapping):
        return copy.deepcopy(dict(expression))
    raise ValidationError(
        f"Expected a clause mapping or builder, got {type(expression).__name__}: "
        f"{expression!r}"
    )


def resolve_clause(expression: Expression | Mapping[str, Any]) -> dict[str, Any]:
    """
    将表达式转换为单键查询子句.

    Args:
        expression: 构建器或映射

    Returns:
        {子句类型: 子句内容} 形式的字典

    Raises:
        ValidationError: 结果不是单键映射时
    """
    clause = resolve_expression(expression)
    if len(clause) != 1:
        raise ValidationError(
            f"A clause must have exactly one top-level key, got {list(clause)}"
        )
    return clause
