"""Range 简写解析模块.

支持在字段名中直接书写比较操作符，例如:
    "age >= 18"          -> ("age", {"gte": "18"})
    "age > 10 < 20"      -> ("age", {"gt": "10", "lt": "20"})
    "created<=now-1d"    -> ("created", {"lte": "now-1d"})
"""

from __future__ import annotations

import logging
import re

from esquery.core.operators import RangeOperator
from esquery.exceptions import RangeShorthandError

logger = logging.getLogger(__name__)

# 匹配简写中的字段名部分
_FIELD_PATTERN = re.compile(r"\s*([^\s<>=]+)\s*")

# 匹配一个 "操作符 值" 对，值不能包含空白和比较符号
_BOUND_PATTERN = re.compile(r"(>=|<=|>|<)\s*([^\s<>=]+)\s*")


def is_range_shorthand(expression: str) -> bool:
    """判断字符串是否包含比较操作符."""
    return "<" in expression or ">" in expression


def parse_range_shorthand(expression: str) -> tuple[str, dict[str, str]]:
    """
    解析 Range 简写表达式.

    不含 < 或 > 的字符串视为普通字段名，原样返回。
    同一操作符出现多次时，以最后一次为准。值始终保留为字符串。

    Args:
        expression: 简写表达式，如 "age >= 18"

    Returns:
        (字段名, 边界选项) 元组

    Raises:
        RangeShorthandError: 缺少字段名、操作符后缺少值或存在无法解析的内容时
    """
    if not is_range_shorthand(expression):
        return expression, {}

    field_match = _FIELD_PATTERN.match(expression)
    if field_match is None:
        raise RangeShorthandError(
            f"Range shorthand is missing a field name: {expression!r}"
        )

    field = field_match.group(1)
    bounds: dict[str, str] = {}
    pos = field_match.end()

    while pos < len(expression):
        bound_match = _BOUND_PATTERN.match(expression, pos)
        if bound_match is None:
            raise RangeShorthandError(
                f"Cannot parse range shorthand {expression!r} at position {pos}: "
                f"{expression[pos:]!r}"
            )
        operator = RangeOperator(bound_match.group(1))
        if operator.option in bounds:
            logger.debug(
                f"Range shorthand {expression!r} repeats '{operator.value}', "
                f"last value wins"
            )
        bounds[operator.option] = bound_match.group(2)
        pos = bound_match.end()

    return field, bounds
