"""
esquery 工具函数模块

提供选项规范化、子句字段提取、按键匹配子句以及 Query String 校验等工具函数
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from luqum.exceptions import ParseError
from luqum.parser import lexer, parser

from esquery.core.constants import ClauseTypes, OptionKeys
from esquery.exceptions import QueryStringParseError

logger = logging.getLogger(__name__)


def normalize_options(options: Any, scalar_key: str) -> dict[str, Any]:
    """
    规范化子句选项.

    裸标量（字符串、数字、布尔值）会被包装为 {scalar_key: 标量}，
    映射会被浅拷贝，None 视为空选项。未知的选项键原样保留。

    示例:
        >>> normalize_options("hello", "query")
        {'query': 'hello'}
        >>> normalize_options({"query": "hello", "operator": "AND"}, "query")
        {'query': 'hello', 'operator': 'AND'}
        >>> normalize_options(None, "value")
        {}

    Args:
        options: 选项映射、裸标量或 None
        scalar_key: 裸标量对应的选项键，通常为 "query" 或 "value"

    Returns:
        新的选项字典
    """
    if options is None:
        return {}
    if isinstance(options, Mapping):
        return dict(options)
    return {scalar_key: options}


def clause_type(clause: Mapping[str, Any]) -> str:
    """获取子句类型，即子句的第一个顶层键."""
    return next(iter(clause))


def clause_fields(clause: Mapping[str, Any]) -> list[str]:
    """
    提取子句作用的字段名.

    规则:
        - exists: body["field"]
        - nested: body["path"]
        - multi_match / combined_fields / query_string / simple_query_string:
          body["fields"] 加上 default_field
        - ids / bool: 没有字段名
        - 其他: 子句内容中除子句级别选项（boost、_name 等）以外的所有键

    示例:
        >>> clause_fields({"match": {"title": {"query": "es"}}})
        ['title']
        >>> clause_fields({"exists": {"field": "user"}})
        ['user']

    Args:
        clause: 单键查询子句

    Returns:
        字段名列表，字段名本身可能包含点号
    """
    if not clause:
        return []

    kind = clause_type(clause)
    body = clause[kind]
    if not isinstance(body, Mapping) or kind in OptionKeys.FIELDLESS_CLAUSES:
        return []

    if kind == ClauseTypes.EXISTS:
        return [body["field"]] if "field" in body else []

    if kind == ClauseTypes.NESTED:
        return [body["path"]] if "path" in body else []

    if kind in OptionKeys.MULTI_FIELD_CLAUSES:
        fields = [f for f in body.get("fields", []) if isinstance(f, str)]
        if isinstance(body.get("default_field"), str):
            fields.append(body["default_field"])
        return fields

    return [k for k in body if k not in OptionKeys.CLAUSE_LEVEL_OPTIONS]


def matches_key(clause: Mapping[str, Any], key: str) -> bool:
    """
    判断子句是否与删除键匹配.

    满足以下任一条件即视为匹配:
        1. key 等于子句类型，如 "match"
        2. key 等于子句的某个字段名，如 "title" 或 "user.name"
        3. key 为 "子句类型.字段名" 形式的点路径，如 "range.age"

    Args:
        clause: 单键查询子句
        key: 删除键

    Returns:
        是否匹配
    """
    if not isinstance(clause, Mapping) or not clause:
        return False

    kind = clause_type(clause)
    if key == kind:
        return True

    fields = clause_fields(clause)
    if key in fields:
        return True

    prefix = f"{kind}."
    return key.startswith(prefix) and key[len(prefix) :] in fields


def validate_query_string(query_string: str) -> str:
    """
    使用 luqum 校验 Query String 语法.

    Args:
        query_string: Query String 字符串

    Returns:
        原始 Query String

    Raises:
        QueryStringParseError: 解析失败时抛出
    """
    if not query_string or not query_string.strip() or query_string.strip() == "*":
        return query_string

    try:
        parser.parse(query_string, lexer=lexer)
    except ParseError as e:
        raise QueryStringParseError(f"Failed to parse query string: {e}") from e

    logger.debug(f"Query string validated: {query_string}")
    return query_string
