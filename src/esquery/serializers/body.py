"""查询体序列化模块.

serialize() 只处理纯数据；es_query() 负责把构建器和映射合并为一个查询体再序列化。

使用示例:
    from esquery import OrQuery, Sort, es_query, match

    body = es_query(OrQuery(match("title", "es"), size=10), Sort({"created": "desc"}))
    # '{"query":{"bool":{"should":[...]}},"size":10,"sort":[{"created":"desc"}]}'
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from elasticsearch.exceptions import SerializationError
from elasticsearch.serializer import JsonSerializer

from esquery.core.expression import Expression
from esquery.exceptions import ValidationError
from esquery.typing import QueryBody

logger = logging.getLogger(__name__)

# 与 Elasticsearch 客户端发送请求体时使用同一个序列化器，输出紧凑且不转义非 ASCII 字符
_serializer = JsonSerializer()


def serialize(tree: Mapping[str, Any]) -> str:
    """
    将纯数据查询体序列化为 JSON 文本.

    同一个查询体多次序列化的结果完全一致。

    Args:
        tree: 查询体字典

    Returns:
        紧凑 JSON 文本

    Raises:
        ValidationError: 查询体包含无法序列化的值时
    """
    try:
        return _serializer.dumps(tree).decode("utf-8")
    except SerializationError as e:
        raise ValidationError(f"Query body is not serializable: {e}") from e


def merge_expressions(*expressions: Expression | Mapping[str, Any]) -> QueryBody:
    """
    按参数顺序合并表达式的顶层键，同名键后者覆盖前者.

    - 构建器: 合并 to_dict() 的结果
    - 首个值为函数的映射: 视为构建器句柄而非数据，整体丢弃
    - 其他映射: 合并其中所有非函数的键值

    Args:
        *expressions: 构建器或映射

    Returns:
        合并后的查询体

    Raises:
        ValidationError: 参数既不是构建器也不是映射时
    """
    query: QueryBody = {}
    for exp in expressions:
        if isinstance(exp, Expression):
            query.update(exp.to_dict())
            continue

        if not isinstance(exp, Mapping):
            raise ValidationError(
                f"Expected a builder or mapping, got {type(exp).__name__}: {exp!r}"
            )
        if not exp:
            continue

        first_key = next(iter(exp))
        if callable(exp[first_key]):
            logger.debug(f"Dropping helper handle keyed '{first_key}' from query body")
            continue

        query.update({k: v for k, v in exp.items() if not callable(v)})

    return query


def es_query(*expressions: Expression | Mapping[str, Any]) -> str:
    """
    合并表达式并序列化为 JSON 查询体.

    示例:
        es_query(Query(match("title", "es")).from_(10).size(5))
        # '{"query":{"match":{"title":{"query":"es"}}},"from":10,"size":5}'

    Args:
        *expressions: 构建器或映射

    Returns:
        JSON 文本
    """
    return serialize(merge_expressions(*expressions))


# es_query 的别名
build_query = es_query
build = es_query
elastic_search_query = es_query
