"""叶子子句构造函数模块.

每个函数返回一个新的单键子句字典 {子句类型: 子句内容}。
选项只做形状整理，不校验其在 Elasticsearch 中的语义，未知选项原样保留。

使用示例:
    from esquery.core.clauses import match, range_, term

    match("title", "elasticsearch")
    # {"match": {"title": {"query": "elasticsearch"}}}

    term("status", "active", {"boost": 2})
    # {"term": {"status": {"value": "active", "boost": 2}}}

    range_("age >= 18")
    # {"range": {"age": {"gte": "18"}}}
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from esquery.core.constants import ClauseTypes, OptionKeys
from esquery.core.expression import Expression, resolve_clause, resolve_expression
from esquery.core.range_shorthand import parse_range_shorthand
from esquery.core.utils import normalize_options, validate_query_string
from esquery.exceptions import ValidationError
from esquery.typing import Clause

logger = logging.getLogger(__name__)


def _field_clause(kind: str, field: str, options: dict[str, Any]) -> Clause:
    """构建 {kind: {field: options}} 形式的子句."""
    return {kind: {field: options}}


def _value_clause(kind: str, field: str, value: Any, options: Any) -> Clause:
    """构建值类子句，value 为映射时视为完整选项."""
    body = normalize_options(value, OptionKeys.VALUE)
    body.update(normalize_options(options, OptionKeys.VALUE))
    return _field_clause(kind, field, body)


def _query_first_body(query: Any, options: Any) -> dict[str, Any]:
    """构建 {"query": query, ...选项} 内容，位置参数 query 优先."""
    body = {"query": query}
    for key, value in _fields_options(options).items():
        if key != OptionKeys.QUERY:
            body[key] = value
    return body


def _fields_options(options: Any) -> dict[str, Any]:
    """多字段子句的选项，列表或元组视为 fields，单个字符串视为一个字段.

    Raises:
        ValidationError: options 为其他标量时，避免覆盖位置参数 query
    """
    if options is None:
        return {}
    if isinstance(options, str):
        return {"fields": [options]}
    if isinstance(options, (list, tuple)):
        return {"fields": list(options)}
    if isinstance(options, Mapping):
        return dict(options)
    raise ValidationError(
        f"Expected a field name, field list or options mapping, got {options!r}"
    )


# ========== 全文查询 ==========


def match(field: str, options: Any) -> Clause:
    """
    构建 match 查询.

    Args:
        field: 字段名
        options: 查询文本或选项映射（query、analyzer、fuzziness、operator 等）

    Returns:
        match 子句
    """
    return _field_clause(
        ClauseTypes.MATCH, field, normalize_options(options, OptionKeys.QUERY)
    )


def match_bool_prefix(
    field: str, options: Any, minimum_should_match: int | str | None = None
) -> Clause:
    """
    构建 match_bool_prefix 查询.

    minimum_should_match 会被合并到字段选项中。
    """
    body = normalize_options(options, OptionKeys.QUERY)
    if minimum_should_match is not None:
        body["minimum_should_match"] = minimum_should_match
    return _field_clause(ClauseTypes.MATCH_BOOL_PREFIX, field, body)


def match_phrase(field: str, options: Any, slop: int | None = None) -> Clause:
    """构建 match_phrase 查询，slop 会被合并到字段选项中."""
    body = normalize_options(options, OptionKeys.QUERY)
    if slop is not None:
        body["slop"] = slop
    return _field_clause(ClauseTypes.MATCH_PHRASE, field, body)


def match_phrase_prefix(field: str, options: Any) -> Clause:
    """构建 match_phrase_prefix 查询."""
    return _field_clause(
        ClauseTypes.MATCH_PHRASE_PREFIX,
        field,
        normalize_options(options, OptionKeys.QUERY),
    )


def multi_match(query: Any, options: Any = None) -> Clause:
    """
    构建 multi_match 查询.

    Args:
        query: 查询文本
        options: 选项映射，字段名或字段列表（等价于 {"fields": [...]}）

    Returns:
        multi_match 子句

    示例:
        >>> multi_match("quick fox", ["title", "body^2"])
        {'multi_match': {'query': 'quick fox', 'fields': ['title', 'body^2']}}
    """
    return {ClauseTypes.MULTI_MATCH: _query_first_body(query, options)}


def combined_fields(query: Any, options: Any = None) -> Clause:
    """构建 combined_fields 查询，options 可以是字段名或字段列表."""
    return {ClauseTypes.COMBINED_FIELDS: _query_first_body(query, options)}


def query_string(query: str, options: Any = None, validate: bool = False) -> Clause:
    """
    构建 query_string 查询.

    Args:
        query: Query String 语句
        options: 选项映射（default_field、fields、default_operator 等）
        validate: 是否先用 luqum 校验语法

    Returns:
        query_string 子句

    Raises:
        QueryStringParseError: validate 为 True 且语法错误时抛出
    """
    if validate:
        validate_query_string(query)
    return {ClauseTypes.QUERY_STRING: _query_first_body(query, options)}


def simple_query_string(query: str, options: Any = None) -> Clause:
    """构建 simple_query_string 查询."""
    return {ClauseTypes.SIMPLE_QUERY_STRING: _query_first_body(query, options)}


# ========== 词项查询 ==========


def exists(field: str) -> Clause:
    """构建 exists 查询."""
    return {ClauseTypes.EXISTS: {"field": field}}


def fuzzy(field: str, value: Any, options: Any = None) -> Clause:
    """构建 fuzzy 查询，value 可以是值或包含 value 的完整选项."""
    return _value_clause(ClauseTypes.FUZZY, field, value, options)


def ids(values: Iterable[Any]) -> Clause:
    """构建 ids 查询."""
    if isinstance(values, (str, int)):
        values = [values]
    return {ClauseTypes.IDS: {"values": list(values)}}


def prefix(field: str, value: Any, options: Any = None) -> Clause:
    """构建 prefix 查询."""
    return _value_clause(ClauseTypes.PREFIX, field, value, options)


def term(field: str, value: Any, options: Any = None) -> Clause:
    """
    构建 term 查询.

    示例:
        >>> term("status", "active")
        {'term': {'status': {'value': 'active'}}}
        >>> term("status", {"value": "active", "boost": 2.0})
        {'term': {'status': {'value': 'active', 'boost': 2.0}}}
    """
    return _value_clause(ClauseTypes.TERM, field, value, options)


def terms(
    fields: str | Mapping[str, Any],
    values: Sequence[Any] | None = None,
    options: Mapping[str, Any] | None = None,
) -> Clause:
    """
    构建 terms 查询.

    两种写法:
        terms("status", ["error", "warning"], {"boost": 2})
        terms({"status": ["error", "warning"]}, options={"boost": 2})

    Args:
        fields: 字段名，或 {字段名: 值列表} 映射
        values: 值列表，fields 为字段名时使用
        options: 子句级别选项，如 boost

    Returns:
        terms 子句

    Raises:
        ValidationError: 参数组合不合法时
    """
    if isinstance(fields, str):
        if values is None:
            raise ValidationError(f"terms on field '{fields}' requires values")
        if isinstance(values, Mapping):
            # terms lookup: {"index": ..., "id": ..., "path": ...}
            body: dict[str, Any] = {fields: dict(values)}
        elif isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
            body = {fields: [values]}
        else:
            body = {fields: list(values)}
    elif isinstance(fields, Mapping):
        if values is not None:
            raise ValidationError(
                "terms accepts either a fields mapping or a field name with values"
            )
        body = dict(fields)
    else:
        raise ValidationError(
            f"terms expects a field name or mapping, got {type(fields).__name__}"
        )

    body.update(normalize_options(options, OptionKeys.VALUE))
    return {ClauseTypes.TERMS: body}


def range_(field: str, options: Any = None) -> Clause:
    """
    构建 range 查询.

    字段名中可以直接书写比较操作符（>、<、>=、<=），解析出的边界会覆盖
    options 中的同名选项，其他选项保持不变。

    示例:
        >>> range_("age >= 18")
        {'range': {'age': {'gte': '18'}}}
        >>> range_("age > 10 < 20", {"boost": 2})
        {'range': {'age': {'boost': 2, 'gt': '10', 'lt': '20'}}}
        >>> range_("created", {"gte": "now-1d/d", "format": "strict_date"})
        {'range': {'created': {'gte': 'now-1d/d', 'format': 'strict_date'}}}

    Args:
        field: 字段名或简写表达式
        options: range 选项（gt、gte、lt、lte、format、relation、time_zone、boost）

    Returns:
        range 子句

    Raises:
        RangeShorthandError: 简写表达式无法解析时
    """
    field_name, bounds = parse_range_shorthand(field)
    body = normalize_options(options, OptionKeys.VALUE)
    body.update(bounds)
    return _field_clause(ClauseTypes.RANGE, field_name, body)


def regexp(field: str, value: Any, options: Any = None) -> Clause:
    """构建 regexp 查询."""
    return _value_clause(ClauseTypes.REGEXP, field, value, options)


def wildcard(field: str, value: Any, options: Any = None) -> Clause:
    """构建 wildcard 查询."""
    return _value_clause(ClauseTypes.WILDCARD, field, value, options)


# ========== 其他 ==========


def nested(path: str, options: Mapping[str, Any]) -> Clause:
    """
    构建 nested 查询.

    options["query"] 可以是子句映射或构建器，构建器会被导出为快照。

    Args:
        path: nested 字段路径
        options: 选项映射（query、score_mode、ignore_unmapped、inner_hits）

    Returns:
        nested 子句
    """
    body: dict[str, Any] = {"path": path}
    body.update(normalize_options(options, OptionKeys.QUERY))
    if isinstance(body.get("query"), (Expression, Mapping)):
        body["query"] = resolve_clause(body["query"])
    return {ClauseTypes.NESTED: body}


def field(name: str, options: Any) -> dict[str, Any]:
    """构建 {字段名: 选项} 片段."""
    return {name: options}


def bool_(
    *expressions: Expression | Mapping[str, Any],
    minimum_should_match: int | str | None = None,
    boost: float | None = None,
) -> Clause:
    """
    构建 bool 查询.

    依次合并每个表达式的顶层键值（Must、Should、MustNot、Filter 容器，
    或 {"minimum_should_match": 1} 这样的映射）。同名键后者覆盖前者，
    不做深度合并。关键字参数最后生效。

    示例:
        bool_(Must(match("title", "es")), Should(term("tag", "search")))
        # {"bool": {"must": [...], "should": [...]}}

    Args:
        *expressions: 容器构建器或映射
        minimum_should_match: should 子句最少匹配数量
        boost: 权重

    Returns:
        bool 子句
    """
    body: dict[str, Any] = {}
    for expression in expressions:
        for key, value in resolve_expression(expression).items():
            if key in body:
                logger.debug(f"bool key '{key}' overwritten by a later expression")
            body[key] = value

    if minimum_should_match is not None:
        body["minimum_should_match"] = minimum_should_match
    if boost is not None:
        body["boost"] = boost

    return {ClauseTypes.BOOL: body}
