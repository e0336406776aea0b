"""esquery - Elasticsearch Query DSL Builder.

用可组合的函数和构建器拼装 Elasticsearch / OpenSearch 查询 DSL，并序列化为 JSON 请求体。

主要功能:
    - 叶子子句: match、term、range_、regexp、fuzzy 等
    - 复合子句: Must、Should、MustNot、Filter 容器与 bool_
    - 查询构建器: Query、OrQuery、NotQuery、Sort
    - 序列化: es_query 合并多个表达式并输出 JSON 文本

使用示例:
    from esquery import Must, Query, Sort, bool_, es_query, match, range_

    query = Query(bool_(Must(match("title", "elasticsearch"), range_("age >= 18"))))
    query.from_(0).size(20)

    body = es_query(query, Sort({"created": "desc"}))
"""

__version__ = "0.1.0"

# 导出构建器
from esquery.builders import (
    BaseQuery,
    BoolContainer,
    Filter,
    Must,
    MustNot,
    NotQuery,
    OrQuery,
    Paging,
    Query,
    QueryConfig,
    Should,
    Sort,
)

# 导出核心组件
from esquery.core import (
    BoolOccurrence,
    ClauseTypes,
    Expression,
    RangeOperator,
    SortOrder,
    bool_,
    combined_fields,
    exists,
    field,
    fuzzy,
    ids,
    match,
    match_bool_prefix,
    match_phrase,
    match_phrase_prefix,
    matches_key,
    multi_match,
    nested,
    parse_range_shorthand,
    prefix,
    query_string,
    range_,
    regexp,
    simple_query_string,
    term,
    terms,
    wildcard,
)

# 导出异常
from esquery.exceptions import (
    ConfigurationError,
    EsQueryError,
    QueryStringParseError,
    RangeShorthandError,
    ValidationError,
)

# 导出序列化器
from esquery.serializers import (
    build,
    build_query,
    elastic_search_query,
    es_query,
    merge_expressions,
    serialize,
)

__all__ = [
    # 版本
    "__version__",
    # 叶子子句
    "match",
    "match_bool_prefix",
    "match_phrase",
    "match_phrase_prefix",
    "multi_match",
    "combined_fields",
    "query_string",
    "simple_query_string",
    "exists",
    "fuzzy",
    "ids",
    "prefix",
    "term",
    "terms",
    "range_",
    "regexp",
    "wildcard",
    "nested",
    "field",
    # 复合子句
    "bool_",
    "BoolContainer",
    "Must",
    "Should",
    "MustNot",
    "Filter",
    # 查询构建器
    "BaseQuery",
    "Query",
    "OrQuery",
    "NotQuery",
    "Sort",
    "Paging",
    "QueryConfig",
    # 核心组件
    "Expression",
    "ClauseTypes",
    "BoolOccurrence",
    "RangeOperator",
    "SortOrder",
    "matches_key",
    "parse_range_shorthand",
    # 序列化
    "serialize",
    "merge_expressions",
    "es_query",
    "build_query",
    "build",
    "elastic_search_query",
    # 异常
    "EsQueryError",
    "ValidationError",
    "RangeShorthandError",
    "QueryStringParseError",
    "ConfigurationError",
]
