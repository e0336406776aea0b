"""esquery 常量定义模块."""


class ClauseTypes:
    """查询子句类型标签.

    这些标签与 Elasticsearch Query DSL 的 JSON 键一一对应，不能重命名。
    """

    MATCH = "match"
    MATCH_BOOL_PREFIX = "match_bool_prefix"
    MATCH_PHRASE = "match_phrase"
    MATCH_PHRASE_PREFIX = "match_phrase_prefix"
    MULTI_MATCH = "multi_match"
    COMBINED_FIELDS = "combined_fields"
    QUERY_STRING = "query_string"
    SIMPLE_QUERY_STRING = "simple_query_string"
    EXISTS = "exists"
    FUZZY = "fuzzy"
    IDS = "ids"
    PREFIX = "prefix"
    TERM = "term"
    TERMS = "terms"
    RANGE = "range"
    REGEXP = "regexp"
    WILDCARD = "wildcard"
    NESTED = "nested"
    BOOL = "bool"


class OptionKeys:
    """子句选项相关的键集合."""

    # 查询类子句的标量选项键
    QUERY = "query"
    # 值类子句的标量选项键
    VALUE = "value"

    # 子句级别的选项，不属于字段名
    CLAUSE_LEVEL_OPTIONS = frozenset(
        {
            "boost",
            "_name",
            "minimum_should_match",
            "slop",
            "rewrite",
            "case_insensitive",
        }
    )

    # 通过 fields / default_field 指定字段的子句
    MULTI_FIELD_CLAUSES = frozenset(
        {
            ClauseTypes.MULTI_MATCH,
            ClauseTypes.COMBINED_FIELDS,
            ClauseTypes.QUERY_STRING,
            ClauseTypes.SIMPLE_QUERY_STRING,
        }
    )

    # 没有字段名的子句，只能按子句类型匹配
    FIELDLESS_CLAUSES = frozenset({ClauseTypes.IDS, ClauseTypes.BOOL})


class QueryBodyKeys:
    """查询体顶层键."""

    QUERY = "query"
    FROM = "from"
    SIZE = "size"
    SORT = "sort"
    AGGS = "aggs"
