"""查询体构建器模块.

Query、OrQuery、NotQuery 将根子句与分页、排序、聚合参数组合为完整的查询体:
    {"query": ..., "from": ..., "size": ..., "sort": [...], "aggs": {...}}
"""

from __future__ import annotations

import copy
import logging
from abc import abstractmethod
from collections.abc import Mapping
from typing import Any

from elasticsearch.dsl import Search

from esquery.builders.compound import (
    BoolContainer,
    ClauseArgument,
    MustNot,
    Should,
    Sort,
)
from esquery.builders.models import Paging, QueryConfig, check_expression_argument
from esquery.core.clauses import bool_
from esquery.core.constants import QueryBodyKeys
from esquery.core.expression import Expression, resolve_clause
from esquery.exceptions import ConfigurationError, ValidationError
from esquery.serializers.body import serialize
from esquery.typing import Clause, QueryBody, SortSpec

logger = logging.getLogger(__name__)


def _resolve_root(expression: Expression | Mapping[str, Any]) -> Clause:
    """
    获取查询的根子句.

    查询构建器取其根子句而不是整个查询体，其他表达式必须是单键子句。
    """
    if isinstance(expression, BaseQuery):
        return expression._root()
    return resolve_clause(expression)


class BaseQuery(Expression):
    """
    查询体构建器基类.

    管理分页、排序和聚合参数，子类实现 _root() 提供根子句。
    """

    def __init__(self, from_: int | None = None, size: int | None = None):
        """
        初始化基类.

        Args:
            from_: 起始偏移量
            size: 返回数量

        Raises:
            ConfigurationError: 分页参数不合法时
        """
        self._paging = Paging(from_=from_, size=size)
        self._sort: list[SortSpec] | None = None
        self._aggs: dict[str, Any] = {}

    @property
    def paging(self) -> Paging:
        """当前分页参数."""
        return self._paging

    def from_(self, quantity: int) -> BaseQuery:
        """
        设置起始偏移量.

        Args:
            quantity: 偏移量，非负整数

        Returns:
            self，支持链式调用
        """
        self._paging = Paging(from_=quantity, size=self._paging.size)
        return self

    def size(self, quantity: int) -> BaseQuery:
        """
        设置返回数量.

        Args:
            quantity: 返回数量，非负整数，0 表示只返回聚合结果

        Returns:
            self，支持链式调用
        """
        self._paging = Paging(from_=self._paging.from_, size=quantity)
        return self

    def sort(self, sort: Sort | list[SortSpec]) -> BaseQuery:
        """
        设置排序，保存的是调用时的快照.

        Args:
            sort: Sort 对象或排序规则列表

        Returns:
            self，支持链式调用
        """
        if isinstance(sort, (str, Mapping)):
            sort = [sort]
        if not isinstance(sort, Sort):
            sort = Sort(*sort)
        self._sort = sort.to_list()
        return self

    def add_aggregation_raw(self, agg_dict: Mapping[str, Any]) -> BaseQuery:
        """
        添加原始聚合 DSL.

        同名聚合后者覆盖前者。

        Args:
            agg_dict: 聚合 DSL 字典，格式如 {"agg_name": {"agg_type": {...}}}

        Returns:
            self，支持链式调用

        示例:
            query.add_aggregation_raw({
                "by_status": {"terms": {"field": "status", "size": 10}}
            })
        """
        if not isinstance(agg_dict, Mapping):
            raise ValidationError(
                f"Aggregation must be a mapping, got {type(agg_dict).__name__}"
            )
        self._aggs.update(copy.deepcopy(dict(agg_dict)))
        return self

    @abstractmethod
    def _root(self) -> Clause:
        """返回根子句的副本."""
        pass

    def to_dict(self) -> QueryBody:
        """
        导出为查询体字典.

        Returns:
            {"query": ..., "from"?, "size"?, "sort"?, "aggs"?}
        """
        body: QueryBody = {QueryBodyKeys.QUERY: self._root()}
        body.update(self._paging.to_dict())
        if self._sort is not None:
            body[QueryBodyKeys.SORT] = copy.deepcopy(self._sort)
        if self._aggs:
            body[QueryBodyKeys.AGGS] = copy.deepcopy(self._aggs)
        return body

    def to_json(self) -> str:
        """序列化为紧凑 JSON 文本."""
        return serialize(self.to_dict())

    def to_search(
        self, index: str | list[str] | None = None, using: Any = None
    ) -> Search:
        """
        转换为 elasticsearch.dsl.Search 对象，交给客户端执行.

        本方法不发起任何网络请求。

        Args:
            index: 索引名
            using: Elasticsearch 客户端或连接别名

        Returns:
            Search 对象
        """
        if using is None:
            search = Search(index=index)
        else:
            search = Search(using=using, index=index)
        return search.update_from_dict(self.to_dict())


class Query(BaseQuery):
    """
    单根子句查询构建器.

    构造时传入的 from / size 会作为初始分页保存下来，replace() 会重新应用它们，
    通过 from_() / size() 做的修改会被丢弃。

    使用示例:
        query = Query(match("title", "elasticsearch"), 0, 20)
        query.from_(40).size(10)
        query.replace(term("status", "published"))
        query.to_dict()
        # {"query": {"term": {...}}, "from": 0, "size": 20}
    """

    def __init__(
        self,
        expression: Expression | Mapping[str, Any],
        from_: int | None = None,
        size: int | None = None,
    ):
        """
        初始化查询.

        Args:
            expression: 根子句（子句映射或构建器），查询构建器只取其根子句
            from_: 起始偏移量
            size: 返回数量
        """
        super().__init__(from_=from_, size=size)
        self._initial_paging = self._paging
        self._expression: Clause = _resolve_root(expression)

    @property
    def initial_paging(self) -> Paging:
        """构造时的分页参数，replace() 时重新应用."""
        return self._initial_paging

    def replace(self, expression: Expression | Mapping[str, Any]) -> Query:
        """
        替换根子句，并恢复构造时的分页参数.

        Args:
            expression: 新的根子句

        Returns:
            self，支持链式调用
        """
        self._expression = _resolve_root(expression)
        self._paging = self._initial_paging
        logger.debug(f"Query root replaced, paging reset to {self._paging}")
        return self

    def _root(self) -> Clause:
        return copy.deepcopy(self._expression)


class _ContainerQuery(BaseQuery):
    """根子句为 {"bool": {<容器键>: [...]}} 的查询构建器."""

    container_class: type[BoolContainer]

    def __init__(
        self,
        *expressions: ClauseArgument,
        from_: int | None = None,
        size: int | None = None,
    ):
        for expression in expressions:
            check_expression_argument(expression)
        super().__init__(from_=from_, size=size)
        self._container = self.container_class(*expressions)

    @classmethod
    def from_config(cls, config: QueryConfig) -> _ContainerQuery:
        """
        从 QueryConfig 创建查询.

        Args:
            config: 查询配置

        Returns:
            查询构建器

        Raises:
            ConfigurationError: config 不是 QueryConfig 时
        """
        if not isinstance(config, QueryConfig):
            raise ConfigurationError(
                f"from_config expects QueryConfig, got {type(config).__name__}"
            )
        return cls(*config.expressions, from_=config.from_, size=config.size)

    @property
    def clauses(self) -> tuple[Clause, ...]:
        """容器中子句的快照."""
        return self._container.clauses

    def add(self, *expressions: ClauseArgument) -> _ContainerQuery:
        """
        追加子句，函数参数会被调用并展开其返回的子句序列.

        Returns:
            self，支持链式调用
        """
        for expression in expressions:
            check_expression_argument(expression)
        self._container.add(*expressions)
        return self

    def remove(self, *keys: str) -> _ContainerQuery:
        """
        删除与任一键匹配的子句，匹配规则与 Must.remove 相同.

        Returns:
            self，支持链式调用
        """
        self._container.remove(*keys)
        return self

    def _root(self) -> Clause:
        return bool_(self._container)


class OrQuery(_ContainerQuery):
    """
    OR 查询构建器，等价于 Query(bool_(Should(...))).

    分页参数只能通过关键字 from_ / size 或 QueryConfig 传入，
    位置参数中的数字会抛出 ConfigurationError。

    使用示例:
        query = OrQuery(
            match("title", "elasticsearch"),
            lambda: [term("tag", t) for t in ("search", "lucene")],
            size=10,
        )
        query.add(match("body", "opensearch")).remove("tag")
        query.to_dict()
        # {"query": {"bool": {"should": [...]}}, "size": 10}
    """

    container_class = Should


class NotQuery(_ContainerQuery):
    """
    NOT 查询构建器，根子句为 {"bool": {"must_not": [...]}}.

    使用示例:
        query = NotQuery(term("status", "deleted"), from_=0, size=20)
        query.add(exists("archived_at"))
    """

    container_class = MustNot
