"""复合子句容器构建器模块.

Must、Should、MustNot、Filter 各自持有一个有序子句列表，支持追加和按键删除，
通过 bool_() 合并为 bool 查询。Sort 持有有序的排序规则列表。
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any, ClassVar

from esquery.core.expression import Expression, resolve_clause
from esquery.core.operators import BoolOccurrence, SortOrder
from esquery.core.utils import matches_key
from esquery.exceptions import ValidationError
from esquery.typing import Clause, SortSpec

logger = logging.getLogger(__name__)

ClauseArgument = Mapping[str, Any] | Expression | Callable[[], Iterable[Any]]


def expand_clauses(expressions: Iterable[ClauseArgument]) -> list[Clause]:
    """
    将变长参数展开为独立的子句列表.

    函数会被无参调用，其返回的子句序列会被依次展开；
    构建器导出为快照，映射会被深拷贝。

    Args:
        expressions: 子句映射、构建器或返回子句序列的函数

    Returns:
        子句列表

    Raises:
        ValidationError: 存在非单键映射或无法识别的参数时
    """
    result: list[Clause] = []
    for expression in expressions:
        if callable(expression) and not isinstance(expression, Expression):
            produced = expression()
            if isinstance(produced, (Mapping, Expression)):
                produced = [produced]
            result.extend(resolve_clause(item) for item in produced)
        else:
            result.append(resolve_clause(expression))
    return result


class BoolContainer(Expression):
    """
    bool 子句容器基类.

    子类通过 occurrence 指定导出时使用的键（must、should、must_not、filter）。

    使用示例:
        must = Must(match("title", "elasticsearch"))
        must.add(term("status", "published"), range_("age >= 18"))
        must.remove("status")         # 按字段名删除
        must.remove("range.age")      # 按 "子句类型.字段名" 删除
        must.to_dict()
        # {"must": [{"match": {"title": {"query": "elasticsearch"}}}]}
    """

    occurrence: ClassVar[BoolOccurrence]

    def __init__(self, *clauses: ClauseArgument):
        """
        初始化容器.

        Args:
            *clauses: 初始子句
        """
        self._clauses: list[Clause] = []
        self.add(*clauses)

    @property
    def key(self) -> str:
        """导出时使用的键."""
        return self.occurrence.value

    @property
    def clauses(self) -> tuple[Clause, ...]:
        """当前子句的快照."""
        return tuple(copy.deepcopy(self._clauses))

    def add(self, *clauses: ClauseArgument) -> BoolContainer:
        """
        按调用顺序追加子句，允许重复.

        任一参数无效时不会追加任何子句。

        Args:
            *clauses: 子句映射、构建器或返回子句序列的函数

        Returns:
            self，支持链式调用
        """
        self._clauses.extend(expand_clauses(clauses))
        return self

    def remove(self, *keys: str) -> BoolContainer:
        """
        删除与任一键匹配的子句，其余子句保持原有顺序.

        匹配规则见 esquery.core.utils.matches_key。

        Args:
            *keys: 子句类型、字段名或 "子句类型.字段名"

        Returns:
            self，支持链式调用
        """
        before = len(self._clauses)
        self._clauses = [
            clause
            for clause in self._clauses
            if not any(matches_key(clause, key) for key in keys)
        ]
        logger.debug(
            f"{self.__class__.__name__}.remove{keys} dropped "
            f"{before - len(self._clauses)} clause(s)"
        )
        return self

    def to_dict(self) -> dict[str, list[Clause]]:
        return {self.key: copy.deepcopy(self._clauses)}

    def __len__(self) -> int:
        return len(self._clauses)

    def __iter__(self) -> Iterator[Clause]:
        return iter(self.clauses)


class Must(BoolContainer):
    """must 子句容器，所有子句都必须匹配并参与评分."""

    occurrence = BoolOccurrence.MUST


class Should(BoolContainer):
    """should 子句容器，至少匹配其一（受 minimum_should_match 控制）."""

    occurrence = BoolOccurrence.SHOULD


class MustNot(BoolContainer):
    """must_not 子句容器，所有子句都不能匹配."""

    occurrence = BoolOccurrence.MUST_NOT


class Filter(BoolContainer):
    """filter 子句容器，必须匹配但不参与评分."""

    occurrence = BoolOccurrence.FILTER


def _sort_field(spec: SortSpec) -> str:
    """获取排序规则的字段名."""
    if isinstance(spec, str):
        return spec
    return next(iter(spec))


class Sort(Expression):
    """
    排序规则构建器.

    每条排序规则可以是字段名字符串（如 "_score"），
    或单键映射（如 {"age": "desc"}、{"created": {"order": "asc"}}）。

    使用示例:
        sort = Sort({"created": {"order": "desc"}}, "_score")
        sort.add({"age": "asc"})
        sort.remove("_score")
        sort.to_dict()
        # {"sort": [{"created": {"order": "desc"}}, {"age": "asc"}]}
    """

    def __init__(self, *fields: SortSpec):
        """
        初始化排序规则.

        Args:
            *fields: 排序规则
        """
        self._fields: list[SortSpec] = []
        self.add(*fields)

    @classmethod
    def from_ordering(cls, ordering: Iterable[str]) -> Sort:
        """
        从排序字段列表创建，"-" 前缀表示降序.

        示例:
            >>> Sort.from_ordering(["-create_time", "name"]).to_list()
            [{'create_time': {'order': 'desc'}}, {'name': {'order': 'asc'}}]

        Args:
            ordering: 排序字段列表

        Returns:
            Sort 对象
        """
        specs: list[SortSpec] = []
        for name in ordering:
            if name.startswith("-"):
                specs.append({name[1:]: {"order": SortOrder.DESC.value}})
            else:
                specs.append({name: {"order": SortOrder.ASC.value}})
        return cls(*specs)

    def add(self, *fields: SortSpec) -> Sort:
        """
        追加排序规则.

        Returns:
            self，支持链式调用

        Raises:
            ValidationError: 排序规则既不是字符串也不是单键映射时
        """
        specs: list[SortSpec] = []
        for spec in fields:
            if isinstance(spec, str):
                specs.append(spec)
            elif isinstance(spec, Mapping) and len(spec) == 1:
                specs.append(copy.deepcopy(dict(spec)))
            else:
                raise ValidationError(
                    f"Sort spec must be a field name or single-key mapping, got {spec!r}"
                )
        self._fields.extend(specs)
        return self

    def remove(self, *keys: str) -> Sort:
        """
        删除字段名与任一键相同的排序规则.

        Returns:
            self，支持链式调用
        """
        self._fields = [spec for spec in self._fields if _sort_field(spec) not in keys]
        return self

    def to_list(self) -> list[SortSpec]:
        """导出排序规则列表."""
        return copy.deepcopy(self._fields)

    def to_dict(self) -> dict[str, list[SortSpec]]:
        return {"sort": self.to_list()}

    def __len__(self) -> int:
        return len(self._fields)
