"""esquery 类型定义模块."""

from typing import Any, Dict, Union

# 查询子句类型
# 格式: {子句类型: 子句内容}
Clause = Dict[str, Any]

# 子句选项类型
Options = Dict[str, Any]

# 排序规则类型
# 格式: "字段名" 或 {字段名: 排序参数}
SortSpec = Union[str, Dict[str, Any]]

# 查询体类型
# 格式: {"query": ..., "from": ..., "size": ..., "sort": [...]}
QueryBody = Dict[str, Any]
