"""esquery 异常定义模块."""


class EsQueryError(Exception):
    """esquery 基础异常类."""

    pass


class ValidationError(EsQueryError):
    """查询子句或表达式格式错误异常."""

    pass


class RangeShorthandError(ValidationError):
    """Range 简写表达式解析异常."""

    pass


class QueryStringParseError(ValidationError):
    """Query String 解析异常."""

    pass


class ConfigurationError(EsQueryError):
    """构建器配置冲突或参数歧义异常."""

    pass
