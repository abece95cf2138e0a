"""indexcurator 异常定义模块."""


class IndexCuratorError(Exception):
    """indexcurator 基础异常类."""

    pass
