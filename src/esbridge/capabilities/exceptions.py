"""引擎探测异常定义模块."""

from ..exceptions import EsBridgeError


class CapabilityError(EsBridgeError):
    """引擎探测基础异常类."""

    pass


class VersionParseError(CapabilityError):
    """版本号解析异常.

    当版本字符串不是 "major.minor" 或 "major.minor.patch" 格式时抛出。
    """

    pass


class EngineDetectionError(CapabilityError):
    """引擎探测异常.

    当集群根端点没有返回可识别的集群信息时抛出。
    """

    pass
