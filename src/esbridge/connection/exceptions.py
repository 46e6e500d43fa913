"""连接模块异常定义."""

from ..exceptions import EsBridgeError


class BridgeConnectionError(EsBridgeError):
    """连接基础异常类.

    所有连接相关异常的基类，继承自 EsBridgeError。
    """

    pass


class ConnectionConfigError(BridgeConnectionError):
    """连接配置校验异常.

    当连接配置参数不合法时抛出，例如 hosts 为空、request_timeout 小于 0 等。
    """

    pass


class UnknownEngineError(BridgeConnectionError):
    """未知引擎异常.

    当引擎标识不属于 elasticsearch / opensearch 时抛出。

    Attributes:
        engine: 无法识别的引擎值
    """

    def __init__(self, engine, message: str = "Unknown engine type") -> None:
        self.engine = engine
        super().__init__(f"{message}: {engine!r}")
