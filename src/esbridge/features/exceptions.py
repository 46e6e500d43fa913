"""特性矩阵异常定义模块."""

from ..exceptions import EsBridgeError


class UnsupportedFeatureError(EsBridgeError):
    """特性不支持异常.

    当前引擎 / 版本不支持所需特性时，在发起任何网络请求之前抛出。

    Attributes:
        flag: 特性名称
        engine: 引擎类型
        version: 主版本号
        message: 调用方提供的说明
    """

    def __init__(self, flag: str, engine, version: int, message: str) -> None:
        self.flag = flag
        self.engine = engine
        self.version = version
        self.message = message
        engine_name = getattr(engine, "value", engine)
        super().__init__(f"{message} (feature={flag}, engine={engine_name}, version={version})")
