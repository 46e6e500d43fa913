"""连接数据模型定义模块.

提供连接相关的数据模型，包括：
- EngineType: 搜索引擎类型枚举
- Connection: 不可变的连接记录（引擎、主版本号、传输层）
- ClusterConfig: 集群配置
- ConnectionConfig: 客户端连接参数
"""

from dataclasses import dataclass, field
from enum import Enum

from ..typing import Transport
from .exceptions import ConnectionConfigError, UnknownEngineError


class EngineType(str, Enum):
    """搜索引擎类型枚举.

    Attributes:
        ELASTICSEARCH: Elasticsearch，使用 ILM 管理索引生命周期
        OPENSEARCH: OpenSearch，使用 ISM 管理索引状态
    """

    ELASTICSEARCH = "elasticsearch"
    OPENSEARCH = "opensearch"

    @classmethod
    def parse(cls, value: "EngineType | str") -> "EngineType":
        """将字符串或枚举值转换为 EngineType.

        Args:
            value: 引擎标识，如 "elasticsearch" 或 EngineType.OPENSEARCH

        Returns:
            对应的 EngineType

        Raises:
            UnknownEngineError: 当引擎标识无法识别时抛出

        Examples:
            >>> EngineType.parse("opensearch")
            <EngineType.OPENSEARCH: 'opensearch'>
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        raise UnknownEngineError(value)


@dataclass(frozen=True)
class Connection:
    """连接记录.

    由连接工厂（或调用方）构建，供特性矩阵和生命周期管理器使用。
    创建后不可修改。

    Attributes:
        engine: 引擎类型，字符串会被转换为 EngineType
        version: 主版本号（如 7、8、2）
        transport: 传输层可调用对象 transport(method, url, body)，
            2xx 返回响应体，404 返回 None，其他状态抛出 TransportError
        uri: 请求地址前缀，为空时表示传输层自行处理主机地址

    Raises:
        UnknownEngineError: 当 engine 无法识别时抛出
        ConnectionConfigError: 当 version 不是非负整数时抛出

    Examples:
        >>> conn = Connection(engine="opensearch", version=2, transport=transport)
        >>> conn.engine
        <EngineType.OPENSEARCH: 'opensearch'>
    """

    engine: EngineType
    version: int
    transport: Transport = field(repr=False, compare=False)
    uri: str = ""

    def __post_init__(self) -> None:
        """校验并规范化连接参数."""
        object.__setattr__(self, "engine", EngineType.parse(self.engine))
        if isinstance(self.version, bool) or not isinstance(self.version, int):
            raise ConnectionConfigError(f"version 必须为整数，当前值: {self.version!r}")
        if self.version < 0:
            raise ConnectionConfigError(f"version 不能为负数，当前值: {self.version}")
        if not callable(self.transport):
            raise ConnectionConfigError("transport 必须是可调用对象")
        object.__setattr__(self, "uri", self.uri.rstrip("/"))


@dataclass
class ClusterConfig:
    """集群配置模型.

    定义单个 ES / OpenSearch 集群的连接信息。engine 或 version 为 None 时，
    连接工厂会请求根端点自动探测。

    认证请求头（如 {"authorization": "ApiKey ..."}）由调用方通过 headers 提供，
    每个请求都会携带。

    Attributes:
        hosts: 节点地址列表（必需，不可为空）
        engine: 引擎类型，None 表示自动探测
        version: 主版本号，None 表示自动探测
        headers: 附加请求头
        ca_certs: CA 证书文件路径
        verify_certs: 是否验证 SSL 证书，默认 True

    Raises:
        ConnectionConfigError: 当 hosts 为空或 version 为负数时抛出
        UnknownEngineError: 当 engine 无法识别时抛出

    Examples:
        >>> config = ClusterConfig(
        ...     hosts=["http://localhost:9200"],
        ...     engine="opensearch",
        ...     version=2,
        ...     headers={"authorization": "Basic YWRtaW46YWRtaW4="},
        ... )
    """

    hosts: list[str] = field(default_factory=list)
    engine: EngineType | str | None = None
    version: int | None = None
    headers: dict[str, str] = field(default_factory=dict)
    ca_certs: str | None = None
    verify_certs: bool = True

    def __post_init__(self) -> None:
        """校验集群配置参数合法性."""
        if not self.hosts:
            raise ConnectionConfigError("hosts 不能为空，请提供至少一个节点地址")
        if self.engine is not None:
            self.engine = EngineType.parse(self.engine)
        if self.version is not None and self.version < 0:
            raise ConnectionConfigError(f"version 不能为负数，当前值: {self.version}")

    @property
    def needs_detection(self) -> bool:
        """是否需要请求集群自动探测引擎和版本."""
        return self.engine is None or self.version is None


@dataclass
class ConnectionConfig:
    """客户端连接参数模型.

    透传给 Elasticsearch 客户端，重试与超时由客户端自身负责。

    Attributes:
        max_retries: 最大重试次数，默认 3
        retry_on_timeout: 超时是否重试，默认 True
        request_timeout: 请求超时时间（秒），默认 30，必须 >= 0
        http_compress: 是否启用 HTTP 压缩，默认 True

    Raises:
        ConnectionConfigError: 当参数不合法时抛出
    """

    max_retries: int = 3
    retry_on_timeout: bool = True
    request_timeout: int = 30
    http_compress: bool = True

    def __post_init__(self) -> None:
        """校验连接参数合法性."""
        if self.max_retries < 0:
            raise ConnectionConfigError(
                f"max_retries 不能为负数，当前值: {self.max_retries}"
            )
        if self.request_timeout < 0:
            raise ConnectionConfigError(
                f"request_timeout 必须 >= 0，当前值: {self.request_timeout}"
            )
