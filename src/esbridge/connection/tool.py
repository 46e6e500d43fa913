"""连接工厂工具模块.

提供 ClientTransport 和 ConnectionFactory：
- ClientTransport: 将 Elasticsearch 客户端适配为传输层可调用对象
- ConnectionFactory: 根据集群配置创建客户端并构建 Connection，
  必要时自动探测引擎类型与版本

使用示例:
    from esbridge.connection import ClusterConfig, ConnectionFactory

    with ConnectionFactory(ClusterConfig(hosts=["http://localhost:9200"])) as factory:
        conn = factory.connect()
"""

from __future__ import annotations

import logging
from typing import Any

from elasticsearch import Elasticsearch

from ..exceptions import TransportError
from .models import ClusterConfig, Connection, ConnectionConfig, EngineType

logger = logging.getLogger(__name__)

# 引擎只返回主版本号时使用的默认值
DEFAULT_MAJOR_VERSION = 7

_JSON_HEADERS = {
    "accept": "application/json",
    "content-type": "application/json",
}


class ClientTransport:
    """基于 Elasticsearch 客户端底层传输的传输层.

    直接使用 client.transport 发送请求，由本类根据状态码判断结果，
    因此同样适用于 OpenSearch 集群。

    约定：2xx 返回解析后的响应体，404 返回 None，
    其他状态码抛出 TransportError（携带状态码和响应体）。
    不做任何重试，重试策略由客户端自身的 ConnectionConfig 决定。

    Args:
        client: Elasticsearch 客户端实例
        headers: 每个请求附加的请求头（如认证头）

    Examples:
        >>> transport = ClientTransport(Elasticsearch("http://localhost:9200"))
        >>> transport("GET", "/", None)
    """

    def __init__(self, client: Elasticsearch, headers: dict[str, str] | None = None) -> None:
        if client is None:
            raise ValueError("client 不能为 None")
        self._client = client
        self._headers = {**_JSON_HEADERS, **(headers or {})}

    def __call__(
        self,
        method: str,
        url: str,
        body: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        meta, response_body = self._client.transport.perform_request(
            method,
            url or "/",
            headers=self._headers,
            body=body,
        )
        status = meta.status

        if 200 <= status < 300:
            return response_body
        if status == 404:
            logger.debug(f"{method} {url} 返回 404")
            return None
        if status == 400:
            logger.warning(f"ES 请求解析失败: {method} {url}: {response_body}")
        else:
            logger.warning(f"ES 请求失败: {method} {url} (status={status})")
        raise TransportError(status, response_body)


class ConnectionFactory:
    """Connection 工厂.

    惰性创建并缓存 Elasticsearch 客户端，构建 Connection 供特性矩阵和
    生命周期管理器使用。ClusterConfig 未指定 engine 或 version 时，
    connect() 会请求一次根端点进行探测。

    Args:
        cluster: 集群配置
        connection_config: 客户端连接参数，默认使用 ConnectionConfig 的默认值

    Examples:
        >>> factory = ConnectionFactory(
        ...     ClusterConfig(hosts=["http://localhost:9200"], engine="elasticsearch", version=8)
        ... )
        >>> conn = factory.connect()
    """

    def __init__(
        self,
        cluster: ClusterConfig,
        connection_config: ConnectionConfig | None = None,
    ) -> None:
        self._cluster = cluster
        self._connection_config = connection_config or ConnectionConfig()
        self._client: Elasticsearch | None = None

    def _create_client(self) -> Elasticsearch:
        """根据集群配置创建 Elasticsearch 客户端实例.

        Returns:
            Elasticsearch 客户端实例
        """
        cluster = self._cluster
        kwargs: dict[str, Any] = {
            "hosts": cluster.hosts,
            "max_retries": self._connection_config.max_retries,
            "retry_on_timeout": self._connection_config.retry_on_timeout,
            "request_timeout": self._connection_config.request_timeout,
            "http_compress": self._connection_config.http_compress,
        }

        # SSL/TLS 配置
        if cluster.ca_certs:
            kwargs["ca_certs"] = cluster.ca_certs
        kwargs["verify_certs"] = cluster.verify_certs

        return Elasticsearch(**kwargs)

    def get_client(self) -> Elasticsearch:
        """获取（惰性创建）Elasticsearch 客户端."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def get_transport(self) -> ClientTransport:
        """获取基于当前客户端的传输层."""
        return ClientTransport(self.get_client(), headers=self._cluster.headers)

    def connect(self) -> Connection:
        """构建 Connection.

        engine 与 version 均已配置时不发起任何网络请求；否则请求根端点，
        用探测结果补全缺失的字段（已配置的字段优先）。

        Returns:
            Connection 实例

        Raises:
            TransportError: 探测请求失败时抛出
            EngineDetectionError: 根端点没有返回可识别的版本信息时抛出
        """
        transport = self.get_transport()
        cluster = self._cluster

        if not cluster.needs_detection:
            return Connection(
                engine=cluster.engine,
                version=cluster.version,
                transport=transport,
            )

        # 避免循环导入：capabilities 依赖 connection.models
        from ..capabilities.exceptions import EngineDetectionError
        from ..capabilities.tool import verify_connection

        probe = Connection(
            engine=cluster.engine or EngineType.ELASTICSEARCH,
            version=cluster.version if cluster.version is not None else DEFAULT_MAJOR_VERSION,
            transport=transport,
        )
        info = verify_connection(probe)
        if cluster.version is None and info.version is None:
            raise EngineDetectionError("集群根端点未返回版本号，无法确定主版本")

        engine = cluster.engine or info.engine
        version = cluster.version if cluster.version is not None else info.version.major
        logger.info(f"探测到集群引擎: {engine.value} {version}")
        return Connection(engine=engine, version=version, transport=transport)

    def set_connection_config(self, config: ConnectionConfig) -> ConnectionFactory:
        """设置连接参数.

        仅影响后续新创建的客户端，不影响已缓存客户端。支持链式调用。

        Args:
            config: 新的连接参数

        Returns:
            工厂实例自身（支持链式调用）
        """
        self._connection_config = config
        return self

    # ============================================================
    # 生命周期管理
    # ============================================================

    def __enter__(self) -> ConnectionFactory:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """上下文管理器退出，自动关闭客户端."""
        self.close()

    def close(self) -> None:
        """关闭已创建的客户端并清空缓存.

        关闭后可重新调用 get_client() 或 connect() 创建新的客户端。
        """
        if self._client is None:
            return
        try:
            self._client.close()
        except Exception as e:
            logger.warning(f"关闭客户端时出错: {e}")
        self._client = None
