"""ConnectionFactory 与 ClientTransport 单元测试.

覆盖客户端创建、传输层状态码映射、引擎自动探测和生命周期管理。
"""

from unittest.mock import MagicMock, patch

import pytest

from esbridge.capabilities.exceptions import EngineDetectionError
from esbridge.connection.models import ClusterConfig, ConnectionConfig, EngineType
from esbridge.connection.tool import ClientTransport, ConnectionFactory
from esbridge.exceptions import TransportError

ES_PATCH_PATH = "esbridge.connection.tool.Elasticsearch"

OPENSEARCH_INFO = {
    "name": "node-1",
    "cluster_name": "opensearch",
    "version": {"distribution": "opensearch", "number": "2.19.0"},
}

ELASTICSEARCH_INFO = {
    "name": "node-1",
    "cluster_name": "elasticsearch",
    "version": {"number": "8.11.1", "build_flavor": "default"},
}


def _response(status: int, body=None) -> tuple[MagicMock, object]:
    """构造 client.transport.perform_request 的返回值."""
    return MagicMock(status=status), body


# ============================================================
# ClientTransport
# ============================================================


class TestClientTransport:
    """ClientTransport 状态码映射测试."""

    @pytest.fixture
    def client(self) -> MagicMock:
        return MagicMock()

    def test_none_client_raises_error(self) -> None:
        """测试 client 为 None 时抛出 ValueError."""
        with pytest.raises(ValueError, match="client 不能为 None"):
            ClientTransport(None)  # type: ignore[arg-type]

    @pytest.mark.parametrize("status", [200, 201])
    def test_success_returns_body(self, client: MagicMock, status: int) -> None:
        """测试 2xx 返回响应体."""
        client.transport.perform_request.return_value = _response(status, {"acknowledged": True})
        transport = ClientTransport(client)

        assert transport("PUT", "/_ilm/policy/p", {"policy": {}}) == {"acknowledged": True}

    def test_request_arguments(self, client: MagicMock) -> None:
        """测试请求参数与请求头透传."""
        client.transport.perform_request.return_value = _response(200, {})
        transport = ClientTransport(client, headers={"authorization": "ApiKey abc"})

        transport("PUT", "/_ilm/policy/p", {"policy": {}})

        args, kwargs = client.transport.perform_request.call_args
        assert args == ("PUT", "/_ilm/policy/p")
        assert kwargs["body"] == {"policy": {}}
        assert kwargs["headers"]["content-type"] == "application/json"
        assert kwargs["headers"]["authorization"] == "ApiKey abc"

    def test_empty_url_requests_root(self, client: MagicMock) -> None:
        """测试空地址请求根端点."""
        client.transport.perform_request.return_value = _response(200, {})
        ClientTransport(client)("GET", "", None)
        assert client.transport.perform_request.call_args[0] == ("GET", "/")

    def test_not_found_returns_none(self, client: MagicMock) -> None:
        """测试 404 返回 None."""
        client.transport.perform_request.return_value = _response(404, {"error": "missing"})
        assert ClientTransport(client)("GET", "/_ilm/policy/missing") is None

    @pytest.mark.parametrize("status", [400, 409, 500, 503])
    def test_error_status_raises_transport_error(self, client: MagicMock, status: int) -> None:
        """测试其他状态码抛出 TransportError 并携带状态码和响应体."""
        body = {"error": {"type": "some_exception"}, "status": status}
        client.transport.perform_request.return_value = _response(status, body)

        with pytest.raises(TransportError) as exc_info:
            ClientTransport(client)("PUT", "/_ilm/policy/p", {"policy": {}})

        assert exc_info.value.status == status
        assert exc_info.value.body == body
        assert exc_info.value.is_conflict is (status == 409)


# ============================================================
# ConnectionFactory
# ============================================================


class TestConnectionFactoryClient:
    """客户端创建测试."""

    @patch(ES_PATCH_PATH)
    def test_client_kwargs(self, mock_es) -> None:
        """测试客户端创建参数."""
        cluster = ClusterConfig(hosts=["https://es:9200"], ca_certs="/certs/ca.pem")
        factory = ConnectionFactory(cluster, ConnectionConfig(max_retries=5, request_timeout=10))

        factory.get_client()

        kwargs = mock_es.call_args[1]
        assert kwargs["hosts"] == ["https://es:9200"]
        assert kwargs["max_retries"] == 5
        assert kwargs["request_timeout"] == 10
        assert kwargs["ca_certs"] == "/certs/ca.pem"
        assert kwargs["verify_certs"] is True

    @patch(ES_PATCH_PATH)
    def test_client_is_cached(self, mock_es) -> None:
        """测试客户端惰性创建并缓存."""
        factory = ConnectionFactory(ClusterConfig(hosts=["http://es:9200"]))
        assert factory.get_client() is factory.get_client()
        mock_es.assert_called_once()

    @patch(ES_PATCH_PATH)
    def test_set_connection_config_chain(self, mock_es) -> None:
        """测试设置连接参数支持链式调用."""
        factory = ConnectionFactory(ClusterConfig(hosts=["http://es:9200"]))
        config = ConnectionConfig(request_timeout=99)
        assert factory.set_connection_config(config) is factory
        factory.get_client()
        assert mock_es.call_args[1]["request_timeout"] == 99


class TestConnectionFactoryConnect:
    """connect 方法测试."""

    @patch(ES_PATCH_PATH)
    def test_configured_engine_skips_detection(self, mock_es) -> None:
        """测试已配置引擎和版本时不发起请求."""
        cluster = ClusterConfig(hosts=["http://es:9200"], engine="opensearch", version=2)
        conn = ConnectionFactory(cluster).connect()

        assert conn.engine is EngineType.OPENSEARCH
        assert conn.version == 2
        mock_es.return_value.transport.perform_request.assert_not_called()

    @patch(ES_PATCH_PATH)
    def test_detects_opensearch(self, mock_es) -> None:
        """测试自动探测 OpenSearch."""
        mock_es.return_value.transport.perform_request.return_value = _response(
            200, OPENSEARCH_INFO
        )
        conn = ConnectionFactory(ClusterConfig(hosts=["http://os:9200"])).connect()

        assert conn.engine is EngineType.OPENSEARCH
        assert conn.version == 2
        mock_es.return_value.transport.perform_request.assert_called_once()

    @patch(ES_PATCH_PATH)
    def test_detects_elasticsearch(self, mock_es) -> None:
        """测试自动探测 Elasticsearch."""
        mock_es.return_value.transport.perform_request.return_value = _response(
            200, ELASTICSEARCH_INFO
        )
        conn = ConnectionFactory(ClusterConfig(hosts=["http://es:9200"])).connect()

        assert conn.engine is EngineType.ELASTICSEARCH
        assert conn.version == 8

    @patch(ES_PATCH_PATH)
    def test_configured_fields_take_precedence(self, mock_es) -> None:
        """测试已配置的字段优先于探测结果."""
        mock_es.return_value.transport.perform_request.return_value = _response(
            200, ELASTICSEARCH_INFO
        )
        cluster = ClusterConfig(hosts=["http://es:9200"], version=7)
        conn = ConnectionFactory(cluster).connect()

        assert conn.engine is EngineType.ELASTICSEARCH
        assert conn.version == 7

    @patch(ES_PATCH_PATH)
    def test_missing_version_raises_error(self, mock_es) -> None:
        """测试根端点没有版本号时抛出 EngineDetectionError."""
        mock_es.return_value.transport.perform_request.return_value = _response(
            200, {"name": "node-1"}
        )
        with pytest.raises(EngineDetectionError):
            ConnectionFactory(ClusterConfig(hosts=["http://es:9200"])).connect()

    @patch(ES_PATCH_PATH)
    def test_detection_transport_error_propagates(self, mock_es) -> None:
        """测试探测请求失败时 TransportError 原样抛出."""
        mock_es.return_value.transport.perform_request.return_value = _response(
            401, {"error": "unauthorized"}
        )
        with pytest.raises(TransportError) as exc_info:
            ConnectionFactory(ClusterConfig(hosts=["http://es:9200"])).connect()
        assert exc_info.value.status == 401


class TestConnectionFactoryLifecycle:
    """上下文管理器与 close 测试."""

    @patch(ES_PATCH_PATH)
    def test_context_manager_closes_client(self, mock_es) -> None:
        """测试退出上下文时关闭客户端."""
        with ConnectionFactory(ClusterConfig(hosts=["http://es:9200"])) as factory:
            factory.get_client()
        mock_es.return_value.close.assert_called_once()

    @patch(ES_PATCH_PATH)
    def test_close_without_client(self, mock_es) -> None:
        """测试未创建客户端时 close 不报错."""
        factory = ConnectionFactory(ClusterConfig(hosts=["http://es:9200"]))
        factory.close()
        mock_es.assert_not_called()

    @patch(ES_PATCH_PATH)
    def test_close_error_is_logged(self, mock_es, caplog) -> None:
        """测试关闭异常被记录而不是抛出."""
        mock_es.return_value.close.side_effect = RuntimeError("boom")
        factory = ConnectionFactory(ClusterConfig(hosts=["http://es:9200"]))
        factory.get_client()

        factory.close()

        assert "关闭客户端时出错" in caplog.text
        factory.get_client()
        assert mock_es.call_count == 2
