"""生命周期策略管理器模块.

提供 LifecyclePolicyManager，以统一的接口在 Elasticsearch（ILM）与
OpenSearch（ISM）上创建、更新、获取和删除生命周期策略。
"""

from __future__ import annotations

import logging
from typing import Any

from ..connection.exceptions import UnknownEngineError
from ..connection.models import Connection, EngineType
from ..exceptions import TransportError
from ..features.tool import require_lifecycle_management
from ..typing import PolicyDict
from .actions import ActionRegistry
from .exceptions import LifecycleError, PolicyNotFoundError, StaleRevisionError
from .transformer import normalize_policy, policy_uri

logger = logging.getLogger(__name__)

_ACKNOWLEDGED: dict[str, Any] = {"acknowledged": True}


class LifecyclePolicyManager:
    """生命周期策略管理器.

    调用方传入 ILM 阶段格式（或 ISM 状态格式）的策略，管理器在发起网络请求前
    先检查引擎是否支持生命周期管理，再按目标引擎规范化策略，最后通过连接的
    传输层发起请求。OpenSearch 的响应会被规范化为与 Elasticsearch 一致的形式。

    Args:
        conn: 连接记录
        registry: 动作注册表，默认使用内置注册表

    Examples:
        >>> manager = LifecyclePolicyManager(conn)
        >>> manager.create_policy(
        ...     "logs_policy",
        ...     {
        ...         "phases": {
        ...             "hot": {"actions": {"rollover": {"max_docs": 100000}}},
        ...             "delete": {"min_age": "30d", "actions": {"delete": {}}},
        ...         }
        ...     },
        ... )
        {'acknowledged': True}
    """

    def __init__(self, conn: Connection, registry: ActionRegistry | None = None) -> None:
        if conn is None:
            raise ValueError("conn 不能为 None")
        self.conn = conn
        self._registry = registry

    def _uri(self, policy_name: str) -> str:
        return policy_uri(self.conn.uri, policy_name, self.conn.engine)

    def _request(self, method: str, url: str, body: dict[str, Any] | None = None) -> Any:
        return self.conn.transport(method, url, body)

    def _normalize(self, policy: PolicyDict) -> PolicyDict:
        return normalize_policy(policy, self.conn.engine, self._registry)

    def create_policy(self, policy_name: str, policy: PolicyDict) -> dict[str, Any] | None:
        """创建生命周期策略.

        - Elasticsearch: 以 {"policy": 原始输入} 创建 ILM 策略，输入视为阶段格式
        - OpenSearch: 以 {"policy": 规范化后的状态格式策略} 创建 ISM 策略

        策略已存在（409）时自动改为调用 update_policy()。

        Args:
            policy_name: 策略名称
            policy: 策略文档

        Returns:
            引擎响应；OpenSearch 返回带 _id 的响应时规范化为 {"acknowledged": True}

        Raises:
            UnsupportedFeatureError: 引擎不支持生命周期管理时抛出（不发起请求）
            PolicyValidationError: 策略结构不合法时抛出
            TransportError: 除 409 外的请求失败时抛出
        """
        require_lifecycle_management(self.conn)
        normalized = self._normalize(policy)

        # Elasticsearch 直接使用调用方的原始输入
        if self.conn.engine == EngineType.OPENSEARCH:
            body = {"policy": normalized}
        else:
            body = {"policy": policy}

        try:
            response = self._request("PUT", self._uri(policy_name), body)
        except TransportError as e:
            if not e.is_conflict:
                raise
            logger.info(f"策略 '{policy_name}' 已存在，改为更新")
            return self.update_policy(policy_name, policy)

        logger.info(f"策略 '{policy_name}' 创建成功 ({self.conn.engine.value})")
        if self.conn.engine == EngineType.OPENSEARCH and _has_id(response):
            return dict(_ACKNOWLEDGED)
        return response

    def update_policy(self, policy_name: str, policy: PolicyDict) -> dict[str, Any] | None:
        """更新已存在的生命周期策略.

        - Elasticsearch: 直接 PUT {"policy": 原始输入}
        - OpenSearch: 先读取策略获取 _seq_no / _primary_term，
          再带 if_seq_no / if_primary_term 条件写入规范化后的策略

        Args:
            policy_name: 策略名称
            policy: 策略文档

        Returns:
            引擎响应；OpenSearch 返回带 _id 的响应时规范化为 {"acknowledged": True}

        Raises:
            UnsupportedFeatureError: 引擎不支持生命周期管理时抛出
            PolicyNotFoundError: OpenSearch 上策略不存在时抛出
            StaleRevisionError: OpenSearch 条件写入因版本过期被拒绝时抛出
            UnknownEngineError: 引擎类型无法识别时抛出
            TransportError: 其他请求失败时抛出
        """
        require_lifecycle_management(self.conn)
        engine = self.conn.engine

        if engine == EngineType.ELASTICSEARCH:
            response = self._request("PUT", self._uri(policy_name), {"policy": policy})
            logger.info(f"ILM 策略 '{policy_name}' 更新成功")
            return response

        if engine == EngineType.OPENSEARCH:
            return self._update_ism_policy(policy_name, policy)

        raise UnknownEngineError(engine)

    def _update_ism_policy(self, policy_name: str, policy: PolicyDict) -> dict[str, Any] | None:
        """OpenSearch 的两步更新：读取修订标记，再条件写入."""
        existing = self.get_policy_raw(policy_name)
        if existing is None:
            raise PolicyNotFoundError(policy_name)

        seq_no = existing.get("_seq_no")
        primary_term = existing.get("_primary_term")
        if seq_no is None or primary_term is None:
            raise LifecycleError(f"策略 '{policy_name}' 的响应缺少 _seq_no / _primary_term")

        normalized = self._normalize(policy)
        url = f"{self._uri(policy_name)}?if_seq_no={seq_no}&if_primary_term={primary_term}"
        try:
            response = self._request("PUT", url, {"policy": normalized})
        except TransportError as e:
            if e.is_conflict:
                raise StaleRevisionError(
                    policy_name, seq_no, primary_term, status=e.status, body=e.body
                ) from e
            raise

        logger.info(f"ISM 策略 '{policy_name}' 更新成功 (seq_no={seq_no})")
        if _has_id(response):
            return dict(_ACKNOWLEDGED)
        return response

    def get_policy_raw(self, policy_name: str) -> dict[str, Any] | None:
        """获取策略的原始响应.

        OpenSearch 的响应包含 _seq_no 和 _primary_term，更新策略时需要使用。

        Returns:
            原始响应体，策略不存在时返回 None
        """
        require_lifecycle_management(self.conn)
        return self._request("GET", self._uri(policy_name))

    def get_policy(self, policy_name: str) -> dict[str, Any] | None:
        """获取策略（引擎原生格式）.

        两种引擎的返回结构统一为 {policy_name: {"policy": 原生策略}}。

        Returns:
            策略信息，策略不存在时返回 None
        """
        response = self.get_policy_raw(policy_name)
        if self.conn.engine != EngineType.OPENSEARCH:
            return response
        if not _has_id(response):
            return None
        return {policy_name: {"policy": response.get("policy")}}

    def delete_policy(self, policy_name: str) -> dict[str, Any] | None:
        """删除策略.

        Returns:
            引擎响应；OpenSearch 返回 result == "deleted" 时规范化为 {"acknowledged": True}，
            策略不存在时返回 None
        """
        require_lifecycle_management(self.conn)
        response = self._request("DELETE", self._uri(policy_name))
        if self.conn.engine == EngineType.OPENSEARCH:
            if isinstance(response, dict) and response.get("result") == "deleted":
                logger.info(f"ISM 策略 '{policy_name}' 删除成功")
                return dict(_ACKNOWLEDGED)
            return response

        logger.info(f"ILM 策略 '{policy_name}' 删除请求已发送")
        return response


def _has_id(response: Any) -> bool:
    return isinstance(response, dict) and bool(response.get("_id"))
