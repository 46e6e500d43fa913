"""特性矩阵工具模块.

根据 (引擎类型, 主版本号) 判断特性是否可用。所有判断均为纯函数，
不发起网络请求，可在多线程中直接调用。

使用示例:
    from esbridge.features import FeatureFlag, require_feature, supports_ilm

    if supports_ilm(conn):
        ...
    require_feature(conn, FeatureFlag.DATA_STREAMS, "需要 data stream 支持")
"""

from collections.abc import Callable

from ..connection.models import Connection, EngineType
from .exceptions import UnsupportedFeatureError
from .models import FeatureFlag, LifecycleType

# require_lifecycle_management 使用的特性名称
LIFECYCLE_MANAGEMENT = "lifecycle_management"


def _is_elasticsearch(conn: Connection) -> bool:
    return conn.engine == EngineType.ELASTICSEARCH


def _is_opensearch(conn: Connection) -> bool:
    return conn.engine == EngineType.OPENSEARCH


def supports_ilm(conn: Connection) -> bool:
    """是否支持 ILM（仅 Elasticsearch 7.0+）.

    Examples:
        >>> supports_ilm(Connection("elasticsearch", 7, transport))
        True
        >>> supports_ilm(Connection("opensearch", 2, transport))
        False
    """
    return _is_elasticsearch(conn) and conn.version >= 7


def supports_ism(conn: Connection) -> bool:
    """是否支持 ISM（OpenSearch 所有版本）."""
    return _is_opensearch(conn)


def supports_data_streams(conn: Connection) -> bool:
    """是否支持 data stream.

    Elasticsearch 7.9+ 才支持，由于只记录主版本号，按 7.x 全部支持处理；
    OpenSearch 2.0+ 支持。
    """
    return (_is_elasticsearch(conn) and conn.version >= 7) or (
        _is_opensearch(conn) and conn.version >= 2
    )


def supports_composable_templates(conn: Connection) -> bool:
    """是否支持可组合索引模板（Elasticsearch 7+，OpenSearch 1+）."""
    return (_is_elasticsearch(conn) and conn.version >= 7) or (
        _is_opensearch(conn) and conn.version >= 1
    )


def supports_legacy_templates(conn: Connection) -> bool:
    """是否支持旧版索引模板（所有版本均支持）."""
    return True


def supports_doc_types(conn: Connection) -> bool:
    """URL 中是否需要文档类型（仅 Elasticsearch 7 之前）."""
    return _is_elasticsearch(conn) and conn.version < 7


def lifecycle_management_type(conn: Connection) -> LifecycleType | None:
    """返回引擎支持的生命周期管理类型.

    Returns:
        Elasticsearch 7+ 为 LifecycleType.ILM，OpenSearch 为 LifecycleType.ISM，
        更早的 Elasticsearch 为 None
    """
    if supports_ilm(conn):
        return LifecycleType.ILM
    if supports_ism(conn):
        return LifecycleType.ISM
    return None


FEATURE_CHECKS: dict[FeatureFlag, Callable[[Connection], bool]] = {
    FeatureFlag.ILM: supports_ilm,
    FeatureFlag.ISM: supports_ism,
    FeatureFlag.DATA_STREAMS: supports_data_streams,
    FeatureFlag.COMPOSABLE_TEMPLATES: supports_composable_templates,
    FeatureFlag.LEGACY_TEMPLATES: supports_legacy_templates,
    FeatureFlag.DOC_TYPES: supports_doc_types,
}


def get_feature_summary(conn: Connection) -> dict[str, bool]:
    """汇总所有特性的支持情况.

    Examples:
        >>> get_feature_summary(Connection("opensearch", 2, transport))
        {'ilm': False, 'ism': True, 'data_streams': True,
         'composable_templates': True, 'legacy_templates': True, 'doc_types': False}
    """
    return {flag.value: check(conn) for flag, check in FEATURE_CHECKS.items()}


def require_feature(conn: Connection, flag: FeatureFlag | str, message: str) -> None:
    """要求特性可用，否则抛出异常.

    Args:
        conn: 连接记录
        flag: 特性标识，FeatureFlag 或其字符串值
        message: 异常说明

    Raises:
        UnsupportedFeatureError: 特性未知或不可用时抛出
    """
    try:
        check = FEATURE_CHECKS.get(FeatureFlag(flag))
    except ValueError:
        check = None

    if check is None or not check(conn):
        raise UnsupportedFeatureError(
            flag=getattr(flag, "value", flag),
            engine=conn.engine,
            version=conn.version,
            message=message,
        )


def require_lifecycle_management(conn: Connection) -> LifecycleType:
    """要求引擎支持 ILM 或 ISM 之一.

    Returns:
        引擎支持的生命周期管理类型

    Raises:
        UnsupportedFeatureError: 两者均不支持时抛出
    """
    lifecycle_type = lifecycle_management_type(conn)
    if lifecycle_type is None:
        raise UnsupportedFeatureError(
            flag=LIFECYCLE_MANAGEMENT,
            engine=conn.engine,
            version=conn.version,
            message="Lifecycle management not supported",
        )
    return lifecycle_type
