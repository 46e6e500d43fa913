"""特性矩阵单元测试."""

from unittest.mock import MagicMock

import pytest

from esbridge.connection.models import Connection, EngineType
from esbridge.features.exceptions import UnsupportedFeatureError
from esbridge.features.models import FeatureFlag, LifecycleType
from esbridge.features.tool import (
    LIFECYCLE_MANAGEMENT,
    get_feature_summary,
    lifecycle_management_type,
    require_feature,
    require_lifecycle_management,
    supports_composable_templates,
    supports_data_streams,
    supports_doc_types,
    supports_ilm,
    supports_ism,
    supports_legacy_templates,
)


def _conn(engine: str, version: int) -> Connection:
    return Connection(engine=engine, version=version, transport=MagicMock())


ES6 = _conn("elasticsearch", 6)
ES7 = _conn("elasticsearch", 7)
ES8 = _conn("elasticsearch", 8)
OS1 = _conn("opensearch", 1)
OS2 = _conn("opensearch", 2)


class TestFeaturePredicates:
    """单个特性判断测试."""

    @pytest.mark.parametrize(
        "conn, expected",
        [(ES6, False), (ES7, True), (ES8, True), (OS1, False), (OS2, False)],
    )
    def test_supports_ilm(self, conn: Connection, expected: bool) -> None:
        assert supports_ilm(conn) is expected

    @pytest.mark.parametrize(
        "conn, expected",
        [(ES6, False), (ES8, False), (OS1, True), (OS2, True)],
    )
    def test_supports_ism(self, conn: Connection, expected: bool) -> None:
        assert supports_ism(conn) is expected

    @pytest.mark.parametrize(
        "conn, expected",
        [(ES6, False), (ES7, True), (OS1, False), (OS2, True)],
    )
    def test_supports_data_streams(self, conn: Connection, expected: bool) -> None:
        assert supports_data_streams(conn) is expected

    @pytest.mark.parametrize(
        "conn, expected",
        [(ES6, False), (ES7, True), (_conn("opensearch", 0), False), (OS1, True)],
    )
    def test_supports_composable_templates(self, conn: Connection, expected: bool) -> None:
        assert supports_composable_templates(conn) is expected

    @pytest.mark.parametrize("conn", [ES6, ES8, OS1, OS2])
    def test_supports_legacy_templates(self, conn: Connection) -> None:
        assert supports_legacy_templates(conn) is True

    @pytest.mark.parametrize(
        "conn, expected",
        [(_conn("elasticsearch", 5), True), (ES6, True), (ES7, False), (OS1, False)],
    )
    def test_supports_doc_types(self, conn: Connection, expected: bool) -> None:
        assert supports_doc_types(conn) is expected

    def test_ilm_and_ism_mutually_exclusive(self) -> None:
        """测试 ILM 与 ISM 不会同时可用."""
        for engine in EngineType:
            for version in range(0, 10):
                conn = _conn(engine.value, version)
                assert not (supports_ilm(conn) and supports_ism(conn))

    def test_predicates_make_no_requests(self) -> None:
        """测试特性判断不调用传输层."""
        conn = _conn("opensearch", 2)
        get_feature_summary(conn)
        lifecycle_management_type(conn)
        conn.transport.assert_not_called()


class TestFeatureSummary:
    """get_feature_summary 测试."""

    def test_opensearch_2(self) -> None:
        """测试 OpenSearch 2 的特性汇总."""
        assert get_feature_summary(OS2) == {
            "ilm": False,
            "ism": True,
            "data_streams": True,
            "composable_templates": True,
            "legacy_templates": True,
            "doc_types": False,
        }

    def test_covers_all_flags(self) -> None:
        """测试汇总覆盖全部特性."""
        assert set(get_feature_summary(ES7)) == {flag.value for flag in FeatureFlag}


class TestLifecycleManagementType:
    """lifecycle_management_type 测试."""

    @pytest.mark.parametrize(
        "conn, expected",
        [(ES6, None), (ES7, LifecycleType.ILM), (ES8, LifecycleType.ILM), (OS1, LifecycleType.ISM)],
    )
    def test_type(self, conn: Connection, expected) -> None:
        assert lifecycle_management_type(conn) is expected


class TestRequireFeature:
    """require_feature 与 require_lifecycle_management 测试."""

    def test_supported_feature_passes(self) -> None:
        """测试特性可用时不抛异常."""
        require_feature(ES7, FeatureFlag.ILM, "需要 ILM")
        require_feature(OS2, "data_streams", "需要 data stream")
        require_feature(ES6, FeatureFlag.LEGACY_TEMPLATES, "需要旧版模板")

    def test_unsupported_feature_raises_error(self) -> None:
        """测试特性不可用时抛出 UnsupportedFeatureError."""
        with pytest.raises(UnsupportedFeatureError) as exc_info:
            require_feature(OS2, FeatureFlag.ILM, "需要 ILM")

        error = exc_info.value
        assert error.flag == "ilm"
        assert error.engine is EngineType.OPENSEARCH
        assert error.version == 2
        assert error.message == "需要 ILM"
        assert "feature=ilm" in str(error)
        assert "engine=opensearch" in str(error)

    def test_unknown_feature_raises_error(self) -> None:
        """测试未知特性抛出 UnsupportedFeatureError."""
        with pytest.raises(UnsupportedFeatureError) as exc_info:
            require_feature(ES8, "time_travel", "未知特性")
        assert exc_info.value.flag == "time_travel"

    def test_require_lifecycle_management(self) -> None:
        """测试返回可用的生命周期管理类型."""
        assert require_lifecycle_management(ES7) is LifecycleType.ILM
        assert require_lifecycle_management(OS1) is LifecycleType.ISM

    def test_require_lifecycle_management_unsupported(self) -> None:
        """测试 Elasticsearch 6 不支持生命周期管理."""
        with pytest.raises(UnsupportedFeatureError) as exc_info:
            require_lifecycle_management(ES6)
        assert exc_info.value.flag == LIFECYCLE_MANAGEMENT
        assert exc_info.value.message == "Lifecycle management not supported"
