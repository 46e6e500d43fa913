"""特性矩阵模块.

按 (引擎类型, 主版本号) 判断 ILM、ISM、data stream、索引模板等特性是否可用。
"""

from .exceptions import UnsupportedFeatureError
from .models import FeatureFlag, LifecycleType
from .tool import (
    FEATURE_CHECKS,
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

__all__ = [
    # 模型
    "FeatureFlag",
    "LifecycleType",
    # 特性判断
    "supports_ilm",
    "supports_ism",
    "supports_data_streams",
    "supports_composable_templates",
    "supports_legacy_templates",
    "supports_doc_types",
    "lifecycle_management_type",
    "get_feature_summary",
    "require_feature",
    "require_lifecycle_management",
    "FEATURE_CHECKS",
    "LIFECYCLE_MANAGEMENT",
    # 异常
    "UnsupportedFeatureError",
]
