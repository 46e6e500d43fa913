"""特性矩阵数据模型定义模块."""

from enum import Enum


class FeatureFlag(str, Enum):
    """特性标识枚举.

    每个特性是否可用仅取决于 (引擎类型, 主版本号)。
    """

    ILM = "ilm"
    ISM = "ism"
    DATA_STREAMS = "data_streams"
    COMPOSABLE_TEMPLATES = "composable_templates"
    LEGACY_TEMPLATES = "legacy_templates"
    DOC_TYPES = "doc_types"


class LifecycleType(str, Enum):
    """生命周期管理类型.

    Attributes:
        ILM: Elasticsearch 7+ 的索引生命周期管理（阶段格式）
        ISM: OpenSearch 的索引状态管理（状态格式）
    """

    ILM = "ilm"
    ISM = "ism"
