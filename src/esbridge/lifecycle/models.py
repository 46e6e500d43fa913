"""生命周期策略数据模型定义模块.

策略文档本身保持为引擎原生的 JSON 字典结构：
- 阶段格式（ILM）: {"phases": {"hot": {"min_age": "0ms", "actions": {...}}}}
- 状态格式（ISM）: {"states": [{"name": "hot", "actions": [...], "transitions": [...]}]}

本模块定义阶段顺序以及转换过程的诊断信息。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# ILM 阶段的固定先后顺序，与输入字典的键顺序无关
PHASE_ORDER: tuple[str, ...] = ("hot", "warm", "cold", "frozen", "delete")

# ISM 策略的 schema 版本
ISM_SCHEMA_VERSION = 1

# 阶段格式转换为状态格式时写入的描述
TRANSFORMED_DESCRIPTION = "Transformed from ILM policy"


class PolicyForm(str, Enum):
    """策略文档格式."""

    PHASES = "phases"
    STATES = "states"


class DiagnosticReason(str, Enum):
    """转换诊断原因.

    Attributes:
        UNSUPPORTED: 已知但目标引擎不支持的动作（set_priority、allocate、migrate）
        UNKNOWN: 未注册的动作
        INVALID_MIN_AGE: min_age 不是 数字+单位（ms/s/m/h/d）格式
        UNKNOWN_PHASE: 不在固定阶段顺序中的阶段名
    """

    UNSUPPORTED = "unsupported"
    UNKNOWN = "unknown"
    INVALID_MIN_AGE = "invalid_min_age"
    UNKNOWN_PHASE = "unknown_phase"


@dataclass(frozen=True)
class Diagnostic:
    """转换诊断信息.

    转换过程中被丢弃的内容不会中断转换，而是记录为诊断信息。

    Attributes:
        stage: 所在阶段或状态名称
        name: 相关的动作名、阶段名或 min_age 值
        reason: 诊断原因
        message: 说明
    """

    stage: str
    name: str
    reason: DiagnosticReason
    message: str


@dataclass
class TransformResult:
    """策略转换结果.

    Attributes:
        policy: 转换后的策略文档
        diagnostics: 转换过程中产生的诊断信息
    """

    policy: dict[str, Any]
    diagnostics: list[Diagnostic] = field(default_factory=list)
