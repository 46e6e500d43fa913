"""生命周期策略子模块.

在 Elasticsearch ILM（阶段格式）与 OpenSearch ISM（状态格式）之间转换策略，
并以统一的接口管理两种引擎上的策略，包括：
- 动作转换注册表（ActionRegistry / ActionTranslation）
- 策略转换（transform_phase_to_state / transform_state_to_phase / normalize_policy）
- 策略管理器（LifecyclePolicyManager）
"""

from .actions import (
    UNSUPPORTED_ILM_ACTIONS,
    ActionRegistry,
    ActionTranslation,
    build_default_registry,
    default_registry,
    identity_params,
    register_action,
    rename_params,
)
from .exceptions import (
    LifecycleError,
    PolicyNotFoundError,
    PolicyValidationError,
    StaleRevisionError,
)
from .models import (
    PHASE_ORDER,
    Diagnostic,
    DiagnosticReason,
    PolicyForm,
    TransformResult,
)
from .tool import LifecyclePolicyManager
from .transformer import (
    convert_phases_to_states,
    convert_states_to_phases,
    normalize_policy,
    policy_uri,
    transform_phase_to_state,
    transform_state_to_phase,
)
from .utils import detect_policy_form, parse_min_age

__all__ = [
    # 策略管理器
    "LifecyclePolicyManager",
    # 转换函数
    "convert_phases_to_states",
    "convert_states_to_phases",
    "transform_phase_to_state",
    "transform_state_to_phase",
    "normalize_policy",
    "policy_uri",
    # 动作注册表
    "ActionRegistry",
    "ActionTranslation",
    "build_default_registry",
    "default_registry",
    "register_action",
    "rename_params",
    "identity_params",
    "UNSUPPORTED_ILM_ACTIONS",
    # 模型
    "PHASE_ORDER",
    "PolicyForm",
    "Diagnostic",
    "DiagnosticReason",
    "TransformResult",
    # 异常类
    "LifecycleError",
    "PolicyValidationError",
    "PolicyNotFoundError",
    "StaleRevisionError",
    # 工具函数
    "parse_min_age",
    "detect_policy_form",
]
