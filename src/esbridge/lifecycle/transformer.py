"""生命周期策略转换模块.

在 Elasticsearch ILM（阶段格式）与 OpenSearch ISM（状态格式）之间双向转换策略文档。

转换规则:
    - 阶段按固定顺序 hot → warm → cold → frozen → delete 排列，与输入键顺序无关
    - 每个阶段转换为一个同名状态，动作通过动作注册表逐个转换
    - 下一个存在的阶段的 min_age 作为当前状态迁移的 min_index_age 条件
    - 无法转换的动作被丢弃并记录诊断信息，不会中断转换

convert_* 函数为纯函数，返回 TransformResult（策略 + 诊断信息）；
transform_* 函数在此基础上把诊断信息写入日志，只返回策略。
"""

import logging
from typing import Any
from urllib.parse import quote

from ..connection.exceptions import UnknownEngineError
from ..connection.models import EngineType
from ..typing import PolicyDict
from .actions import UNSUPPORTED_ILM_ACTIONS, ActionRegistry, default_registry
from .exceptions import PolicyValidationError
from .models import (
    ISM_SCHEMA_VERSION,
    PHASE_ORDER,
    TRANSFORMED_DESCRIPTION,
    Diagnostic,
    DiagnosticReason,
    PolicyForm,
    TransformResult,
)
from .utils import detect_policy_form, parse_min_age

logger = logging.getLogger(__name__)


# ========== ILM -> ISM ==========


def _next_phase(phase: str, present: list[str]) -> str | None:
    """返回固定顺序中位于 phase 之后、且在策略中存在的第一个阶段."""
    index = PHASE_ORDER.index(phase)
    for candidate in PHASE_ORDER[index + 1 :]:
        if candidate in present:
            return candidate
    return None


def _phase_actions_to_ism(
    phase: str,
    actions: dict[str, Any],
    registry: ActionRegistry,
    diagnostics: list[Diagnostic],
) -> list[dict[str, Any]]:
    ism_actions: list[dict[str, Any]] = []
    for action_name, params in actions.items():
        converted = registry.to_ism(action_name, params)
        if converted is not None:
            ism_name, ism_params = converted
            ism_actions.append({ism_name: ism_params})
        elif action_name in UNSUPPORTED_ILM_ACTIONS:
            diagnostics.append(
                Diagnostic(
                    stage=phase,
                    name=action_name,
                    reason=DiagnosticReason.UNSUPPORTED,
                    message=f"ISM 不支持 ILM 动作 '{action_name}'，已忽略",
                )
            )
        else:
            diagnostics.append(
                Diagnostic(
                    stage=phase,
                    name=action_name,
                    reason=DiagnosticReason.UNKNOWN,
                    message=f"未注册的 ILM 动作 '{action_name}'，已忽略",
                )
            )
    return ism_actions


def _build_transition(
    phase: str,
    next_phase: str,
    next_config: dict[str, Any],
    diagnostics: list[Diagnostic],
) -> dict[str, Any]:
    transition: dict[str, Any] = {"state_name": next_phase}
    min_age = next_config.get("min_age") if isinstance(next_config, dict) else None
    if min_age is None:
        return transition

    min_index_age = parse_min_age(min_age)
    if min_index_age is None:
        diagnostics.append(
            Diagnostic(
                stage=phase,
                name=str(min_age),
                reason=DiagnosticReason.INVALID_MIN_AGE,
                message=(
                    f"阶段 '{next_phase}' 的 min_age {min_age!r} 无法转换为 ISM 条件，"
                    "迁移将不带条件"
                ),
            )
        )
        return transition

    transition["conditions"] = {"min_index_age": min_index_age}
    return transition


def convert_phases_to_states(
    policy: PolicyDict,
    registry: ActionRegistry | None = None,
) -> TransformResult:
    """将 ILM 阶段格式策略转换为 ISM 状态格式（纯函数）.

    Args:
        policy: 阶段格式策略，形如 {"phases": {"hot": {...}, "delete": {...}}}
        registry: 动作注册表，默认使用内置注册表

    Returns:
        TransformResult，policy 为状态格式策略

    Raises:
        PolicyValidationError: 策略结构不合法或没有任何可识别的阶段时抛出

    Examples:
        >>> result = convert_phases_to_states(
        ...     {
        ...         "phases": {
        ...             "hot": {"actions": {"rollover": {"max_docs": 100000}}},
        ...             "delete": {"min_age": "30d", "actions": {"delete": {}}},
        ...         }
        ...     }
        ... )
        >>> [state["name"] for state in result.policy["states"]]
        ['hot', 'delete']
    """
    registry = registry or default_registry
    detect_policy_form(policy)
    phases = policy.get(PolicyForm.PHASES.value)
    if not isinstance(phases, dict):
        raise PolicyValidationError("阶段格式策略必须包含 phases 字典")

    diagnostics: list[Diagnostic] = []
    for phase_name in phases:
        if phase_name not in PHASE_ORDER:
            diagnostics.append(
                Diagnostic(
                    stage=str(phase_name),
                    name=str(phase_name),
                    reason=DiagnosticReason.UNKNOWN_PHASE,
                    message=f"未知阶段 '{phase_name}'，已忽略",
                )
            )

    present = [phase for phase in PHASE_ORDER if phase in phases]
    if not present:
        raise PolicyValidationError(
            f"策略中没有可转换的阶段，支持的阶段: {', '.join(PHASE_ORDER)}"
        )

    states: list[dict[str, Any]] = []
    for phase in present:
        phase_config = phases[phase] or {}
        if not isinstance(phase_config, dict):
            raise PolicyValidationError(f"阶段 '{phase}' 的配置必须为字典")

        state: dict[str, Any] = {
            "name": phase,
            "actions": _phase_actions_to_ism(
                phase, phase_config.get("actions") or {}, registry, diagnostics
            ),
        }

        next_phase = _next_phase(phase, present)
        if next_phase is not None:
            state["transitions"] = [
                _build_transition(phase, next_phase, phases[next_phase] or {}, diagnostics)
            ]
        states.append(state)

    return TransformResult(
        policy={
            "states": states,
            "description": TRANSFORMED_DESCRIPTION,
            "default_state": present[0],
            "schema_version": ISM_SCHEMA_VERSION,
        },
        diagnostics=diagnostics,
    )


# ========== ISM -> ILM ==========


def convert_states_to_phases(
    policy: PolicyDict,
    registry: ActionRegistry | None = None,
) -> TransformResult:
    """将 ISM 状态格式策略转换为 ILM 阶段格式（纯函数）.

    每个状态转换为同名阶段，状态中的所有动作合并为一个动作字典。
    状态自身第一条迁移的 min_index_age 作为该阶段的 min_age。

    注意：在 ISM 中该条件描述的是“离开当前状态”的时间，这里直接作为当前阶段的
    min_age，与阶段格式 -> 状态格式的方向并不对称，需保持此行为。

    Args:
        policy: 状态格式策略，形如 {"states": [...]}
        registry: 动作注册表，默认使用内置注册表

    Returns:
        TransformResult，policy 为阶段格式策略

    Raises:
        PolicyValidationError: 策略结构不合法时抛出
    """
    registry = registry or default_registry
    detect_policy_form(policy)
    states = policy.get(PolicyForm.STATES.value)
    if not isinstance(states, list):
        raise PolicyValidationError("状态格式策略必须包含 states 列表")

    diagnostics: list[Diagnostic] = []
    phases: dict[str, dict[str, Any]] = {}
    for state in states:
        if not isinstance(state, dict) or not state.get("name"):
            raise PolicyValidationError(f"状态必须为包含 name 的字典: {state!r}")
        state_name = state["name"]

        ilm_actions: dict[str, Any] = {}
        for action in state.get("actions") or []:
            converted = registry.to_ilm(action) if isinstance(action, dict) else None
            if converted is None:
                diagnostics.append(
                    Diagnostic(
                        stage=state_name,
                        name=", ".join(action) if isinstance(action, dict) else str(action),
                        reason=DiagnosticReason.UNKNOWN,
                        message=f"状态 '{state_name}' 中的 ISM 动作无法转换为 ILM，已忽略",
                    )
                )
                continue
            ilm_name, ilm_params = converted
            ilm_actions[ilm_name] = ilm_params

        phase: dict[str, Any] = {"actions": ilm_actions}
        transitions = state.get("transitions") or []
        if transitions:
            conditions = transitions[0].get("conditions") or {}
            min_age = conditions.get("min_index_age")
            if min_age is not None:
                phase["min_age"] = min_age
        phases[state_name] = phase

    return TransformResult(policy={"phases": phases}, diagnostics=diagnostics)


# ========== 带日志的转换入口 ==========


def _log_diagnostics(diagnostics: list[Diagnostic], log: logging.Logger) -> None:
    for diagnostic in diagnostics:
        if diagnostic.reason == DiagnosticReason.UNKNOWN:
            log.debug(diagnostic.message)
        else:
            log.warning(diagnostic.message)


def transform_phase_to_state(
    policy: PolicyDict,
    registry: ActionRegistry | None = None,
    log: logging.Logger | None = None,
) -> PolicyDict:
    """将 ILM 策略转换为 ISM 策略，诊断信息写入日志.

    Args:
        policy: 阶段格式策略
        registry: 动作注册表，默认使用内置注册表
        log: 接收诊断信息的 logger，默认使用模块 logger

    Returns:
        状态格式策略
    """
    result = convert_phases_to_states(policy, registry)
    _log_diagnostics(result.diagnostics, log or logger)
    return result.policy


def transform_state_to_phase(
    policy: PolicyDict,
    registry: ActionRegistry | None = None,
    log: logging.Logger | None = None,
) -> PolicyDict:
    """将 ISM 策略转换为 ILM 策略，诊断信息写入日志."""
    result = convert_states_to_phases(policy, registry)
    _log_diagnostics(result.diagnostics, log or logger)
    return result.policy


def _resolve_engine(engine: EngineType | str) -> EngineType | None:
    try:
        return EngineType.parse(engine)
    except UnknownEngineError:
        return None


def normalize_policy(
    policy: PolicyDict,
    target_engine: EngineType | str,
    registry: ActionRegistry | None = None,
    log: logging.Logger | None = None,
) -> PolicyDict:
    """将策略规范化为目标引擎的原生格式.

    已是目标格式时原样返回，因此重复调用结果不变。

    Args:
        policy: 阶段格式或状态格式策略
        target_engine: 目标引擎，无法识别的引擎原样返回策略
        registry: 动作注册表，默认使用内置注册表
        log: 接收诊断信息的 logger

    Returns:
        目标引擎格式的策略

    Raises:
        PolicyValidationError: 策略同时包含 phases 和 states，或结构不合法时抛出

    Examples:
        >>> ism_policy = {"states": [{"name": "hot", "actions": []}]}
        >>> normalize_policy(ism_policy, EngineType.OPENSEARCH) is ism_policy
        True
    """
    engine = _resolve_engine(target_engine)
    if engine is None:
        return policy

    form = detect_policy_form(policy)
    if engine == EngineType.OPENSEARCH:
        if form == PolicyForm.STATES:
            return policy
        return transform_phase_to_state(policy, registry, log)

    if form == PolicyForm.PHASES:
        return policy
    return transform_state_to_phase(policy, registry, log)


def policy_uri(base: str, policy_name: str, engine: EngineType | str) -> str:
    """构建策略接口地址.

    - Elasticsearch: {base}/_ilm/policy/{name}
    - OpenSearch: {base}/_plugins/_ism/policies/{name}

    Args:
        base: 地址前缀，如 "http://localhost:9200"，可为空
        policy_name: 策略名称，会进行 URL 编码
        engine: 引擎类型

    Returns:
        策略接口地址

    Raises:
        UnknownEngineError: 引擎无法识别时抛出

    Examples:
        >>> policy_uri("http://localhost:9200", "logs policy", "opensearch")
        'http://localhost:9200/_plugins/_ism/policies/logs%20policy'
    """
    engine = EngineType.parse(engine)
    encoded = quote(policy_name, safe="")
    prefix = (base or "").rstrip("/")
    if engine == EngineType.OPENSEARCH:
        return f"{prefix}/_plugins/_ism/policies/{encoded}"
    return f"{prefix}/_ilm/policy/{encoded}"
