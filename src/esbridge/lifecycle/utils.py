"""生命周期策略工具函数模块.

提供 min_age 规范化和策略格式识别。
"""

import re
from typing import Any

from .exceptions import PolicyValidationError
from .models import PolicyForm

# ISM min_index_age 支持的格式：数字 + 时间单位（ms, s, m, h, d）
_MIN_AGE_PATTERN = re.compile(r"^(\d+)(ms|s|m|h|d)$")


def parse_min_age(value: str | None) -> str | None:
    """将 ILM min_age 规范化为 ISM 条件使用的 数字+单位 格式.

    Args:
        value: min_age 字符串，如 "7d"、"30d"

    Returns:
        规范化后的字符串；value 为 None 或格式不支持时返回 None

    Examples:
        >>> parse_min_age("30d")
        '30d'
        >>> parse_min_age("1w") is None
        True
    """
    if not isinstance(value, str):
        return None
    match = _MIN_AGE_PATTERN.match(value.strip())
    if match is None:
        return None
    amount, unit = match.groups()
    return f"{int(amount)}{unit}"


def detect_policy_form(policy: dict[str, Any]) -> PolicyForm | None:
    """识别策略文档格式.

    Args:
        policy: 策略文档

    Returns:
        PolicyForm.PHASES / PolicyForm.STATES；两者都不是时返回 None

    Raises:
        PolicyValidationError: 当策略不是字典，或同时包含 phases 和 states 时抛出
    """
    if not isinstance(policy, dict):
        raise PolicyValidationError(f"策略必须为字典，当前类型: {type(policy).__name__}")

    has_phases = PolicyForm.PHASES.value in policy
    has_states = PolicyForm.STATES.value in policy
    if has_phases and has_states:
        raise PolicyValidationError("策略不能同时包含 phases 和 states")
    if has_phases:
        return PolicyForm.PHASES
    if has_states:
        return PolicyForm.STATES
    return None
