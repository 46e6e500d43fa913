"""ES Bridge 类型定义模块."""

from typing import Any, Callable, Dict, Optional

# 生命周期策略文档（ILM 阶段格式或 ISM 状态格式）
PolicyDict = Dict[str, Any]

# 动作参数字典
ActionParams = Dict[str, Any]

# 传输层可调用对象
# 签名: transport(method, url, body) -> 响应体 | None（404）
Transport = Callable[[str, str, Optional[Dict[str, Any]]], Optional[Dict[str, Any]]]
