"""生命周期策略异常定义模块."""

from ..exceptions import EsBridgeError, TransportError


class LifecycleError(EsBridgeError):
    """生命周期策略基础异常类.

    所有策略相关异常的基类，继承自 EsBridgeError。
    """

    pass


class PolicyValidationError(LifecycleError):
    """策略文档校验异常.

    当策略文档结构不合法时抛出，例如同时包含 phases 和 states、
    没有任何可识别的阶段等。
    """

    pass


class PolicyNotFoundError(LifecycleError):
    """策略未找到异常.

    OpenSearch 更新策略时，读取现有策略返回 404 时抛出。
    """

    def __init__(self, policy_name: str, message: str = "Policy not found for update") -> None:
        self.policy_name = policy_name
        super().__init__(f"{message}: {policy_name!r}")


class StaleRevisionError(TransportError):
    """策略修订版本过期异常.

    OpenSearch 条件更新（if_seq_no / if_primary_term）被拒绝时抛出，
    说明在读取与写入之间策略已被其他写入方修改。不会自动重试。

    Attributes:
        policy_name: 策略名称
        seq_no: 读取到的 _seq_no
        primary_term: 读取到的 _primary_term
    """

    def __init__(
        self,
        policy_name: str,
        seq_no: int,
        primary_term: int,
        status: int = 409,
        body=None,
    ) -> None:
        self.policy_name = policy_name
        self.seq_no = seq_no
        self.primary_term = primary_term
        super().__init__(
            status,
            body,
            f"策略 '{policy_name}' 已被修改 "
            f"(if_seq_no={seq_no}, if_primary_term={primary_term})",
        )
