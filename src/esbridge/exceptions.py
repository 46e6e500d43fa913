"""ES Bridge 异常定义模块."""


class EsBridgeError(Exception):
    """ES Bridge 基础异常类."""

    pass


class TransportError(EsBridgeError):
    """传输层异常.

    当 Elasticsearch / OpenSearch 返回非 2xx、非 404 的状态码时抛出，
    原样携带 HTTP 状态码和响应体。

    Attributes:
        status: HTTP 状态码
        body: 响应体（通常为解析后的 JSON 字典）
    """

    def __init__(self, status: int, body=None, message: str | None = None) -> None:
        self.status = status
        self.body = body
        super().__init__(message or f"ES 请求失败 (status={status}): {body}")

    @property
    def is_conflict(self) -> bool:
        """是否为 409 冲突."""
        return self.status == 409
