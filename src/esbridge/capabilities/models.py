"""引擎探测数据模型定义模块."""

from dataclasses import dataclass
from functools import total_ordering
from typing import Any

from ..connection.models import EngineType


@total_ordering
@dataclass(frozen=True, eq=False)
class VersionInfo:
    """结构化版本号.

    按 (major, minor, patch) 字典序比较，patch 缺省时按 0 处理，
    因此 VersionInfo(7, 17) == VersionInfo(7, 17, 0)。

    Attributes:
        major: 主版本号
        minor: 次版本号
        patch: 修订号，版本字符串未提供时为 None
    """

    major: int
    minor: int
    patch: int | None = None

    def sort_key(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch or 0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionInfo):
            return NotImplemented
        return self.sort_key() == other.sort_key()

    def __lt__(self, other: "VersionInfo") -> bool:
        if not isinstance(other, VersionInfo):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __hash__(self) -> int:
        return hash(self.sort_key())

    def __str__(self) -> str:
        if self.patch is None:
            return f"{self.major}.{self.minor}"
        return f"{self.major}.{self.minor}.{self.patch}"

    def to_dict(self) -> dict[str, Any]:
        """转换为字典，patch 缺省时不包含 patch 键."""
        result: dict[str, Any] = {"major": self.major, "minor": self.minor}
        if self.patch is not None:
            result["patch"] = self.patch
        return result


@dataclass(frozen=True)
class EngineInfo:
    """探测到的引擎信息.

    Attributes:
        engine: 引擎类型
        version: 结构化版本号，集群未返回版本号时为 None
    """

    engine: EngineType
    version: VersionInfo | None = None
