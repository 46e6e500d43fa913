"""生命周期动作转换注册表.

ILM 动作与 ISM 动作语义等价，但动作名和参数名不同（例如 max_docs ↔ min_doc_count）。
每种动作注册为一个 ActionTranslation（正向、反向转换函数对），
新增动作只需注册，无需修改转换或编排逻辑。

使用示例:
    from esbridge.lifecycle.actions import ActionTranslation, register_action, rename_params

    register_action(
        ActionTranslation(
            ilm_name="searchable_snapshot",
            ism_name="snapshot",
            to_ism=rename_params({"snapshot_repository": "repository"}),
            to_ilm=rename_params({"repository": "snapshot_repository"}),
        )
    )
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..typing import ActionParams

ParamsConverter = Callable[[ActionParams], ActionParams]

# ISM 中没有对应动作的 ILM 动作，转换时丢弃并记录诊断
UNSUPPORTED_ILM_ACTIONS = frozenset({"set_priority", "allocate", "migrate"})


def identity_params(params: ActionParams | None) -> ActionParams:
    """参数原样复制."""
    return dict(params or {})


def rename_params(mapping: dict[str, str]) -> ParamsConverter:
    """构建参数重命名函数.

    只保留 mapping 中列出且值不为 None 的参数，其他参数丢弃。

    Args:
        mapping: 源参数名到目标参数名的映射

    Returns:
        参数转换函数

    Examples:
        >>> rename_params({"max_docs": "min_doc_count"})({"max_docs": 100, "x": 1})
        {'min_doc_count': 100}
    """

    def convert(params: ActionParams | None) -> ActionParams:
        params = params or {}
        return {
            target: params[source]
            for source, target in mapping.items()
            if params.get(source) is not None
        }

    return convert


def _reverse(mapping: dict[str, str]) -> dict[str, str]:
    return {target: source for source, target in mapping.items()}


@dataclass(frozen=True)
class ActionTranslation:
    """单个动作的双向转换定义.

    Attributes:
        ilm_name: ILM 动作名
        ism_name: ISM 动作名
        to_ism: ILM 参数 -> ISM 参数
        to_ilm: ISM 参数 -> ILM 参数
    """

    ilm_name: str
    ism_name: str
    to_ism: ParamsConverter = identity_params
    to_ilm: ParamsConverter = identity_params

    @classmethod
    def renamed(cls, ilm_name: str, ism_name: str, mapping: dict[str, str]) -> ActionTranslation:
        """根据 ILM -> ISM 参数名映射构建双向转换."""
        return cls(
            ilm_name=ilm_name,
            ism_name=ism_name,
            to_ism=rename_params(mapping),
            to_ilm=rename_params(_reverse(mapping)),
        )


class ActionRegistry:
    """动作转换注册表.

    同时按 ILM 动作名和 ISM 动作名索引，支持双向查找。

    Examples:
        >>> registry = ActionRegistry([ActionTranslation("delete", "delete")])
        >>> registry.to_ism("delete", {})
        ('delete', {})
    """

    def __init__(self, translations: list[ActionTranslation] | None = None) -> None:
        self._by_ilm: dict[str, ActionTranslation] = {}
        self._by_ism: dict[str, ActionTranslation] = {}
        for translation in translations or []:
            self.register(translation)

    def register(self, translation: ActionTranslation) -> ActionRegistry:
        """注册动作转换，同名动作会被覆盖.

        Returns:
            自身实例，支持链式调用
        """
        self._by_ilm[translation.ilm_name] = translation
        self._by_ism[translation.ism_name] = translation
        return self

    def copy(self) -> ActionRegistry:
        return ActionRegistry(list(self._by_ilm.values()))

    def ilm_names(self) -> list[str]:
        return list(self._by_ilm)

    def ism_names(self) -> list[str]:
        return list(self._by_ism)

    def to_ism(self, ilm_name: str, params: ActionParams | None) -> tuple[str, ActionParams] | None:
        """将 ILM 动作转换为 ISM 动作.

        Returns:
            (ISM 动作名, ISM 参数)；未注册的动作返回 None
        """
        translation = self._by_ilm.get(ilm_name)
        if translation is None:
            return None
        return translation.ism_name, translation.to_ism(params)

    def to_ilm(self, ism_action: dict[str, Any]) -> tuple[str, ActionParams] | None:
        """将 ISM 动作对象转换为 ILM 动作.

        ISM 动作对象形如 {"rollover": {...}, "retry": {...}}，
        取第一个已注册的键作为动作名，其余键（retry、timeout 等）忽略。

        Returns:
            (ILM 动作名, ILM 参数)；没有已注册的动作时返回 None
        """
        for key, params in ism_action.items():
            translation = self._by_ism.get(key)
            if translation is not None:
                return translation.ilm_name, translation.to_ilm(params)
        return None


def build_default_registry() -> ActionRegistry:
    """构建内置动作转换表."""
    return ActionRegistry(
        [
            ActionTranslation.renamed(
                "rollover",
                "rollover",
                {
                    "max_age": "min_index_age",
                    "max_docs": "min_doc_count",
                    "max_size": "min_size",
                },
            ),
            ActionTranslation("delete", "delete"),
            ActionTranslation("readonly", "read_only"),
            ActionTranslation.renamed(
                "shrink", "shrink", {"number_of_shards": "num_new_shards"}
            ),
            ActionTranslation.renamed(
                "force_merge", "force_merge", {"max_num_segments": "max_num_segments"}
            ),
        ]
    )


default_registry = build_default_registry()


def register_action(translation: ActionTranslation) -> ActionRegistry:
    """向默认注册表注册动作转换."""
    return default_registry.register(translation)
