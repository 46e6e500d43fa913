"""动作转换注册表单元测试."""

import pytest

from esbridge.lifecycle.actions import (
    UNSUPPORTED_ILM_ACTIONS,
    ActionRegistry,
    ActionTranslation,
    build_default_registry,
    identity_params,
    rename_params,
)


@pytest.fixture
def registry() -> ActionRegistry:
    """每个测试使用独立的内置注册表."""
    return build_default_registry()


class TestParamsConverters:
    """参数转换函数测试."""

    def test_identity_copies(self) -> None:
        """测试原样复制且不共享引用."""
        params = {"a": 1}
        result = identity_params(params)
        assert result == params
        assert result is not params

    def test_identity_none(self) -> None:
        assert identity_params(None) == {}

    def test_rename_keeps_mapped_keys_only(self) -> None:
        """测试只保留映射中的参数."""
        convert = rename_params({"max_docs": "min_doc_count"})
        assert convert({"max_docs": 100, "other": 1}) == {"min_doc_count": 100}

    def test_rename_skips_none_values(self) -> None:
        """测试值为 None 的参数不输出."""
        convert = rename_params({"max_age": "min_index_age", "max_docs": "min_doc_count"})
        assert convert({"max_age": None, "max_docs": 5}) == {"min_doc_count": 5}
        assert convert(None) == {}


class TestDefaultRegistry:
    """内置动作转换表测试."""

    def test_registered_names(self, registry: ActionRegistry) -> None:
        assert set(registry.ilm_names()) == {
            "rollover",
            "delete",
            "readonly",
            "shrink",
            "force_merge",
        }
        assert "read_only" in registry.ism_names()

    def test_unsupported_actions_not_registered(self, registry: ActionRegistry) -> None:
        """测试不支持的动作未注册."""
        for name in UNSUPPORTED_ILM_ACTIONS:
            assert registry.to_ism(name, {}) is None

    @pytest.mark.parametrize(
        "ilm_name, params, expected",
        [
            (
                "rollover",
                {"max_age": "1d", "max_docs": 1000, "max_size": "50gb"},
                ("rollover", {"min_index_age": "1d", "min_doc_count": 1000, "min_size": "50gb"}),
            ),
            ("rollover", {"max_docs": 100000}, ("rollover", {"min_doc_count": 100000})),
            ("delete", {}, ("delete", {})),
            ("readonly", {}, ("read_only", {})),
            ("shrink", {"number_of_shards": 1}, ("shrink", {"num_new_shards": 1})),
            ("force_merge", {"max_num_segments": 1}, ("force_merge", {"max_num_segments": 1})),
        ],
    )
    def test_to_ism(self, registry: ActionRegistry, ilm_name, params, expected) -> None:
        assert registry.to_ism(ilm_name, params) == expected

    @pytest.mark.parametrize(
        "ism_action, expected",
        [
            (
                {"rollover": {"min_index_age": "1d", "min_doc_count": 10}},
                ("rollover", {"max_age": "1d", "max_docs": 10}),
            ),
            ({"read_only": {}}, ("readonly", {})),
            ({"shrink": {"num_new_shards": 2}}, ("shrink", {"number_of_shards": 2})),
            ({"retry": {"count": 3}, "delete": {}}, ("delete", {})),
        ],
    )
    def test_to_ilm(self, registry: ActionRegistry, ism_action, expected) -> None:
        assert registry.to_ilm(ism_action) == expected

    def test_unknown_actions(self, registry: ActionRegistry) -> None:
        assert registry.to_ism("searchable_snapshot", {}) is None
        assert registry.to_ilm({"notification": {}}) is None


class TestCustomRegistration:
    """自定义动作注册测试."""

    def test_register_chain(self) -> None:
        """测试注册支持链式调用."""
        registry = ActionRegistry()
        result = registry.register(ActionTranslation("delete", "delete"))
        assert result is registry
        assert registry.to_ism("delete", None) == ("delete", {})

    def test_register_new_action(self, registry: ActionRegistry) -> None:
        """测试新增动作无需修改转换逻辑."""
        registry.register(
            ActionTranslation.renamed(
                "searchable_snapshot",
                "snapshot",
                {"snapshot_repository": "repository"},
            )
        )
        assert registry.to_ism("searchable_snapshot", {"snapshot_repository": "repo"}) == (
            "snapshot",
            {"repository": "repo"},
        )
        assert registry.to_ilm({"snapshot": {"repository": "repo"}}) == (
            "searchable_snapshot",
            {"snapshot_repository": "repo"},
        )

    def test_copy_is_independent(self, registry: ActionRegistry) -> None:
        """测试复制后的注册表互不影响."""
        copied = registry.copy()
        copied.register(ActionTranslation("freeze", "freeze"))
        assert copied.to_ism("freeze", {}) == ("freeze", {})
        assert registry.to_ism("freeze", {}) is None
