import pytest

from woodc.operators import (
    CustomElement,
    CustomElementsRegistry,
    Operator,
    OperatorsNaming,
    attribute_name,
    source_attribute_name,
)


class TestAttributeName:
    @pytest.mark.parametrize(
        ("naming", "expected"),
        [
            (OperatorsNaming.XMLNS, "wood:compo"),
            (OperatorsNaming.DATA_ATTR, "data-compo"),
            (OperatorsNaming.ATTR, "compo"),
        ],
    )
    def test_formats_by_naming(self, naming: OperatorsNaming, expected: str) -> None:
        assert attribute_name(naming, Operator.COMPO) == expected

    def test_source_name_uses_declared_prefix(self) -> None:
        assert (
            source_attribute_name(OperatorsNaming.XMLNS, Operator.TEMPLATE, "w")
            == "w:template"
        )
        assert (
            source_attribute_name(OperatorsNaming.XMLNS, Operator.TEMPLATE)
            == "wood:template"
        )

    def test_source_name_ignores_prefix_without_namespace(self) -> None:
        assert (
            source_attribute_name(OperatorsNaming.DATA_ATTR, Operator.PARAM, "w")
            == "data-param"
        )


class TestCustomElementsRegistry:
    def test_lookup_by_tag(self) -> None:
        dialog = CustomElement("app-dialog", "res/compo/dialog")
        registry = CustomElementsRegistry.of([dialog])

        assert "app-dialog" in registry
        assert registry.get("app-dialog") is dialog
        assert registry.get("app-menu") is None
        assert len(registry) == 1

    def test_default_operator_is_compo(self) -> None:
        assert CustomElement("app-page", "res/page").operator is Operator.COMPO
