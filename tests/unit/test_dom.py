import pytest

from woodc.dom import Document, NodeKind, parse_document, serialize
from woodc.exceptions import StructureError


class TestParseDocument:
    def test_round_trip_markup(self) -> None:
        text = '<div class="a"><p>x</p><br /><!-- note --></div>'

        assert serialize(parse_document(text)) == text

    def test_accepts_html_entities(self) -> None:
        document = parse_document("<p>a&nbsp;b &amp; c</p>")

        assert document.root.text == "a\xa0b & c"

    def test_accepts_html_entities_in_attributes(self) -> None:
        document = parse_document('<p title="&copy; 2024">&hellip;</p>')

        assert document.root.get_attr("title") == "\xa9 2024"
        assert document.root.text == "\u2026"

    def test_rejects_unknown_entities(self) -> None:
        with pytest.raises(StructureError, match="Invalid markup"):
            _ = parse_document("<p>&bogus;</p>")

    def test_normalizes_wood_namespace_prefix(self) -> None:
        document = parse_document(
            '<div xmlns:w="js-lib.com/wood" w:compo="res/compo/nav" id="x"/>'
        )

        assert document.root.attrs == {"wood:compo": "res/compo/nav", "id": "x"}

    def test_empty_document_is_fatal(self) -> None:
        with pytest.raises(StructureError, match="Empty layout document"):
            _ = parse_document("  \n", "res/page/page.htm")

    def test_malformed_markup_is_fatal(self) -> None:
        with pytest.raises(StructureError, match="line 1") as exc_info:
            _ = parse_document("<div><p></div>", "res/page/page.htm")

        assert exc_info.value.path == "res/page/page.htm"


class TestSerialize:
    def test_html_mode_self_closes_void_elements_only(self) -> None:
        document = parse_document("<div><span></span><img src='a.png'/></div>")

        assert serialize(document) == '<div><span></span><img src="a.png" /></div>'

    def test_xml_mode_self_closes_empty_elements(self) -> None:
        document = parse_document("<div><span></span></div>")

        assert serialize(document, html=False) == "<div><span /></div>"

    def test_escapes_text_and_attributes(self) -> None:
        document = Document("p", {"title": 'say "hi"'})
        document.root.append_child(document.create_text("a < b"))

        assert serialize(document) == "<p title='say \"hi\"'>a &lt; b</p>"


class TestElement:
    def test_insert_sibling_before(self) -> None:
        document = parse_document("<ul><li>a</li><li>b</li></ul>")
        _, second = document.root.children

        inserted = second.insert_sibling_before(
            document.create_element("li", {"id": "c"})
        )

        assert inserted.parent == document.root
        assert serialize(document) == '<ul><li>a</li><li id="c"></li><li>b</li></ul>'

    def test_remove_detaches_node(self) -> None:
        document = parse_document("<ul><li>a</li><li>b</li></ul>")
        first = document.root.children[0]

        first.remove()

        assert first.parent is None
        assert serialize(document) == "<ul><li>b</li></ul>"

    def test_append_child_imports_foreign_node(self) -> None:
        document = parse_document("<main></main>")
        other = parse_document("<section><b>x</b></section>")

        appended = document.root.append_child(other.root.children[0])

        assert appended.document is document
        assert serialize(document) == "<main><b>x</b></main>"
        assert serialize(other) == "<section><b>x</b></section>"

    def test_append_child_moves_own_node(self) -> None:
        document = parse_document("<div><p>x</p><section></section></div>")
        paragraph, section = document.root.children

        section.append_child(paragraph)

        assert serialize(document) == "<div><section><p>x</p></section></div>"

    def test_has_children_ignores_blank_text(self) -> None:
        assert not parse_document("<div>  \n </div>").root.has_children
        assert parse_document("<div>text</div>").root.has_children
        assert parse_document("<div><br/></div>").root.has_children

    def test_find_by_attr_in_document_order(self) -> None:
        document = parse_document(
            '<div data-x="1"><p data-x="2"><b data-x="3"/></p><i data-y="4"/></div>'
        )

        found = document.find_by_attr("data-x")

        assert [element.get_attr("data-x") for element in found] == ["1", "2", "3"]
        assert document.find_by_attr("data-x", "2")[0].tag == "p"

    def test_child_nodes_include_text_and_comments(self) -> None:
        document = parse_document("<p>a<!-- c --><b/>d</p>")

        kinds = [node.kind for node in document.root.child_nodes]

        assert kinds == [
            NodeKind.TEXT,
            NodeKind.COMMENT,
            NodeKind.ELEMENT,
            NodeKind.TEXT,
        ]

    def test_handles_compare_by_node(self) -> None:
        document = parse_document("<div><p/></div>")

        assert document.root == document.root
        assert document.root.children[0].parent == document.root
        assert len({document.root, document.root}) == 1
