import re

import pytest

from woodc.component import Declaration, DeclarationKind, parse_descriptor
from woodc.exceptions import StructureError

SOURCE = "res/page/page.xml"

DESCRIPTOR = """\
<compo>
    <display>Index Page</display>
    <description>Home page</description>
    <security-role>admin</security-role>
    <meta name="description" content="Home" />
    <link href="style/base.css" />
    <link href="https://fonts.example.com" rel="preconnect" />
    <script src="script/index.js" />
    <script src="script/lib.js" embedded="true" />
    <script-defer>false</script-defer>
</compo>
"""


class TestParseDescriptor:
    def test_texts(self) -> None:
        descriptor = parse_descriptor(DESCRIPTOR, SOURCE)

        assert descriptor.display == "Index Page"
        assert descriptor.description == "Home page"
        assert descriptor.security_role == "admin"
        assert descriptor.version is None

    def test_links_receive_default_attributes(self) -> None:
        links = parse_descriptor(DESCRIPTOR, SOURCE).links

        assert [link.key for link in links] == [
            "style/base.css",
            "https://fonts.example.com",
        ]
        assert links[0].as_dict() == {
            "href": "style/base.css",
            "rel": "stylesheet",
            "type": "text/css",
        }
        assert links[1].get("rel") == "preconnect"

    def test_script_defaults_are_overridable(self) -> None:
        scripts = parse_descriptor(DESCRIPTOR, SOURCE).scripts

        assert [script.key for script in scripts] == [
            "script/index.js",
            "script/lib.js",
        ]
        assert scripts[0].get("defer") == "false"
        assert scripts[0].get("type") == "text/javascript"
        assert not scripts[0].is_embedded
        assert scripts[1].is_embedded

    def test_meta_identity_is_all_attributes(self) -> None:
        metas = parse_descriptor(DESCRIPTOR, SOURCE).metas

        assert len(metas) == 1
        assert metas[0].as_dict() == {"name": "description", "content": "Home"}

    def test_empty_descriptor(self) -> None:
        descriptor = parse_descriptor("<compo/>", SOURCE)

        assert descriptor.display is None
        assert descriptor.scripts == ()

    def test_duplicate_declaration_is_fatal(self) -> None:
        text = '<compo><script src="a.js"/><script src="a.js" defer="false"/></compo>'

        with pytest.raises(StructureError, match="Duplicate script"):
            _ = parse_descriptor(text, SOURCE)

    def test_missing_key_attribute_is_fatal(self) -> None:
        with pytest.raises(StructureError, match=re.escape("Missing |href|")):
            _ = parse_descriptor('<compo><link rel="icon"/></compo>', SOURCE)


class TestDeclaration:
    def test_equality_by_kind_and_key(self) -> None:
        first = Declaration(DeclarationKind.LINK, "a.css", (("href", "a.css"),))
        second = Declaration(
            DeclarationKind.LINK, "a.css", (("href", "a.css"), ("rel", "x"))
        )
        script = Declaration(DeclarationKind.SCRIPT, "a.css", (("src", "a.css"),))

        assert first == second
        assert first != script
