import pytest

from woodc.exceptions import CycleError, MissingEntityError, StructureError
from woodc.paths import FilePath
from woodc.reference import Reference
from woodc.variables import Variables, parse_definitions

STRINGS = FilePath.parse("res/asset/strings.xml")
STRINGS_DE = FilePath.parse("res/asset/strings_de.xml")
SOURCE = FilePath.parse("res/page/page.htm")


def _ref(value: str) -> Reference:
    return Reference.parse(value)


class VariablesHandler:
    """Resolves nested references back through the same variables."""

    def __init__(self, variables: Variables, language: str | None) -> None:
        self.variables = variables
        self.language = language

    def __call__(self, reference: Reference, source: FilePath) -> str:
        return self.variables.get(self.language, reference, source, self)


class TestParseDefinitions:
    def test_parses_values_by_reference(self) -> None:
        values = parse_definitions(
            "<string><title> Hello </title><empty/></string>", STRINGS.value
        )

        assert values == {_ref("string/title"): "Hello", _ref("string/empty"): ""}

    def test_text_values_keep_markup(self) -> None:
        values = parse_definitions(
            "<text><intro>Hi <b>all</b>!</intro></text>", STRINGS.value
        )

        assert values == {_ref("text/intro"): "Hi <b>all</b>!"}

    def test_nested_markup_in_plain_value_is_fatal(self) -> None:
        with pytest.raises(StructureError, match="Not allowed nested element"):
            _ = parse_definitions("<string><a>x <b>y</b></a></string>", STRINGS.value)

    def test_other_xml_is_not_a_definition(self) -> None:
        assert parse_definitions("<compo><display>x</display></compo>", "x") is None
        assert parse_definitions("<image><a>x</a></image>", "x") is None


class TestVariables:
    @pytest.fixture
    def variables(self) -> Variables:
        variables = Variables()
        variables.load(
            STRINGS,
            "<string><title>Default</title><footer>Foot</footer><blank/></string>",
        )
        variables.load(STRINGS_DE, "<string><title>Titel</title><blank/></string>")
        return variables

    def test_load_groups_by_language(self, variables: Variables) -> None:
        assert variables.languages() == [None, "de"]
        assert _ref("string/title") in variables

    def test_load_rejects_non_definition_files(self) -> None:
        assert not Variables().load(STRINGS, "<compo/>")

    @pytest.mark.parametrize(
        ("language", "expected"),
        [("de", "Titel"), ("DE", "Titel"), ("fr", "Default"), (None, "Default")],
    )
    def test_get_by_language(
        self, variables: Variables, language: str | None, expected: str
    ) -> None:
        handler = VariablesHandler(variables, language)

        value = variables.get(language, _ref("string/title"), SOURCE, handler)

        assert value == expected

    def test_falls_back_to_default_language(self, variables: Variables) -> None:
        handler = VariablesHandler(variables, "de")

        assert variables.get("de", _ref("string/footer"), SOURCE, handler) == "Foot"

    def test_missing_value_is_fatal(self, variables: Variables) -> None:
        handler = VariablesHandler(variables, "de")

        with pytest.raises(MissingEntityError) as exc_info:
            _ = variables.get("de", _ref("string/nope"), SOURCE, handler)

        assert exc_info.value.kind == "variable"
        assert exc_info.value.name == "@string/nope"

    def test_empty_value_counts_as_missing(self, variables: Variables) -> None:
        assert variables.lookup("de", _ref("string/blank")) is None

    def test_resolves_nested_references(self) -> None:
        variables = Variables()
        variables.load(
            STRINGS,
            "<string><name>Wood</name><title>Welcome to @string/name</title>"
            "<twice>@string/name and @string/name</twice></string>",
        )
        handler = VariablesHandler(variables, None)

        title = variables.get(None, _ref("string/title"), SOURCE, handler)
        twice = variables.get(None, _ref("string/twice"), SOURCE, handler)

        assert title == "Welcome to Wood"
        assert twice == "Wood and Wood"

    def test_circular_references_are_fatal(self) -> None:
        variables = Variables()
        variables.load(
            STRINGS,
            "<string><a>see @string/b</a><b>see @string/c</b><c>@string/a</c></string>",
        )
        handler = VariablesHandler(variables, None)

        with pytest.raises(CycleError, match="Circular variable references") as exc:
            _ = variables.get(None, _ref("string/a"), SOURCE, handler)

        assert exc.value.trace == (
            "res/page/page.htm:@string/a",
            "res/page/page.htm:@string/b",
            "res/page/page.htm:@string/c",
            "res/page/page.htm:@string/a",
        )

    def test_trace_is_cleared_after_failure(self) -> None:
        variables = Variables()
        variables.load(
            STRINGS, "<string><a>@string/a</a><b>fine</b></string>"
        )
        handler = VariablesHandler(variables, None)

        with pytest.raises(CycleError):
            _ = variables.get(None, _ref("string/a"), SOURCE, handler)

        assert variables.get(None, _ref("string/b"), SOURCE, handler) == "fine"
