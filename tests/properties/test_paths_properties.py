import pytest
from hypothesis import assume, given, strategies as st

from woodc.exceptions import GrammarError
from woodc.paths import SOURCE_ROOTS, CompoPath, DirPath, FilePath

segment = st.from_regex(r"[a-z0-9][a-z0-9-]{0,7}", fullmatch=True)
segments = st.lists(segment, min_size=1, max_size=4)
roots = st.sampled_from(sorted(SOURCE_ROOTS))
extensions = st.sampled_from(["htm", "css", "js", "xml", "png", "woff2"])
languages = st.sampled_from(["", "_de", "_en-us", "_lgd", "_de_w800"])


@given(root=roots, parts=segments)
def test_dir_path_parse_is_idempotent(root: str, parts: list[str]) -> None:
    path = DirPath.parse("/".join([root, *parts]))

    assert path.value.endswith("/")
    assert DirPath.parse(path.value) == path


@given(
    root=roots,
    parts=segments,
    basename=segment,
    variant=languages,
    extension=extensions,
)
def test_file_path_value_round_trips(
    root: str, parts: list[str], basename: str, variant: str, extension: str
) -> None:
    value = "/".join([root, *parts, f"{basename}{variant}.{extension}"])

    path = FilePath.parse(value)

    assert path.value == value
    assert path.basename == basename
    assert FilePath.parse(path.value) == path


@given(root=roots, parts=segments)
def test_compo_path_layout_named_after_component(root: str, parts: list[str]) -> None:
    compo = CompoPath.parse("/".join([root, *parts]) + "/")

    own, inline = compo.layout_candidates()

    assert own.basename == inline.basename == parts[-1]
    assert own.dir.value == f"{compo.value}/"
    assert CompoPath.parse(compo.value) == compo


@given(value=st.from_regex(r"[A-Z][A-Za-z]{0,8}(/[a-z]+){0,2}", fullmatch=True))
def test_uppercase_paths_are_rejected(value: str) -> None:
    with pytest.raises(GrammarError):
        _ = DirPath.parse(value)
    with pytest.raises(GrammarError):
        _ = CompoPath.parse(value)


@given(root=st.from_regex(r"[a-z]{2,6}", fullmatch=True), parts=segments)
def test_unknown_source_roots_are_rejected(root: str, parts: list[str]) -> None:
    assume(root not in SOURCE_ROOTS)

    with pytest.raises(GrammarError, match="not a source directory"):
        _ = DirPath.parse("/".join([root, *parts]))
