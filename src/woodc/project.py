"""Project context and the default reference handler.

A Project is a read-only view over a source tree on disk: it lists and reads
source files, caches per-directory variables and locates media files. It is
shared by all component builds of the tree.

Example:
    >>> project = Project(Path("site"))
    >>> component = project.component("res/page/index", "en")
    >>> component.display
    'Site / Index'
"""

from collections.abc import Iterable
from pathlib import Path

from woodc.component import Component
from woodc.config import ProjectConfig
from woodc.exceptions import GrammarError, MissingEntityError
from woodc.operators import CustomElement, CustomElementsRegistry, OperatorsNaming
from woodc.paths import (
    AliasTable,
    CompoPath,
    DirPath,
    FilePath,
    FileType,
    MediaAlias,
    default_alias_table,
)
from woodc.reference import Reference
from woodc.style import read_style
from woodc.transforms import Evaluator
from woodc.utils import get_logger
from woodc.variables import Variables

logger = get_logger("woodc.project")


class Project:
    """Source tree of a site project.

    Attributes:
        root: Project root directory.
        config: Project configuration.
        aliases: Media alias table, built-in aliases extended by the config.
        registry: Custom elements declared by the config.
    """

    def __init__(self, root: Path, config: ProjectConfig | None = None) -> None:
        """Create a project over a root directory.

        Args:
            root: Project root directory.
            config: Project configuration; defaults apply when omitted.
        """
        self.root: Path = root
        self.config: ProjectConfig = config if config is not None else ProjectConfig()
        self.aliases: AliasTable = default_alias_table().extend(
            MediaAlias(media.alias, media.expression, media.weight, media.media)
            for media in self.config.media
        )
        self.registry: CustomElementsRegistry = CustomElementsRegistry.of(
            CustomElement(element.tag, element.compo, element.operator)
            for element in self.config.custom_elements
        )
        self._variables: dict[DirPath, Variables] = {}

    @property
    def naming(self) -> OperatorsNaming:
        return self.config.operators

    @property
    def asset_dir(self) -> DirPath:
        return DirPath.parse(self.config.asset_dir)

    @property
    def theme_dir(self) -> DirPath:
        return DirPath.parse(self.config.theme_dir)

    # -------------------------------------------------------------------------
    # Files

    def file_path(self, value: str) -> FilePath:
        """Parse a file path using the project alias table."""
        return FilePath.parse(value, self.aliases)

    def exists(self, file: FilePath) -> bool:
        return (self.root / file.value).is_file()

    def read_text(self, file: FilePath) -> str:
        """Read a source file.

        Raises:
            MissingEntityError: If the file does not exist.
        """
        try:
            return (self.root / file.value).read_text(encoding="utf-8")
        except FileNotFoundError as e:
            msg = f"Missing source file |{file}|"
            raise MissingEntityError(msg, kind="file", name=file.value) from e

    def list_files(self, directory: DirPath) -> list[FilePath]:
        """List the files of a directory, sorted by name.

        Files whose names do not follow the file grammar, or carry unknown
        variants, are not source files and are skipped.
        """
        path = self.root / directory.value
        if not path.is_dir():
            return []
        files: list[FilePath] = []
        for entry in sorted(path.iterdir()):
            if not entry.is_file():
                continue
            try:
                files.append(directory.file(entry.name, self.aliases))
            except GrammarError:
                logger.debug("file skipped", file=str(entry))
        return files

    def layout_file(self, compo: CompoPath) -> FilePath:
        """Return the layout of a component, its own or the inline one.

        Raises:
            MissingEntityError: If neither layout file exists.
        """
        for candidate in compo.layout_candidates():
            if self.exists(candidate):
                return candidate
        msg = f"Missing component path |{compo}|"
        raise MissingEntityError(msg, kind="component", name=compo.value)

    def theme_styles(self) -> list[FilePath]:
        """Base stylesheets of the site theme, sorted by name."""
        return [
            file
            for file in self.list_files(self.theme_dir)
            if file.is_style and file.variants.is_empty
        ]

    # -------------------------------------------------------------------------
    # Resources

    def variables(self, directory: DirPath) -> Variables:
        """Return the variables defined in a directory, loaded once."""
        variables = self._variables.get(directory)
        if variables is None:
            variables = Variables()
            for file in self.list_files(directory):
                if file.type is FileType.VARIABLES:
                    variables.load(file, self.read_text(file))
            self._variables[directory] = variables
        return variables

    def media_file(
        self, language: str | None, reference: Reference, source: FilePath
    ) -> FilePath | None:
        """Locate the media file a reference points to.

        The source directory, extended by the reference path, is searched
        first, then the asset directory. In each directory a file matching
        the language is preferred over any other.

        Args:
            language: Requested language, or None.
            reference: Media reference.
            source: Source file declaring the reference.

        Returns:
            The media file, or None if none exists.
        """
        for scope in (source.dir, self.asset_dir):
            directory = scope.subdir(reference.path) if reference.path else scope
            candidates = [
                file
                for file in self.list_files(directory)
                if file.is_media and file.has_basename(reference.name)
            ]
            if not candidates:
                continue
            for file in candidates:
                if file.variants.has_language(language):
                    return file
            return candidates[0]
        return None

    # -------------------------------------------------------------------------
    # Builds

    def component(
        self,
        path: str | CompoPath | FilePath,
        language: str | None = None,
        *,
        evaluator: Evaluator | None = None,
    ) -> Component:
        """Build a component with the default reference handler.

        Args:
            path: Component path or layout file.
            language: Build language; defaults to the project default locale.
            evaluator: Interpreter for `@eval` expressions.
        """
        if isinstance(path, str):
            path = CompoPath.parse(path)
        handler = ProjectReferenceHandler(self, language, evaluator=evaluator)
        return Component.build(self, path, handler, evaluator=evaluator)

    def style(
        self,
        style_file: FilePath,
        language: str | None = None,
        *,
        evaluator: Evaluator | None = None,
    ) -> str:
        """Return a merged stylesheet with references substituted."""
        handler = ProjectReferenceHandler(self, language, evaluator=evaluator)
        return read_style(self, style_file, handler, evaluator=evaluator)

    def __repr__(self) -> str:
        return f"Project({self.root!r})"


class ProjectReferenceHandler:
    """Resolves references against project variables and media files.

    Variables come from the source directory, falling back to the asset
    directory. Media references resolve to root-relative URL paths.
    """

    __slots__ = ("_evaluator", "language", "project")

    def __init__(
        self,
        project: Project,
        language: str | None = None,
        *,
        evaluator: Evaluator | None = None,
    ) -> None:
        self.project: Project = project
        self.language: str | None = (
            language if language is not None else project.config.default_locale
        )
        self._evaluator = evaluator

    def __call__(self, reference: Reference, source: FilePath) -> str | None:
        if reference.is_variable:
            return self._variable(reference, source)
        media = self.project.media_file(self.language, reference, source)
        return None if media is None else f"/{media.value}"

    def _variable(self, reference: Reference, source: FilePath) -> str:
        scopes: Iterable[DirPath] = (source.dir, self.project.asset_dir)
        for directory in scopes:
            variables = self.project.variables(directory)
            if variables.lookup(self.language, reference) is not None:
                return variables.get(
                    self.language,
                    reference,
                    source,
                    self,
                    evaluator=self._evaluator,
                )
        msg = f"Missing variable value for reference |{source}:{reference}|"
        raise MissingEntityError(
            msg, kind="variable", name=str(reference), source=source.value
        )
