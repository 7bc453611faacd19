"""Component composition engine.

A component is built once from its base layout by recursively resolving
template inheritance and widget inclusion into one consolidated document,
collecting related style files and descriptor declarations on the way.

Template inheritance: a content fragment declares `template="path[#name]"`;
its content elements are spliced into the template at the matching
editable elements. Widget inclusion: an element declaring `compo="path"`
receives the children of the resolved widget layout. Both recursions share
one nesting counter bounded by MAX_NESTING_LEVELS.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from woodc.dom import Document, Element, parse_document
from woodc.exceptions import CycleError, MissingEntityError, StructureError
from woodc.operators import Operator, attribute_name
from woodc.paths import CompoPath, EditablePath, FilePath
from woodc.reference import ReferenceHandler
from woodc.transforms import (
    Evaluator,
    LayoutParameters,
    iter_injected,
    iter_resolved,
    resolve_text,
)
from woodc.utils import get_logger

from ._descriptor import ComponentDescriptor, Declaration, add_all, parse_descriptor

if TYPE_CHECKING:
    from woodc.project import Project

logger = get_logger("woodc.component")

MAX_NESTING_LEVELS = 8


def nesting_guard(layout: FilePath, depth: int) -> CycleError | None:
    """Check a layout nesting depth against the recursion bound.

    Args:
        layout: Layout about to be loaded.
        depth: Number of template and widget references leading to it.

    Returns:
        The cycle error to raise, or None when within bounds.
    """
    if depth <= MAX_NESTING_LEVELS:
        return None
    msg = (
        f"Circular compo references suspicion. Too many nesting levels on |{layout}|. "
        "Please check template and compo operators"
    )
    return CycleError(msg, path=layout.value)


def merge_attrs(
    target: Element, attrs: dict[str, str], *, override: bool = False
) -> None:
    """Merge attributes into an element.

    The `class` attribute becomes the deduplicated union of both class
    lists, winner classes first; any other attribute is set only when the
    target lacks it or override is true.

    Args:
        target: Element receiving the attributes.
        attrs: Attributes to merge.
        override: Whether attrs win over the target's own attributes.
    """
    for name, value in attrs.items():
        if name == "class":
            own = (target.get_attr("class") or "").split()
            incoming = value.split()
            ordered = [*incoming, *own] if override else [*own, *incoming]
            target.set_attr("class", " ".join(dict.fromkeys(ordered)))
        elif override or not target.has_attr(name):
            target.set_attr(name, value)


def _is_attached(element: Element) -> bool:
    node: Element | None = element
    while node is not None:
        if node == node.document.root:
            return True
        node = node.parent
    return False


class _Editables:
    """Editable elements of one template document, looked up by name."""

    __slots__ = ("_attribute", "_document", "_used")

    def __init__(self, document: Document, attribute: str) -> None:
        self._document = document
        self._attribute = attribute
        self._used: dict[str | None, Element] = {}

    def get(self, name: str | None) -> Element | None:
        editable = self._used.get(name)
        if editable is not None:
            return editable

        candidates = self._document.find_by_attr(self._attribute, name)
        if not candidates:
            return None
        if name is None and len(candidates) > 1:
            names = ", ".join(e.get_attr(self._attribute) or "" for e in candidates)
            msg = f"Template has multiple editables |{names}|; content must name one"
            raise StructureError(msg)

        editable = candidates[0]
        if editable.has_children:
            msg = (
                f"Template editable element |{editable.get_attr(self._attribute)}| "
                "is not allowed to have children"
            )
            raise StructureError(msg)
        self._used[name] = editable
        return editable

    def remove_used(self) -> None:
        for editable in self._used.values():
            editable.remove()


@dataclass(frozen=True, slots=True)
class Component:
    """A component consolidated from its templates and widgets.

    Attributes:
        name: Component name, the base layout basename.
        layout_path: Base layout file.
        display: Display name from the descriptor, or derived from the name.
        description: Description from the descriptor, or the display name.
        layout: Consolidated document.
        style_files: Related style files, broadest scope first.
        metas: Meta declarations, first seen first.
        links: Link declarations, first seen first.
        scripts: Script declarations, first seen first.
        security_role: Security role from the descriptor, or None.
    """

    name: str
    layout_path: FilePath
    display: str
    description: str
    layout: Document = field(compare=False, repr=False)
    style_files: tuple[FilePath, ...] = ()
    metas: tuple[Declaration, ...] = ()
    links: tuple[Declaration, ...] = ()
    scripts: tuple[Declaration, ...] = ()
    security_role: str | None = None

    @classmethod
    def build(
        cls,
        project: "Project",
        path: CompoPath | FilePath,
        handler: ReferenceHandler,
        *,
        evaluator: Evaluator | None = None,
    ) -> "Component":
        """Build a component from its address or base layout file.

        Args:
            project: Project the component belongs to.
            path: Component path or layout file.
            handler: Resolves references found in the component sources.
            evaluator: Interpreter for `@eval` expressions.

        Returns:
            The consolidated component.

        Raises:
            WoodError: Any failure of the composition rules; see the
                exceptions module for the taxonomy.
        """
        layout_path = project.layout_file(path) if isinstance(path, CompoPath) else path
        return _ComponentBuilder(project, handler, evaluator).build(layout_path)

    @property
    def root(self) -> Element:
        """Root element of the consolidated layout."""
        return self.layout.root


class _ComponentBuilder:
    """Per-build state: collected styles and declarations."""

    def __init__(
        self,
        project: "Project",
        handler: ReferenceHandler,
        evaluator: Evaluator | None,
    ) -> None:
        self._project = project
        self._handler = handler
        self._evaluator = evaluator
        naming = project.naming
        self._template = attribute_name(naming, Operator.TEMPLATE)
        self._editable = attribute_name(naming, Operator.EDITABLE)
        self._content = attribute_name(naming, Operator.CONTENT)
        self._compo = attribute_name(naming, Operator.COMPO)
        self._param = attribute_name(naming, Operator.PARAM)
        self._script = attribute_name(naming, Operator.SCRIPT)
        self._styles: list[FilePath] = []
        self._metas: list[Declaration] = []
        self._links: list[Declaration] = []
        self._scripts: list[Declaration] = []

    def build(self, layout_path: FilePath) -> Component:
        layout = self._scan(layout_path, 0, LayoutParameters())
        descriptor = self._merge_descriptor(layout_path)
        self._clean(layout)

        name = layout_path.basename
        display = descriptor.display or self._default_display(name)
        logger.debug(
            "component built",
            layout=layout_path.value,
            styles=len(self._styles),
            scripts=len(self._scripts),
        )
        return Component(
            name=name,
            layout_path=layout_path,
            display=display,
            description=descriptor.description or display,
            layout=layout,
            style_files=tuple(self._styles),
            metas=tuple(self._metas),
            links=tuple(self._links),
            scripts=tuple(self._scripts),
            security_role=descriptor.security_role,
        )

    def _default_display(self, name: str) -> str:
        title = name.replace("-", " ").title()
        project_display = self._project.config.display
        return f"{project_display} / {title}" if project_display else title

    # -------------------------------------------------------------------------
    # Widgets

    def _scan(
        self, layout_path: FilePath, depth: int, parameters: LayoutParameters
    ) -> Document:
        document = self._load(layout_path, depth, parameters)

        for insertion in document.find_by_attr(self._compo):
            if not _is_attached(insertion):
                continue
            compo = CompoPath.parse(insertion.get_attr(self._compo) or "")
            widget_path = self._require_layout(compo, layout_path)
            self._merge_descriptor(widget_path)

            widget_parameters = LayoutParameters()
            widget_parameters.reload(insertion.get_attr(self._param))
            insertion.remove_attr(self._param)

            widget = self._scan(widget_path, depth + 1, widget_parameters)
            merge_attrs(insertion, widget.root.attrs)
            insertion.remove_children()
            for child in widget.root.child_nodes:
                insertion.append_child(child)
            insertion.remove_attr(self._compo)
            logger.debug("widget resolved", widget=compo.value, host=layout_path.value)

        return document

    # -------------------------------------------------------------------------
    # Templates

    def _load(
        self, layout_path: FilePath, depth: int, parameters: LayoutParameters
    ) -> Document:
        error = nesting_guard(layout_path, depth)
        if error is not None:
            raise error

        project = self._project
        chars = iter_resolved(
            iter_injected(
                project.read_text(layout_path), project.registry, project.naming
            ),
            layout_path,
            self._handler,
            parameters=parameters,
            evaluator=self._evaluator,
        )
        document = parse_document("".join(chars), layout_path.value)
        self._collect_style(layout_path)

        root = document.root
        is_root = root.has_attr(self._template)
        inline = [f for f in document.find_by_attr(self._template) if f != root]
        # Innermost first: consolidation copies the fragment content.
        for fragment in reversed(inline):
            template = self._consolidate(layout_path, fragment, depth)
            fragment.insert_sibling_before(template.root)
            fragment.remove()

        if is_root:
            return self._consolidate(layout_path, root, depth)
        return document

    def _consolidate(
        self, layout_path: FilePath, fragment: Element, depth: int
    ) -> Document:
        reference = EditablePath.parse(fragment.get_attr(self._template) or "")
        template_path = self._require_layout(reference.compo, layout_path)
        self._merge_descriptor(template_path)

        contents = fragment.find_by_attr(self._content) or [fragment]
        # Template parameters are declared on the first content element.
        parameters = LayoutParameters()
        parameters.reload(contents[0].get_attr(self._param))
        template = self._load(template_path, depth + 1, parameters)
        editables = _Editables(template, self._editable)
        cleanup = False

        for content in contents:
            name = content.get_attr(self._content) or reference.editable
            editable = editables.get(name)
            if editable is None:
                if template.root.has_children:
                    editable_name = f"{reference.compo}#{name or ''}"
                    msg = (
                        f"Missing editable element |{editable_name}| "
                        f"requested from component |{layout_path}|"
                    )
                    raise MissingEntityError(
                        msg,
                        kind="editable",
                        name=editable_name,
                        source=layout_path.value,
                    )
                editable = template.root

            editable.remove_attr(self._editable)
            for operator in (self._template, self._content, self._param):
                content.remove_attr(operator)

            if editable.parent is not None:
                inserted = editable.insert_sibling_before(content)
                merge_attrs(inserted, editable.attrs)
                cleanup = True
            else:
                for child in content.child_nodes:
                    editable.append_child(child)
                merge_attrs(editable, content.attrs, override=True)

        if cleanup:
            editables.remove_used()
        logger.debug(
            "template consolidated", template=reference.value, content=layout_path.value
        )
        return template

    # -------------------------------------------------------------------------
    # Resources

    def _require_layout(self, compo: CompoPath, requester: FilePath) -> FilePath:
        try:
            return self._project.layout_file(compo)
        except MissingEntityError as e:
            msg = (
                f"Missing component layout |{compo}| "
                f"requested from parent |{requester}|"
            )
            raise MissingEntityError(
                msg, kind="component", name=compo.value, source=requester.value
            ) from e

    def _collect_style(self, layout_path: FilePath) -> None:
        style = layout_path.sibling("css")
        if style not in self._styles and self._project.exists(style):
            self._styles.insert(0, style)

    def _merge_descriptor(self, layout_path: FilePath) -> ComponentDescriptor:
        descriptor_path = layout_path.sibling("xml")
        if not self._project.exists(descriptor_path):
            return ComponentDescriptor()
        text = resolve_text(
            self._project.read_text(descriptor_path),
            descriptor_path,
            self._handler,
            evaluator=self._evaluator,
        )
        descriptor = parse_descriptor(text, descriptor_path.value)
        add_all(self._metas, descriptor.metas)
        add_all(self._links, descriptor.links)
        add_all(self._scripts, descriptor.scripts)
        return descriptor

    def _clean(self, layout: Document) -> None:
        # The script operator only declares a dependency of the page.
        for element in layout.find_by_attr(self._script):
            element.remove_attr(self._script)
        for editable in layout.find_by_attr(self._editable):
            if editable == layout.root:
                editable.remove_attr(self._editable)
            else:
                editable.remove()
