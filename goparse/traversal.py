"""
AST traversal and declaration dispatch.

Each node of a compilation unit is classified once into a
``DeclarationKind`` and handed to the single extractor registered for that
kind. The ``UnitVisitor`` accumulates the results into a ``ParsedSources``.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, Optional, Tuple
from tree_sitter import Node, Tree

from goparse.config import (
    CALLABLE_DECLARATIONS,
    CONST_DECLARATION,
    IMPORT_DECLARATION,
    INTERFACE_TYPE,
    STRUCT_TYPE,
    TYPE_DECLARATION,
    TYPE_IDENTIFIER,
)
from goparse.declarations import (
    extract_enum,
    extract_imports,
    extract_interface,
    extract_operation,
    extract_struct,
    extract_typedef,
    single_type_spec,
)
from goparse.models import ParsedSources
from goparse.resolver import ImportMap

logger = logging.getLogger(__name__)


class DeclarationKind(enum.Enum):
    """Declaration shapes the visitor reacts to."""

    MEMBER_LIST_TYPE = "struct"
    INTERFACE_TYPE = "interface"
    ALIAS_TYPE = "typedef"
    CONSTANT_GROUP = "enum"
    CALLABLE = "operation"
    IMPORT = "import"


Extractor = Callable[[Node, ImportMap], Optional[object]]

# kind -> (extractor, ParsedSources attribute receiving its entities)
DISPATCH_TABLE: Dict[DeclarationKind, Tuple[Extractor, str]] = {
    DeclarationKind.MEMBER_LIST_TYPE: (extract_struct, "structs"),
    DeclarationKind.INTERFACE_TYPE: (extract_interface, "interfaces"),
    DeclarationKind.ALIAS_TYPE: (extract_typedef, "typedefs"),
    DeclarationKind.CONSTANT_GROUP: (extract_enum, "enums"),
    DeclarationKind.CALLABLE: (extract_operation, "operations"),
}

_TYPE_SHAPES: Dict[str, DeclarationKind] = {
    STRUCT_TYPE: DeclarationKind.MEMBER_LIST_TYPE,
    INTERFACE_TYPE: DeclarationKind.INTERFACE_TYPE,
    TYPE_IDENTIFIER: DeclarationKind.ALIAS_TYPE,
}


def classify_node(node: Node) -> Optional[DeclarationKind]:
    """Decide which declaration shape a node has, if any.

    Args:
        node: Any node of a compilation unit.

    Returns:
        The node's kind, or None for nodes no extractor applies to.
    """
    if node.type == IMPORT_DECLARATION:
        return DeclarationKind.IMPORT
    if node.type in CALLABLE_DECLARATIONS:
        return DeclarationKind.CALLABLE
    if node.type == CONST_DECLARATION:
        return DeclarationKind.CONSTANT_GROUP
    if node.type == TYPE_DECLARATION:
        spec = single_type_spec(node)
        if spec is None:
            return None
        type_node = spec.child_by_field_name("type")
        if type_node is None:
            return None
        return _TYPE_SHAPES.get(type_node.type)
    return None


def iter_preorder(root: Node) -> Iterator[Node]:
    """Yield every named node of a tree once, parents before children."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.named_children))


@dataclass
class SourceUnit:
    """A parsed compilation unit ready for visitation."""

    path: str
    tree: Tree
    package_name: str


class UnitVisitor:
    """Visits compilation units and accumulates extracted entities.

    The import alias map is reset for every unit; the accumulator is shared
    across all units visited by one instance.
    """

    def __init__(self, sources: Optional[ParsedSources] = None):
        self.sources = sources if sources is not None else ParsedSources()
        self.package_name = ""
        self.current_filename = ""
        self.imports: ImportMap = {}

    def visit_unit(self, unit: SourceUnit) -> None:
        """Extract every declaration of one unit into the accumulator."""
        self.package_name = unit.package_name
        self.current_filename = unit.path
        self.imports = {}

        before = sum(self.sources.summary().values())
        for node in iter_preorder(unit.tree.root_node):
            self.visit_node(node)
        found = sum(self.sources.summary().values()) - before
        logger.info(f"Extracted {found} declarations from {unit.path}")

    def visit_node(self, node: Node) -> None:
        kind = classify_node(node)
        if kind is None:
            return

        if kind is DeclarationKind.IMPORT:
            self.imports.update(extract_imports(node))
            return

        extractor, collection = DISPATCH_TABLE[kind]
        entity = extractor(node, self.imports)
        if entity is None:
            return

        entity.package_name = self.package_name
        entity.filename = self.current_filename
        getattr(self.sources, collection).append(entity)
