"""
Declaration extractors.

Each extractor receives a declaration node and the import alias map of the
current unit and returns a model entity, or None when the node does not
have the shape the extractor recognizes. Package name and filename are
filled in by the visitor.
"""

import logging
from typing import Dict, List, Optional
from tree_sitter import Node

from goparse.config import (
    BASIC_LITERAL_TYPES,
    CALLABLE_DECLARATIONS,
    CONST_DECLARATION,
    CONST_SPEC,
    FIELD_DECLARATION_LIST,
    IGNORED_IMPORT_NAMES,
    IMPORT_DECLARATION,
    IMPORT_SPEC,
    INTERFACE_TYPE,
    METHOD_ELEMENTS,
    STRUCT_TYPE,
    TYPE_DECLARATION,
    TYPE_IDENTIFIER,
    TYPE_SPEC_NODES,
)
from goparse.models import Enum, EnumLiteral, Interface, Operation, Struct, Typedef
from goparse.resolver import (
    ImportMap,
    extract_field_list,
    extract_result_list,
    node_text,
    preceding_comment_lines,
)

logger = logging.getLogger(__name__)


def single_type_spec(node: Node) -> Optional[Node]:
    """Return the only spec of a type declaration.

    Grouped declarations with more than one spec return None.
    """
    if node.type != TYPE_DECLARATION:
        return None
    specs = [child for child in node.named_children if child.type in TYPE_SPEC_NODES]
    if len(specs) != 1:
        return None
    return specs[0]


def _spec_parts(node: Node, expected_type: str) -> Optional[tuple]:
    spec = single_type_spec(node)
    if spec is None:
        return None
    type_node = spec.child_by_field_name("type")
    name = node_text(spec.child_by_field_name("name"))
    if type_node is None or type_node.type != expected_type or not name:
        return None
    return name, type_node


def extract_struct(node: Node, imports: ImportMap) -> Optional[Struct]:
    """Extract a struct from a single-spec type declaration.

    Args:
        node: A type_declaration node.
        imports: Import alias map of the current unit.

    Returns:
        Struct with fields and doc lines, or None if not a struct declaration.
    """
    parts = _spec_parts(node, STRUCT_TYPE)
    if parts is None:
        return None
    name, struct_type = parts

    member_list = None
    for child in struct_type.named_children:
        if child.type == FIELD_DECLARATION_LIST:
            member_list = child
            break

    struct = Struct(
        name=name,
        doc_lines=preceding_comment_lines(node),
        fields=extract_field_list(member_list, imports),
    )
    logger.debug(f"Extracted struct {name} with {len(struct.fields)} fields")
    return struct


def _extract_interface_methods(interface_type: Node, imports: ImportMap) -> List[Operation]:
    methods = []
    for elem in interface_type.named_children:
        if elem.type not in METHOD_ELEMENTS:
            continue  # embedded interfaces and type constraints
        name = node_text(elem.child_by_field_name("name"))
        if not name:
            continue
        methods.append(
            Operation(
                name=name,
                doc_lines=preceding_comment_lines(elem),
                input_args=extract_field_list(elem.child_by_field_name("parameters"), imports),
                output_args=extract_result_list(elem.child_by_field_name("result"), imports),
            )
        )
    return methods


def extract_interface(node: Node, imports: ImportMap) -> Optional[Interface]:
    """Extract an interface and its named methods from a type declaration.

    Each method carries its own doc comment, distinct from the doc comment
    of the interface.
    """
    parts = _spec_parts(node, INTERFACE_TYPE)
    if parts is None:
        return None
    name, interface_type = parts

    interface = Interface(
        name=name,
        doc_lines=preceding_comment_lines(node),
        methods=_extract_interface_methods(interface_type, imports),
    )
    logger.debug(f"Extracted interface {name} with {len(interface.methods)} methods")
    return interface


def extract_typedef(node: Node, imports: ImportMap) -> Optional[Typedef]:
    """Extract ``type Name Other`` where Other is a bare type name."""
    parts = _spec_parts(node, TYPE_IDENTIFIER)
    if parts is None:
        return None
    name, type_node = parts
    return Typedef(
        name=name,
        type=node_text(type_node),
        doc_lines=preceding_comment_lines(node),
    )


def _enum_type_name(specs: List[Node]) -> Optional[str]:
    # The first spec that declares a type decides.
    for spec in specs:
        type_node = spec.child_by_field_name("type")
        if type_node is None:
            continue
        if type_node.type != TYPE_IDENTIFIER:
            return None
        return node_text(type_node) or None
    return None


def _first_literal_value(spec: Node) -> str:
    values = spec.child_by_field_name("value")
    if values is None:
        return ""
    for value in values.named_children:
        if value.type in BASIC_LITERAL_TYPES:
            return node_text(value).strip('"')
    return ""


def extract_enum(node: Node, imports: ImportMap) -> Optional[Enum]:
    """Extract an enumeration from a typed constant group.

    Every spec of the group becomes a literal, in order, whether or not it
    repeats the type. The value is the first basic literal assigned by the
    spec with double quotes trimmed; specs relying on an implicit value
    yield an empty value. Doc lines are left empty for the linking pass.

    Args:
        node: A const_declaration node.
        imports: Unused; present for a uniform extractor signature.

    Returns:
        Enum, or None if no spec declares a bare named type.
    """
    if node.type != CONST_DECLARATION:
        return None

    specs = [child for child in node.named_children if child.type == CONST_SPEC]
    type_name = _enum_type_name(specs)
    if type_name is None:
        return None

    literals = []
    for spec in specs:
        names = spec.children_by_field_name("name")
        if not names:
            continue
        literals.append(
            EnumLiteral(name=node_text(names[0]), value=_first_literal_value(spec))
        )

    logger.debug(f"Extracted enum {type_name} with {len(literals)} literals")
    return Enum(name=type_name, enum_literals=literals)


def extract_operation(node: Node, imports: ImportMap) -> Optional[Operation]:
    """Extract a free function or a method.

    The receiver of a method becomes ``related_struct``; only its type name
    is used for linking.

    Args:
        node: A function_declaration or method_declaration node.
        imports: Import alias map of the current unit.

    Returns:
        Operation, or None if the node is not a callable declaration.
    """
    if node.type not in CALLABLE_DECLARATIONS:
        return None

    name = node_text(node.child_by_field_name("name"))
    if not name:
        return None

    related_struct = None
    receiver = node.child_by_field_name("receiver")
    if receiver is not None:
        receivers = extract_field_list(receiver, imports)
        if receivers:
            related_struct = receivers[0]

    operation = Operation(
        name=name,
        doc_lines=preceding_comment_lines(node),
        related_struct=related_struct,
        input_args=extract_field_list(node.child_by_field_name("parameters"), imports),
        output_args=extract_result_list(node.child_by_field_name("result"), imports),
    )
    logger.debug(
        f"Extracted operation {name}"
        + (f" on {operation.related_struct_name}" if related_struct else "")
    )
    return operation


def _import_specs(node: Node) -> List[Node]:
    specs = []
    for child in node.named_children:
        if child.type == IMPORT_SPEC:
            specs.append(child)
        else:
            specs.extend(c for c in child.named_children if c.type == IMPORT_SPEC)
    return specs


def extract_imports(node: Node) -> Dict[str, str]:
    """Map import aliases to import paths for one import declaration.

    An explicit alias wins; otherwise the last path segment is used. Blank
    and dot imports are ignored.
    """
    imports: Dict[str, str] = {}
    if node.type != IMPORT_DECLARATION:
        return imports

    for spec in _import_specs(node):
        path = node_text(spec.child_by_field_name("path")).strip('"`')
        if not path:
            continue
        name_node = spec.child_by_field_name("name")
        if name_node is not None:
            alias = node_text(name_node)
            if alias in IGNORED_IMPORT_NAMES:
                continue
        else:
            alias = path.rsplit("/", 1)[-1]
        imports[alias] = path
    return imports
