"""
Type expression resolution and field/parameter extraction.

This module converts tree-sitter type expression nodes into
``TypeDescriptor`` values and member/parameter lists into ``Field``
sequences, including the comments attached to each member.
"""

import logging
from dataclasses import replace
from typing import Dict, List, Optional
from tree_sitter import Node

from goparse.config import (
    COMMENT_NODE,
    FIELD_DECLARATION,
    MAP_TYPE,
    PARAMETER_DECLARATIONS,
    PARAMETER_LIST,
    POINTER_TYPE,
    QUALIFIED_TYPE,
    SEQUENCE_TYPES,
    STATEMENT_LIST,
    TYPE_IDENTIFIER,
)
from goparse.models import Field, TypeDescriptor, TypeKind, UNRESOLVED_TYPE

logger = logging.getLogger(__name__)

ImportMap = Dict[str, str]


def node_text(node: Optional[Node]) -> str:
    """Return the UTF-8 source text of a node, or an empty string."""
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8")


def comment_text(comment: Node) -> str:
    """Return the text of a comment node with carriage returns removed."""
    return node_text(comment).replace("\r", "")


def _content_end_row(node: Node) -> int:
    # A newline terminator token ends on the following row.
    if not node.is_named and node.text is not None and not node.text.strip():
        return node.start_point.row
    return node.end_point.row


def starts_own_line(comment: Node) -> bool:
    """Check that no code precedes the comment on its first line."""
    prev = comment.prev_sibling
    if prev is None:
        return True
    return _content_end_row(prev) < comment.start_point.row


def _previous_named(node: Node) -> Optional[Node]:
    # Comments opening a block are children of the block, not of its
    # statement list.
    sibling = node.prev_named_sibling
    parent = node.parent
    if sibling is None and parent is not None and parent.type == STATEMENT_LIST:
        sibling = parent.prev_named_sibling
    return sibling


def preceding_comment_lines(node: Node) -> List[str]:
    """Collect the comment group immediately preceding a node.

    Walks backward through named siblings while they are comments that
    start their own line and are not separated by a blank line. Lines are
    returned raw, delimiters included and carriage returns removed, in
    source order.

    Args:
        node: The declaration, member or method node.

    Returns:
        Comment texts, possibly empty.
    """
    comments = []
    sibling = _previous_named(node)
    expected_row = node.start_point.row

    while sibling is not None and sibling.type == COMMENT_NODE:
        if expected_row - sibling.end_point.row > 1:
            break  # blank line
        if not starts_own_line(sibling):
            break  # trailing comment of the previous member
        comments.append(comment_text(sibling))
        expected_row = sibling.start_point.row
        sibling = sibling.prev_named_sibling

    comments.reverse()
    return comments


def trailing_comment_lines(node: Node) -> List[str]:
    """Collect comments that follow a node on the line where it ends."""
    comments = []
    row = node.end_point.row
    sibling = node.next_sibling

    while (
        sibling is not None
        and sibling.type == COMMENT_NODE
        and sibling.start_point.row == row
    ):
        comments.append(comment_text(sibling))
        row = sibling.end_point.row
        sibling = sibling.next_sibling

    return comments


def _first_named_child(node: Node) -> Optional[Node]:
    for child in node.named_children:
        if child.type != COMMENT_NODE:
            return child
    return None


def _resolve_name(node: Node, imports: ImportMap) -> TypeDescriptor:
    """Resolve a bare or package-qualified type name."""
    if node.type == TYPE_IDENTIFIER:
        return TypeDescriptor(kind=TypeKind.NAMED, type_name=node_text(node))

    if node.type == QUALIFIED_TYPE:
        alias = node_text(node.child_by_field_name("package"))
        name = node_text(node.child_by_field_name("name"))
        if not alias or not name:
            return UNRESOLVED_TYPE
        return TypeDescriptor(
            kind=TypeKind.QUALIFIED,
            type_name=f"{alias}.{name}",
            package_name=imports.get(alias, ""),
        )

    return UNRESOLVED_TYPE


def _resolve_element(node: Optional[Node], imports: ImportMap) -> TypeDescriptor:
    """Resolve a slice element: a name, or a pointer to a name."""
    if node is None:
        return UNRESOLVED_TYPE

    if node.type == POINTER_TYPE:
        pointee = _first_named_child(node)
        if pointee is None:
            return UNRESOLVED_TYPE
        descriptor = _resolve_name(pointee, imports)
        if not descriptor.is_resolved:
            return UNRESOLVED_TYPE
        return replace(descriptor, is_pointer=True)

    return _resolve_name(node, imports)


def resolve_type(node: Optional[Node], imports: ImportMap) -> TypeDescriptor:
    """Convert a type expression node into a type descriptor.

    Recognized shapes are bare names, qualified names, pointers, slices
    (and arrays) of names or pointers to names, and maps whose key and
    value are both bare names. Pointer and slice compose, so ``*[]pkg.T``
    and ``[]*pkg.T`` both set ``is_pointer`` and ``is_slice``.

    Args:
        node: Type expression node, or None.
        imports: Import alias to import path map of the current unit.

    Returns:
        The descriptor; ``UNRESOLVED_TYPE`` for shapes that are not modeled.
        An unknown qualifier resolves with an empty ``package_name``.
    """
    if node is None:
        return UNRESOLVED_TYPE

    if node.type in (TYPE_IDENTIFIER, QUALIFIED_TYPE):
        return _resolve_name(node, imports)

    if node.type == POINTER_TYPE:
        descriptor = resolve_type(_first_named_child(node), imports)
        if not descriptor.is_resolved:
            return UNRESOLVED_TYPE
        return replace(descriptor, is_pointer=True)

    if node.type in SEQUENCE_TYPES:
        descriptor = _resolve_element(node.child_by_field_name("element"), imports)
        if not descriptor.is_resolved:
            return UNRESOLVED_TYPE
        return replace(descriptor, is_slice=True)

    if node.type == MAP_TYPE:
        key = node.child_by_field_name("key")
        value = node.child_by_field_name("value")
        if (
            key is not None
            and value is not None
            and key.type == TYPE_IDENTIFIER
            and value.type == TYPE_IDENTIFIER
        ):
            return TypeDescriptor(
                kind=TypeKind.MAP,
                type_name=f"map[{node_text(key)}]{node_text(value)}",
            )
        return UNRESOLVED_TYPE

    logger.debug(
        f"Unresolved type shape '{node.type}' at line {node.start_point.row + 1}"
    )
    return UNRESOLVED_TYPE


def _has_embedded_pointer(entry: Node) -> bool:
    """Check for the '*' of an embedded member such as ``*Base``."""
    for child in entry.children:
        if child.type == "*":
            return True
    return False


def extract_fields(entry: Node, imports: ImportMap) -> List[Field]:
    """Expand one member or parameter specification into fields.

    ``x, y int`` yields two fields sharing the resolved type and tag. An
    entry without identifiers yields a single field with an empty name.

    Args:
        entry: A field_declaration or (variadic_)parameter_declaration node.
        imports: Import alias map of the current unit.

    Returns:
        The fields in declaration order.
    """
    descriptor = resolve_type(entry.child_by_field_name("type"), imports)

    if entry.type == FIELD_DECLARATION:
        if descriptor.is_resolved and _has_embedded_pointer(entry):
            descriptor = replace(descriptor, is_pointer=True)
        doc_lines = preceding_comment_lines(entry)
        comment_lines = trailing_comment_lines(entry)
    else:
        if entry.type == "variadic_parameter_declaration":
            descriptor = UNRESOLVED_TYPE
        doc_lines = []
        comment_lines = []

    tag = node_text(entry.child_by_field_name("tag"))
    names = [node_text(n) for n in entry.children_by_field_name("name")]
    if not names:
        names = [""]

    return [
        Field.from_descriptor(
            descriptor,
            name=name,
            tag=tag,
            doc_lines=list(doc_lines),
            comment_lines=list(comment_lines),
        )
        for name in names
    ]


def extract_field_list(list_node: Optional[Node], imports: ImportMap) -> List[Field]:
    """Extract every field of a member or parameter list, in order.

    Args:
        list_node: field_declaration_list or parameter_list node, or None.
        imports: Import alias map of the current unit.

    Returns:
        The fields; empty when the list is absent.
    """
    fields: List[Field] = []
    if list_node is None:
        return fields

    for entry in list_node.named_children:
        if entry.type == FIELD_DECLARATION or entry.type in PARAMETER_DECLARATIONS:
            fields.extend(extract_fields(entry, imports))
    return fields


def extract_result_list(result: Optional[Node], imports: ImportMap) -> List[Field]:
    """Extract the results of a signature.

    A parenthesized result list is handled like parameters; a bare result
    type yields one unnamed field.
    """
    if result is None:
        return []
    if result.type == PARAMETER_LIST:
        return extract_field_list(result, imports)
    return [Field.from_descriptor(resolve_type(result, imports))]
