"""
Configuration constants for Go declaration extraction.

Defines the tree-sitter node type strings used for dispatch, the build
exclusion marker, and the options object passed to the entry points.
"""

from dataclasses import dataclass
from typing import Set

# Package clause
PACKAGE_CLAUSE_NODE: str = "package_clause"
PACKAGE_IDENTIFIER_NODE: str = "package_identifier"

# Declaration nodes the visitor dispatches on
IMPORT_DECLARATION: str = "import_declaration"
TYPE_DECLARATION: str = "type_declaration"
CONST_DECLARATION: str = "const_declaration"
FUNCTION_DECLARATION: str = "function_declaration"
METHOD_DECLARATION: str = "method_declaration"

CALLABLE_DECLARATIONS: Set[str] = {
    FUNCTION_DECLARATION,
    METHOD_DECLARATION,
}

# Specification nodes inside declarations
IMPORT_SPEC: str = "import_spec"
TYPE_SPEC_NODES: Set[str] = {
    "type_spec",   # type A B
    "type_alias",  # type A = B
}
CONST_SPEC: str = "const_spec"

# Type expression nodes
TYPE_IDENTIFIER: str = "type_identifier"
QUALIFIED_TYPE: str = "qualified_type"
POINTER_TYPE: str = "pointer_type"
SLICE_TYPE: str = "slice_type"
ARRAY_TYPE: str = "array_type"
MAP_TYPE: str = "map_type"
STRUCT_TYPE: str = "struct_type"
INTERFACE_TYPE: str = "interface_type"

SEQUENCE_TYPES: Set[str] = {
    SLICE_TYPE,
    ARRAY_TYPE,  # [N]T is reported as a slice
}

# Member and parameter lists
FIELD_DECLARATION_LIST: str = "field_declaration_list"
FIELD_DECLARATION: str = "field_declaration"
PARAMETER_LIST: str = "parameter_list"
PARAMETER_DECLARATIONS: Set[str] = {
    "parameter_declaration",
    "variadic_parameter_declaration",
}

# Interface method entries (grammar versions differ in naming)
METHOD_ELEMENTS: Set[str] = {
    "method_elem",
    "method_spec",
}

COMMENT_NODE: str = "comment"
STATEMENT_LIST: str = "statement_list"

# Literal expressions accepted as enum literal values
BASIC_LITERAL_TYPES: Set[str] = {
    "int_literal",
    "float_literal",
    "imaginary_literal",
    "rune_literal",
    "interpreted_string_literal",
    "raw_string_literal",
}

# Import names that never act as a qualifier
IGNORED_IMPORT_NAMES: Set[str] = {
    "_",
    ".",
}

GO_EXTENSION: str = ".go"

# Files carrying this exact comment are skipped by directory scanning
BUILD_EXCLUSION_MARKER: str = "// +build !appengine"

DEFAULT_FILENAME_PATTERN: str = r"\.go$"


@dataclass(frozen=True)
class ParseOptions:
    """Options accepted by ``parse_file`` and ``parse_directory``.

    Attributes:
        debug_dump: Log the S-expression of every parsed unit at DEBUG level.
    """

    debug_dump: bool = False


DEFAULT_OPTIONS = ParseOptions()
