"""
Go declaration model extraction.

Tree-sitter-based Go source parser that extracts structs, interfaces,
typedefs, enums and operations into a linked ``ParsedSources`` model.
"""

from goparse.config import ParseOptions
from goparse.exceptions import (
    GoParseError,
    InvalidFilenamePatternError,
    UnparseableUnitError,
)
from goparse.models import (
    Enum,
    EnumLiteral,
    Field,
    Interface,
    Operation,
    ParsedSources,
    Struct,
    TypeDescriptor,
    TypeKind,
    Typedef,
)
from goparse.parser import create_parser, parse_bytes, parse_source_file, count_error_nodes
from goparse.resolver import resolve_type, extract_field_list
from goparse.traversal import DeclarationKind, UnitVisitor, classify_node
from goparse.linker import link_parsed_sources
from goparse.extractor import (
    parse_file,
    parse_directory,
    discover_go_files,
    sorted_file_entries,
)

__all__ = [
    # Data models
    "Enum",
    "EnumLiteral",
    "Field",
    "Interface",
    "Operation",
    "ParsedSources",
    "Struct",
    "TypeDescriptor",
    "TypeKind",
    "Typedef",
    # Options and errors
    "ParseOptions",
    "GoParseError",
    "InvalidFilenamePatternError",
    "UnparseableUnitError",
    # Low-level parsing
    "create_parser",
    "parse_bytes",
    "parse_source_file",
    "count_error_nodes",
    # Mid-level extraction
    "resolve_type",
    "extract_field_list",
    "DeclarationKind",
    "UnitVisitor",
    "classify_node",
    "link_parsed_sources",
    # High-level orchestration
    "parse_file",
    "parse_directory",
    "discover_go_files",
    "sorted_file_entries",
]
