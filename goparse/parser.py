"""
Tree-sitter parser initialization and file parsing utilities.

This module provides functions to initialize the Go parser and parse source files.
"""

import logging
from typing import Optional, Tuple
import tree_sitter_go as tsgo
from tree_sitter import Language, Node, Parser, Tree

from goparse.config import PACKAGE_CLAUSE_NODE, PACKAGE_IDENTIFIER_NODE

# Configure logging
logger = logging.getLogger(__name__)

# Module-level language constant
GO_LANGUAGE = Language(tsgo.language())


def create_parser() -> Parser:
    """Create and configure a tree-sitter parser for Go.
    
    Returns:
        A Parser instance configured with the Go language.
    
    Example:
        >>> parser = create_parser()
        >>> tree = parser.parse(b"package main")
    """
    parser = Parser(GO_LANGUAGE)
    logger.debug("Created tree-sitter Go parser")
    return parser


def parse_bytes(source: bytes) -> Tree:
    """Parse raw bytes of Go source code.
    
    Args:
        source: UTF-8 encoded bytes of Go source code.
        
    Returns:
        A Tree object representing the parsed AST.
        
    Raises:
        TypeError: If source is not bytes.
        
    Example:
        >>> tree = parse_bytes(b"package main")
        >>> tree.root_node.type
        'source_file'
    """
    if not isinstance(source, bytes):
        raise TypeError(f"Source must be bytes, got {type(source).__name__}")
    
    parser = create_parser()
    tree = parser.parse(source)
    
    if tree.root_node.has_error:
        logger.warning("Parsed tree contains syntax errors")
    
    logger.debug(f"Parsed {len(source)} bytes of Go code")
    return tree


def parse_source_file(file_path: str) -> Tuple[Tree, bytes]:
    """Parse a Go source file from disk.
    
    Args:
        file_path: Path to the .go file.
        
    Returns:
        A tuple of (Tree, source_bytes).
        
    Raises:
        FileNotFoundError: If the file does not exist.
        IOError: If the file cannot be read.
    """
    try:
        with open(file_path, "rb") as f:
            source_bytes = f.read()
    except FileNotFoundError:
        logger.error(f"File not found: {file_path}")
        raise
    except IOError as e:
        logger.error(f"Error reading file {file_path}: {e}")
        raise
    
    tree = parse_bytes(source_bytes)
    
    if tree.root_node.has_error:
        logger.warning(f"File {file_path} contains syntax errors")
    
    logger.debug(f"Parsed file: {file_path}")
    return tree, source_bytes


def count_error_nodes(tree: Tree) -> int:
    """Count ERROR and MISSING nodes in a tree."""
    count = 0
    stack = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            count += 1
        if node.has_error:
            stack.extend(node.children)
    return count


def find_package_name(root: Node) -> Optional[str]:
    """Read the package name from the package clause of a unit's root node."""
    for child in root.named_children:
        if child.type != PACKAGE_CLAUSE_NODE:
            continue
        for ident in child.named_children:
            if ident.type == PACKAGE_IDENTIFIER_NODE and ident.text:
                return ident.text.decode("utf-8")
    return None


def dump_tree(tree: Tree, file_path: str) -> None:
    """Log the S-expression of a parsed unit for local debugging."""
    logger.debug("Syntax tree of %s:\n%s", file_path, str(tree.root_node))
