"""
High-level orchestrator for Go declaration extraction.

This module provides the two entry points, ``parse_file`` and
``parse_directory``, which parse compilation units, visit them and run the
linking passes over the accumulated model.
"""

import logging
import os
import re
from typing import Dict, List, Optional, Pattern

from goparse.config import (
    BUILD_EXCLUSION_MARKER,
    COMMENT_NODE,
    DEFAULT_FILENAME_PATTERN,
    DEFAULT_OPTIONS,
    GO_EXTENSION,
    ParseOptions,
)
from goparse.exceptions import InvalidFilenamePatternError, UnparseableUnitError
from goparse.linker import link_parsed_sources
from goparse.models import ParsedSources
from goparse.parser import count_error_nodes, dump_tree, find_package_name, parse_source_file
from goparse.resolver import comment_text
from goparse.traversal import SourceUnit, UnitVisitor, iter_preorder
from shared.structured_logging import phase_scope, unit_scope

logger = logging.getLogger(__name__)


def load_unit(file_path: str, options: ParseOptions = DEFAULT_OPTIONS) -> SourceUnit:
    """Parse one file into a ``SourceUnit``.

    Args:
        file_path: Path to the Go source file.
        options: Parse options; ``debug_dump`` logs the syntax tree.

    Returns:
        The parsed unit with its package name.

    Raises:
        UnparseableUnitError: If the file cannot be read, is not valid UTF-8,
            contains syntax errors, or has no package clause.
    """
    with unit_scope(file_path):
        try:
            tree, source_bytes = parse_source_file(file_path)
        except OSError as e:
            logger.error(f"Error parsing src {file_path}: {e}")
            raise UnparseableUnitError(file_path, str(e)) from e

        try:
            source_bytes.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.error(f"Error parsing src {file_path}: {e}")
            raise UnparseableUnitError(file_path, "illegal UTF-8 encoding") from e

        if options.debug_dump:
            dump_tree(tree, file_path)

        if tree.root_node.has_error:
            error_count = count_error_nodes(tree)
            logger.error(f"Error parsing src {file_path}: {error_count} syntax error nodes")
            raise UnparseableUnitError(
                file_path,
                f"syntax errors ({error_count} error nodes)",
                error_count=error_count,
            )

        package_name = find_package_name(tree.root_node)
        if not package_name:
            logger.error(f"Error parsing src {file_path}: missing package clause")
            raise UnparseableUnitError(file_path, "missing package clause")

    return SourceUnit(path=file_path, tree=tree, package_name=package_name)


def has_build_exclusion_marker(unit: SourceUnit) -> bool:
    """Check whether any comment of the unit is exactly the exclusion marker."""
    for node in iter_preorder(unit.tree.root_node):
        if node.type != COMMENT_NODE:
            continue
        if comment_text(node) == BUILD_EXCLUSION_MARKER:
            return True
    return False


def compile_filename_pattern(filename_pattern: str) -> Pattern[str]:
    """Compile a filename filter, reporting invalid expressions."""
    try:
        return re.compile(filename_pattern)
    except re.error as e:
        raise InvalidFilenamePatternError(filename_pattern, str(e)) from e


def discover_go_files(directory: str, pattern: Pattern[str]) -> List[str]:
    """List the Go files of a directory whose base name matches ``pattern``.

    Sub-directories are not scanned; a Go package is a single directory.

    Args:
        directory: Directory to list.
        pattern: Compiled filter, applied with ``search`` to base names.

    Returns:
        Sorted paths of matching files.

    Raises:
        UnparseableUnitError: If the directory cannot be listed.
    """
    try:
        names = os.listdir(directory)
    except OSError as e:
        logger.error(f"Error parsing dir {directory}: {e}")
        raise UnparseableUnitError(directory, str(e)) from e

    go_files = []
    for name in names:
        path = os.path.join(directory, name)
        if not name.endswith(GO_EXTENSION) or not os.path.isfile(path):
            continue
        if pattern.search(name):
            go_files.append(path)

    logger.info(f"Found {len(go_files)} matching Go files in {directory}")
    return sorted(go_files)


def group_units_by_package(
    directory: str,
    pattern: Pattern[str],
    options: ParseOptions = DEFAULT_OPTIONS,
) -> Dict[str, Dict[str, SourceUnit]]:
    """Parse matching files of a directory and group them by package name.

    Returns:
        Package name -> (file path -> unit).

    Raises:
        UnparseableUnitError: If the directory or any matching file fails.
    """
    packages: Dict[str, Dict[str, SourceUnit]] = {}
    for file_path in discover_go_files(directory, pattern):
        unit = load_unit(file_path, options)
        packages.setdefault(unit.package_name, {})[file_path] = unit
    return packages


def sorted_file_entries(files: Dict[str, SourceUnit]) -> List[SourceUnit]:
    """Order the units of one package by file path."""
    return [files[key] for key in sorted(files)]


def _visit(visitor: UnitVisitor, unit: SourceUnit) -> None:
    with unit_scope(unit.path):
        visitor.visit_unit(unit)


def _link(sources: ParsedSources) -> ParsedSources:
    with phase_scope("link"):
        link_parsed_sources(sources)
    logger.info(f"Parsed sources: {sources.summary()}")
    return sources


def parse_file(file_path: str, options: Optional[ParseOptions] = None) -> ParsedSources:
    """Extract the declaration model of a single Go source file.

    Args:
        file_path: Path to the Go file.
        options: Parse options; defaults to ``ParseOptions()``.

    Returns:
        The linked model of the file.

    Raises:
        UnparseableUnitError: If the file cannot be read or parsed.

    Example:
        >>> sources = parse_file("model/color.go")
        >>> [enum.name for enum in sources.enums]
        ['Color']
    """
    options = options or DEFAULT_OPTIONS

    with phase_scope("parse"):
        unit = load_unit(file_path, options)

    visitor = UnitVisitor()
    with phase_scope("visit"):
        _visit(visitor, unit)

    return _link(visitor.sources)


def parse_directory(
    directory: str,
    filename_pattern: str = DEFAULT_FILENAME_PATTERN,
    options: Optional[ParseOptions] = None,
) -> ParsedSources:
    """Extract the declaration model of every matching Go file in a directory.

    Packages are visited in name order and files within a package in path
    order, so the result does not depend on directory listing order. Files
    carrying the build exclusion marker are skipped.

    Args:
        directory: Directory holding the Go files.
        filename_pattern: Regular expression matched against base names.
        options: Parse options; defaults to ``ParseOptions()``.

    Returns:
        The linked model of all visited files.

    Raises:
        InvalidFilenamePatternError: If the pattern does not compile.
        UnparseableUnitError: If the directory or any matching file fails.

    Example:
        >>> sources = parse_directory("model", r"\\.go$")
        >>> sources.summary()["structs"]
        3
    """
    options = options or DEFAULT_OPTIONS
    pattern = compile_filename_pattern(filename_pattern)

    with phase_scope("parse"):
        packages = group_units_by_package(directory, pattern, options)

    visitor = UnitVisitor()
    skipped = 0
    with phase_scope("visit"):
        for package_name in sorted(packages):
            for unit in sorted_file_entries(packages[package_name]):
                if has_build_exclusion_marker(unit):
                    logger.info(f"Skipping {unit.path}: {BUILD_EXCLUSION_MARKER!r}")
                    skipped += 1
                    continue
                _visit(visitor, unit)

    logger.info(
        f"Visited {sum(len(files) for files in packages.values()) - skipped} files "
        f"in {len(packages)} packages from {directory} ({skipped} skipped)"
    )
    return _link(visitor.sources)
