"""
Post-visitation linking passes.

Both passes run once, after every unit has been visited.
"""

import logging
from typing import Dict

from goparse.models import ParsedSources, Struct

logger = logging.getLogger(__name__)


def embed_operations_in_structs(sources: ParsedSources) -> int:
    """Attach every method to the struct named by its receiver type.

    Methods whose receiver type is not an extracted struct are left
    unattached. When two structs share a name, the last one visited wins.

    Returns:
        Number of operations attached.
    """
    struct_index: Dict[str, Struct] = {}
    for struct in sources.structs:
        struct_index[struct.name] = struct

    linked = 0
    for operation in sources.operations:
        if operation.related_struct is None:
            continue
        struct = struct_index.get(operation.related_struct_name)
        if struct is None:
            logger.debug(
                f"No struct {operation.related_struct_name!r} for method {operation.name}"
            )
            continue
        struct.operations.append(operation)
        linked += 1
    return linked


def embed_typedef_doc_lines_in_enums(sources: ParsedSources) -> int:
    """Copy the doc lines of the first same-named typedef onto each enum.

    Returns:
        Number of enums that received doc lines.
    """
    updated = 0
    for enum in sources.enums:
        for typedef in sources.typedefs:
            if typedef.name == enum.name:
                enum.doc_lines = list(typedef.doc_lines)
                updated += 1
                break
    return updated


def link_parsed_sources(sources: ParsedSources) -> None:
    """Run both linking passes over a fully visited model."""
    linked = embed_operations_in_structs(sources)
    documented = embed_typedef_doc_lines_in_enums(sources)
    logger.info(
        f"Linked {linked} operations into structs, "
        f"documented {documented} enums from typedefs"
    )
