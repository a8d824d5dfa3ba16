"""Tests for the post-visitation linking passes."""

import unittest

from goparse.linker import (
    embed_operations_in_structs,
    embed_typedef_doc_lines_in_enums,
    link_parsed_sources,
)
from goparse.models import Enum, Field, Operation, ParsedSources, Struct, Typedef


def _method(name: str, receiver: str) -> Operation:
    return Operation(name=name, related_struct=Field(name="r", type_name=receiver))


class TestEmbedOperations(unittest.TestCase):
    def test_links_by_receiver_type_name(self) -> None:
        sources = ParsedSources(
            structs=[Struct(name="Point"), Struct(name="Line")],
            operations=[
                _method("Dist", "Point"),
                Operation(name="NewPoint"),
                _method("Len", "Line"),
                _method("Shift", "Point"),
                _method("Other", "Missing"),
            ],
        )

        linked = embed_operations_in_structs(sources)

        point, line = sources.structs
        self.assertEqual(linked, 3)
        self.assertEqual([op.name for op in point.operations], ["Dist", "Shift"])
        self.assertEqual([op.name for op in line.operations], ["Len"])

    def test_operations_are_shared_not_copied(self) -> None:
        method = _method("Dist", "Point")
        sources = ParsedSources(structs=[Struct(name="Point")], operations=[method])

        embed_operations_in_structs(sources)

        self.assertIs(sources.structs[0].operations[0], method)
        self.assertEqual(len(sources.operations), 1)

    def test_duplicate_struct_name_last_wins(self) -> None:
        first = Struct(name="Point", package_name="a")
        second = Struct(name="Point", package_name="b")
        sources = ParsedSources(structs=[first, second], operations=[_method("Dist", "Point")])

        embed_operations_in_structs(sources)

        self.assertEqual(first.operations, [])
        self.assertEqual(len(second.operations), 1)


class TestEmbedTypedefDocs(unittest.TestCase):
    def test_copies_first_matching_typedef(self) -> None:
        sources = ParsedSources(
            typedefs=[
                Typedef(name="Other", doc_lines=["// other"]),
                Typedef(name="Color", doc_lines=["// Color doc"]),
                Typedef(name="Color", doc_lines=["// shadowed"]),
            ],
            enums=[Enum(name="Color"), Enum(name="Orphan")],
        )

        updated = embed_typedef_doc_lines_in_enums(sources)

        self.assertEqual(updated, 1)
        self.assertEqual(sources.enums[0].doc_lines, ["// Color doc"])
        self.assertEqual(sources.enums[1].doc_lines, [])

    def test_doc_lines_are_copied_verbatim(self) -> None:
        typedef = Typedef(name="Color", doc_lines=["// a", "// b"])
        sources = ParsedSources(typedefs=[typedef], enums=[Enum(name="Color")])

        embed_typedef_doc_lines_in_enums(sources)

        self.assertEqual(sources.enums[0].doc_lines, typedef.doc_lines)
        self.assertIsNot(sources.enums[0].doc_lines, typedef.doc_lines)


class TestLinkParsedSources(unittest.TestCase):
    def test_runs_both_passes(self) -> None:
        sources = ParsedSources(
            structs=[Struct(name="Point")],
            operations=[_method("Dist", "Point")],
            typedefs=[Typedef(name="Color", doc_lines=["// doc"])],
            enums=[Enum(name="Color")],
        )

        link_parsed_sources(sources)

        self.assertEqual(len(sources.structs[0].operations), 1)
        self.assertEqual(sources.enums[0].doc_lines, ["// doc"])


if __name__ == "__main__":
    unittest.main()
