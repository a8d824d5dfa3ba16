"""
Unit tests for traversal.py

Tests node classification, the dispatch table, and unit visitation.
"""

import unittest
from goparse.models import ParsedSources
from goparse.parser import parse_bytes
from goparse.traversal import (
    DISPATCH_TABLE,
    DeclarationKind,
    SourceUnit,
    UnitVisitor,
    classify_node,
    iter_preorder,
)


def _unit(path: str, source: str, package_name: str = "p") -> SourceUnit:
    return SourceUnit(path=path, tree=parse_bytes(source.encode("utf-8")), package_name=package_name)


def _top_level(source: str):
    return parse_bytes(source.encode("utf-8")).root_node.named_children


class TestClassifyNode(unittest.TestCase):
    """Test that each declaration shape maps to exactly one kind."""

    def test_kinds(self):
        nodes = _top_level(
            "package p\n\n"
            'import "fmt"\n\n'
            "type S struct{}\n"
            "type I interface{}\n"
            "type T string\n"
            "type L []string\n"
            "const C T = \"c\"\n"
            "var V = 1\n"
            "func F() {}\n"
            "func (s S) M() {}\n"
        )
        kinds = [classify_node(n) for n in nodes]

        self.assertEqual(
            kinds,
            [
                None,  # package clause
                DeclarationKind.IMPORT,
                DeclarationKind.MEMBER_LIST_TYPE,
                DeclarationKind.INTERFACE_TYPE,
                DeclarationKind.ALIAS_TYPE,
                None,
                DeclarationKind.CONSTANT_GROUP,
                None,
                DeclarationKind.CALLABLE,
                DeclarationKind.CALLABLE,
            ],
        )

    def test_grouped_type_declaration(self):
        nodes = _top_level("package p\n\ntype (\n\tA int\n\tB int\n)\n")
        self.assertIsNone(classify_node(nodes[1]))

    def test_dispatch_table_covers_entity_kinds(self):
        expected = set(DeclarationKind) - {DeclarationKind.IMPORT}
        self.assertEqual(set(DISPATCH_TABLE), expected)
        for _, collection in DISPATCH_TABLE.values():
            self.assertTrue(hasattr(ParsedSources(), collection))


class TestIterPreorder(unittest.TestCase):

    def test_parents_before_children(self):
        tree = parse_bytes(b"package p\n\nfunc F() {\n\ttype local struct{}\n}\n")
        order = [n.type for n in iter_preorder(tree.root_node)]

        self.assertEqual(order[0], "source_file")
        self.assertLess(order.index("function_declaration"), order.index("type_declaration"))

    def test_each_node_once(self):
        tree = parse_bytes(b"package p\n\ntype A struct {\n\tX int\n}\n")
        nodes = list(iter_preorder(tree.root_node))
        self.assertEqual(len(nodes), len({(n.start_byte, n.end_byte, n.type) for n in nodes}))


class TestUnitVisitor(unittest.TestCase):
    """Test accumulation across units."""

    def test_stamps_package_and_filename(self):
        visitor = UnitVisitor()
        visitor.visit_unit(_unit("a.go", "package p\n\ntype A struct{}\nfunc F() {}\n", "p"))

        sources = visitor.sources
        self.assertEqual(sources.structs[0].package_name, "p")
        self.assertEqual(sources.structs[0].filename, "a.go")
        self.assertEqual(sources.operations[0].package_name, "p")
        self.assertEqual(sources.operations[0].filename, "a.go")

    def test_preserves_first_seen_order(self):
        visitor = UnitVisitor()
        visitor.visit_unit(_unit("a.go", "package p\n\ntype B struct{}\ntype A struct{}\n"))
        visitor.visit_unit(_unit("b.go", "package p\n\ntype C struct{}\n"))

        self.assertEqual([s.name for s in visitor.sources.structs], ["B", "A", "C"])
        self.assertEqual([s.filename for s in visitor.sources.structs], ["a.go", "a.go", "b.go"])

    def test_imports_are_scoped_to_unit(self):
        visitor = UnitVisitor()
        visitor.visit_unit(_unit(
            "a.go",
            'package p\n\nimport "example.com/model"\n\ntype A struct {\n\tU model.User\n}\n',
        ))
        visitor.visit_unit(_unit("b.go", "package p\n\ntype B struct {\n\tU model.User\n}\n"))

        a, b = visitor.sources.structs
        self.assertEqual(a.fields[0].package_name, "example.com/model")
        self.assertEqual(b.fields[0].type_name, "model.User")
        self.assertEqual(b.fields[0].package_name, "")

    def test_nested_declarations_are_visited(self):
        visitor = UnitVisitor()
        visitor.visit_unit(_unit("a.go", "package p\n\nfunc F() {\n\ttype local struct{}\n}\n"))

        self.assertEqual([s.name for s in visitor.sources.structs], ["local"])
        self.assertEqual([o.name for o in visitor.sources.operations], ["F"])

    def test_does_not_link(self):
        visitor = UnitVisitor()
        visitor.visit_unit(_unit("a.go", "package p\n\ntype A struct{}\nfunc (a A) M() {}\n"))
        self.assertEqual(visitor.sources.structs[0].operations, [])

    def test_shared_accumulator(self):
        sources = ParsedSources()
        UnitVisitor(sources).visit_unit(_unit("a.go", "package p\n\ntype T int\n"))
        self.assertEqual(sources.typedefs[0].name, "T")


if __name__ == "__main__":
    unittest.main()
