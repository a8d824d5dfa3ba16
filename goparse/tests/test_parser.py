"""
Unit tests for parser.py

Tests tree-sitter parser initialization, byte parsing, and file parsing.
"""

import unittest
from pathlib import Path
from goparse.parser import (
    count_error_nodes,
    create_parser,
    dump_tree,
    find_package_name,
    parse_bytes,
    parse_source_file,
)


class TestParserInitialization(unittest.TestCase):
    """Test parser creation and initialization."""
    
    def test_create_parser(self):
        """Test that create_parser returns a parser with a language set."""
        parser = create_parser()
        self.assertIsNotNone(parser)
        self.assertIsNotNone(parser.language)


class TestParseBytes(unittest.TestCase):
    """Test parsing raw bytes of Go code."""
    
    def test_parse_package_clause(self):
        tree = parse_bytes(b"package main\n")
        
        self.assertEqual(tree.root_node.type, "source_file")
        self.assertFalse(tree.root_node.has_error)
    
    def test_parse_function(self):
        """Test parsing a simple function declaration."""
        source = b"package main\n\nfunc main() {\n\tprintln(1)\n}\n"
        tree = parse_bytes(source)
        
        self.assertFalse(tree.root_node.has_error)
        types = [child.type for child in tree.root_node.named_children]
        self.assertIn("function_declaration", types)
    
    def test_parse_invalid_type(self):
        """Test that parse_bytes raises TypeError for non-bytes input."""
        with self.assertRaises(TypeError):
            parse_bytes("package main")
    
    def test_parse_with_errors(self):
        """Test parsing code with syntax errors."""
        tree = parse_bytes(b"package main\n\nfunc broken( {\n")
        
        self.assertTrue(tree.root_node.has_error)
        self.assertGreater(count_error_nodes(tree), 0)

    def test_count_error_nodes_clean_tree(self):
        tree = parse_bytes(b"package main\n\ntype A int\n")
        self.assertEqual(count_error_nodes(tree), 0)


class TestPackageName(unittest.TestCase):
    """Test reading the package clause."""

    def test_package_name(self):
        tree = parse_bytes(b"// doc\npackage shapes\n\ntype A int\n")
        self.assertEqual(find_package_name(tree.root_node), "shapes")

    def test_missing_package_clause(self):
        tree = parse_bytes(b"type A int\n")
        self.assertIsNone(find_package_name(tree.root_node))


class TestParseSourceFile(unittest.TestCase):
    """Test parsing Go files from disk."""
    
    def setUp(self):
        self.fixtures_dir = Path(__file__).parent / "fixtures"
    
    def test_parse_fixture(self):
        tree, source_bytes = parse_source_file(str(self.fixtures_dir / "shapes.go"))
        
        self.assertEqual(tree.root_node.type, "source_file")
        self.assertGreater(len(source_bytes), 0)
        self.assertFalse(tree.root_node.has_error)
    
    def test_parse_nonexistent_file(self):
        """Test that parsing a missing file raises FileNotFoundError."""
        with self.assertRaises(FileNotFoundError):
            parse_source_file("/nonexistent/file.go")

    def test_dump_tree_logs_sexp(self):
        tree = parse_bytes(b"package main\n")
        with self.assertLogs("goparse.parser", level="DEBUG") as captured:
            dump_tree(tree, "main.go")
        self.assertTrue(any("source_file" in line for line in captured.output))


if __name__ == "__main__":
    unittest.main()
