"""
Data models for the declaration-level Go source model.
"""

from dataclasses import dataclass, field, asdict
import enum
from typing import Optional, List, Dict, Any


class TypeKind(str, enum.Enum):
    """How a type expression was resolved."""

    NAMED = "named"
    QUALIFIED = "qualified"
    MAP = "map"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class TypeDescriptor:
    """Semantic description of a field or parameter type expression.

    Attributes:
        kind: Resolution outcome; UNRESOLVED for shapes that are not modeled
            (channels, function types, generics, nested maps, ...).
        type_name: Bare name, ``alias.Name`` or ``map[K]V``.
        package_name: Import path of a qualified type, empty otherwise.
        is_pointer: The expression is (or contains) a pointer to the named type.
        is_slice: The expression is a slice or array of the named type.
    """

    kind: TypeKind = TypeKind.UNRESOLVED
    type_name: str = ""
    package_name: str = ""
    is_pointer: bool = False
    is_slice: bool = False

    @property
    def is_resolved(self) -> bool:
        return self.kind is not TypeKind.UNRESOLVED


UNRESOLVED_TYPE = TypeDescriptor()


@dataclass
class Field:
    """A struct member, parameter, result or receiver.

    Attributes:
        name: Identifier; empty for embedded members and unnamed results.
        type_name: See ``TypeDescriptor.type_name``.
        package_name: Import path for qualified types.
        is_slice: Slice (or array) of ``type_name``.
        is_pointer: Pointer to ``type_name``.
        tag: Raw struct tag literal including its delimiters.
        doc_lines: Comment lines preceding the member.
        comment_lines: Comments trailing the member on the same line.
        type_kind: Resolution outcome of the type expression.
    """

    name: str = ""
    type_name: str = ""
    package_name: str = ""
    is_slice: bool = False
    is_pointer: bool = False
    tag: str = ""
    doc_lines: List[str] = field(default_factory=list)
    comment_lines: List[str] = field(default_factory=list)
    type_kind: TypeKind = TypeKind.UNRESOLVED

    @property
    def is_resolved(self) -> bool:
        return self.type_kind is not TypeKind.UNRESOLVED

    @classmethod
    def from_descriptor(cls, descriptor: TypeDescriptor, **kwargs: Any) -> "Field":
        """Build a Field carrying the resolved type of ``descriptor``."""
        return cls(
            type_name=descriptor.type_name,
            package_name=descriptor.package_name,
            is_slice=descriptor.is_slice,
            is_pointer=descriptor.is_pointer,
            type_kind=descriptor.kind,
            **kwargs,
        )

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result["type_kind"] = self.type_kind.value
        return result


@dataclass
class Operation:
    """A free function, a method bound to a receiver, or an interface method.

    Attributes:
        name: Function or method name.
        package_name: Declaring package.
        filename: Compilation unit the operation was found in.
        doc_lines: Raw comment lines preceding the declaration.
        related_struct: Receiver field; None for free functions and
            interface methods.
        input_args: Parameters in declaration order.
        output_args: Results in declaration order.
    """

    name: str
    package_name: str = ""
    filename: str = ""
    doc_lines: List[str] = field(default_factory=list)
    related_struct: Optional[Field] = None
    input_args: List[Field] = field(default_factory=list)
    output_args: List[Field] = field(default_factory=list)

    @property
    def related_struct_name(self) -> str:
        """Receiver type name used to link the operation to its struct."""
        if self.related_struct is None:
            return ""
        return self.related_struct.type_name

    @property
    def is_method(self) -> bool:
        return self.related_struct is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "package_name": self.package_name,
            "filename": self.filename,
            "doc_lines": list(self.doc_lines),
            "related_struct": (
                self.related_struct.to_dict() if self.related_struct else None
            ),
            "input_args": [arg.to_dict() for arg in self.input_args],
            "output_args": [arg.to_dict() for arg in self.output_args],
        }


@dataclass
class Struct:
    """A struct type declaration.

    ``operations`` is empty after extraction and filled by the linking pass.
    """

    name: str
    package_name: str = ""
    filename: str = ""
    doc_lines: List[str] = field(default_factory=list)
    fields: List[Field] = field(default_factory=list)
    operations: List[Operation] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "package_name": self.package_name,
            "filename": self.filename,
            "doc_lines": list(self.doc_lines),
            "fields": [f.to_dict() for f in self.fields],
            "operations": [op.to_dict() for op in self.operations],
        }


@dataclass
class Interface:
    """An interface type declaration and its named methods."""

    name: str
    package_name: str = ""
    filename: str = ""
    doc_lines: List[str] = field(default_factory=list)
    methods: List[Operation] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "package_name": self.package_name,
            "filename": self.filename,
            "doc_lines": list(self.doc_lines),
            "methods": [m.to_dict() for m in self.methods],
        }


@dataclass
class Typedef:
    """A type defined on top of a plain named type (``type Color string``)."""

    name: str
    type: str = ""
    package_name: str = ""
    filename: str = ""
    doc_lines: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class EnumLiteral:
    """One constant of an enumeration; ``value`` may be empty."""

    name: str
    value: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Enum:
    """A typed constant group.

    ``doc_lines`` is empty after extraction and copied from the typedef of
    the same name by the linking pass.
    """

    name: str
    package_name: str = ""
    filename: str = ""
    doc_lines: List[str] = field(default_factory=list)
    enum_literals: List[EnumLiteral] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ParsedSources:
    """Root result of a parse invocation.

    Attributes:
        structs: Struct declarations, in visitation order.
        operations: Functions and methods, in visitation order.
        interfaces: Interface declarations, in visitation order.
        typedefs: Simple named-type declarations, in visitation order.
        enums: Typed constant groups, in visitation order.
    """

    structs: List[Struct] = field(default_factory=list)
    operations: List[Operation] = field(default_factory=list)
    interfaces: List[Interface] = field(default_factory=list)
    typedefs: List[Typedef] = field(default_factory=list)
    enums: List[Enum] = field(default_factory=list)

    def summary(self) -> Dict[str, int]:
        """Per-kind entity counts."""
        return {
            "structs": len(self.structs),
            "operations": len(self.operations),
            "interfaces": len(self.interfaces),
            "typedefs": len(self.typedefs),
            "enums": len(self.enums),
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert the model to a dictionary suitable for JSON serialization."""
        return {
            "structs": [s.to_dict() for s in self.structs],
            "operations": [op.to_dict() for op in self.operations],
            "interfaces": [i.to_dict() for i in self.interfaces],
            "typedefs": [t.to_dict() for t in self.typedefs],
            "enums": [e.to_dict() for e in self.enums],
        }
