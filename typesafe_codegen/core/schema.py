"""
Core type model representation for code generation.

The domain type system is consumed read-only through three shapes:
TypeDescriptor nodes linked by their base type, FieldDeclaration entries
naming the properties to generate, and a TypeIndex answering which names are
registered domain types and in which namespace they live.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol

from .errors import CodegenError
from .naming import field_identifier
from ..logging_config import get_logger

logger = get_logger(__name__)


class TypeModelError(CodegenError):
    """Exception raised for malformed type model documents."""

    pass


@dataclass(eq=False)
class TypeDescriptor:
    """
    A node in the domain type graph.

    Descriptors compare by identity: two descriptors are the same type only
    when they are the same object, which is what cycle detection relies on.
    """

    name: str
    is_collection: bool = False
    is_composite: bool = False
    base_type: Optional["TypeDescriptor"] = None

    def __repr__(self) -> str:
        base = self.base_type.name if self.base_type is not None else None
        return (
            f"TypeDescriptor(name={self.name!r}, is_collection={self.is_collection}, "
            f"is_composite={self.is_composite}, base_type={base!r})"
        )


@dataclass(frozen=True)
class FieldDeclaration:
    """One declared property of a domain type to be generated."""

    declared_key: str  # Original domain-model key, case as authored
    type: TypeDescriptor
    generated_name: str = field(default="")

    def __post_init__(self):
        """Derive generated_name from declared_key if not provided."""
        if not self.generated_name:
            object.__setattr__(self, "generated_name", field_identifier(self.declared_key))


class TypeIndex(Protocol):
    """Read-only registry of domain type names and their namespaces."""

    def is_registered_type_name(self, name: str) -> bool: ...

    def namespace_of(self, name: str) -> Optional[str]: ...


class MappingTypeIndex:
    """TypeIndex backed by a mapping of type name to namespace."""

    def __init__(self, namespaces: Optional[Mapping[str, Optional[str]]] = None):
        """
        Initialize the index.

        Args:
            namespaces: Registered type name -> namespace (None or "" for
                types registered without a namespace)
        """
        self._namespaces: Dict[str, Optional[str]] = {
            name: (namespace or None) for name, namespace in (namespaces or {}).items()
        }

    @classmethod
    def from_namespaces(
        cls, registrations: Mapping[str, Iterable[str]]
    ) -> "MappingTypeIndex":
        """Build an index from namespace -> registered type names."""
        namespaces: Dict[str, Optional[str]] = {}
        for namespace, names in registrations.items():
            for name in names:
                namespaces[name] = namespace
        return cls(namespaces)

    def is_registered_type_name(self, name: str) -> bool:
        return name in self._namespaces

    def namespace_of(self, name: str) -> Optional[str]:
        return self._namespaces.get(name)

    def __len__(self) -> int:
        return len(self._namespaces)

    def __contains__(self, name: object) -> bool:
        return name in self._namespaces


@dataclass
class TypeModel:
    """A loaded type model: the index, named types and declared fields."""

    index: MappingTypeIndex
    types: Dict[str, TypeDescriptor] = field(default_factory=dict)
    fields: List[FieldDeclaration] = field(default_factory=list)


def load_type_model(data: Mapping[str, Any]) -> TypeModel:
    """
    Build a TypeModel from a JSON-compatible document.

    Document shape::

        {
          "namespaces": {"com.example.model": ["Person"]},
          "types": {"Person": {"composite": true},
                    "People": {"collection": true, "base": "Person"}},
          "fields": {"Full Name": "string", "Friends": "People"}
        }

    Type references that name no entry of "types" become root primitives.
    A field may also declare an anonymous type inline as an object.

    Raises:
        TypeModelError: If the document is malformed
    """
    if not isinstance(data, Mapping):
        raise TypeModelError("Type model must be a JSON object")

    namespaces = _expect_mapping(data, "namespaces")
    type_specs = _expect_mapping(data, "types")
    field_specs = _expect_mapping(data, "fields")

    registrations: Dict[str, List[str]] = {}
    for namespace, names in namespaces.items():
        if isinstance(names, str) or not isinstance(names, list):
            raise TypeModelError(f"Namespace {namespace!r} must list type names")
        registrations[namespace] = names
    index = MappingTypeIndex.from_namespaces(registrations)

    types: Dict[str, TypeDescriptor] = {}
    for name, spec in type_specs.items():
        types[name] = _new_descriptor(name, spec)

    # Link bases after every named type exists so that forward and cyclic
    # references land on the same descriptor objects.
    for name, spec in type_specs.items():
        types[name].base_type = _lookup_base(spec, types)

    fields: List[FieldDeclaration] = []
    for key, ref in field_specs.items():
        if isinstance(ref, str):
            field_type = _reference(ref, types)
        elif isinstance(ref, Mapping):
            field_type = _new_descriptor(ref.get("name", key), ref)
            field_type.base_type = _lookup_base(ref, types)
        else:
            raise TypeModelError(f"Field {key!r} must reference a type name or object")
        fields.append(FieldDeclaration(declared_key=key, type=field_type))

    logger.debug(
        f"Loaded type model: {len(index)} registered names, "
        f"{len(types)} types, {len(fields)} fields"
    )
    return TypeModel(index=index, types=types, fields=fields)


def _expect_mapping(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, Mapping):
        raise TypeModelError(f"'{key}' must be a JSON object")
    return value


def _new_descriptor(name: str, spec: Any) -> TypeDescriptor:
    if not isinstance(spec, Mapping):
        raise TypeModelError(f"Type {name!r} must be a JSON object")
    return TypeDescriptor(
        name=name,
        is_collection=bool(spec.get("collection", False)),
        is_composite=bool(spec.get("composite", False)),
    )


def _lookup_base(spec: Mapping[str, Any], types: Dict[str, TypeDescriptor]):
    base = spec.get("base")
    if base is None:
        return None
    if not isinstance(base, str):
        raise TypeModelError(f"Base type reference must be a name, got {base!r}")
    return _reference(base, types)


def _reference(name: str, types: Dict[str, TypeDescriptor]) -> TypeDescriptor:
    """Return the named type, creating a root primitive for unknown names."""
    if name not in types:
        types[name] = TypeDescriptor(name=name)
    return types[name]
