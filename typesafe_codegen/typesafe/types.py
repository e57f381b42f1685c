"""
Type resolution for declared fields.

Walks a field's declared type down its base-type chain, converts the
domain primitives the runtime knows natively, qualifies everything else with
its namespace and classifies the field for template selection.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from ..core.config import GeneratorConfig
from ..core.errors import CyclicTypeError
from ..core.naming import capitalize_type_name, type_identifier
from ..core.schema import TypeDescriptor, TypeIndex
from ..core.templates import FieldKind
from ..logging_config import get_logger

logger = get_logger(__name__)

# "Days and time duration" as escaped by an older identifier encoder
LEGACY_DAY_TIME_DURATION = "Days_32and_32time_32duration"

BUILTIN_TYPE_CONVERSIONS: Dict[str, str] = {
    "Any": "Object",
    "Date": "LocalDate",
    "Time": "LocalTime",
    "DateTime": "LocalDateTime",
    "DayTimeDuration": "Duration",
    LEGACY_DAY_TIME_DURATION: "Duration",
    "YearMonthDuration": "Period",
}


@dataclass(frozen=True)
class FieldClassification:
    """Everything template selection needs to know about a field type."""

    is_collection: bool
    is_composite: bool
    is_basic: bool  # Immediate base exists and is not composite
    is_opaque: bool  # Unwrapped representation is the universal object type
    kind: FieldKind
    type_representation: Optional[str]


class TypeResolver:
    """
    Resolves TypeDescriptors against a read-only TypeIndex.

    The resolver keeps no per-field state and can be shared between threads.
    """

    def __init__(self, index: TypeIndex, config: Optional[GeneratorConfig] = None):
        """
        Initialize the resolver.

        Args:
            index: Registered type names and their namespaces
            config: Generator configuration (defaults apply when omitted)
        """
        self.index = index
        self.config = config or GeneratorConfig()
        self.conversions = self._build_conversion_table()

    def _build_conversion_table(self) -> Dict[str, str]:
        conversions = dict(self.config.type_conversions or {})
        conversions.update(BUILTIN_TYPE_CONVERSIONS)
        conversions[self.config.any_type_name] = self.config.object_type
        return conversions

    @property
    def object_type(self) -> str:
        return self.config.object_type

    def name_with_any_check(self, type_: TypeDescriptor) -> str:
        """Identifier for a type, mapping the unconstrained sentinel to the object type."""
        if type_.name == self.config.any_type_name:
            return self.config.object_type
        return type_identifier(type_.name)

    def resolve_base_representation(self, type_: TypeDescriptor) -> TypeDescriptor:
        """
        Follow base types until a registered type or a root is reached.

        Raises:
            CyclicTypeError: If a type repeats or the chain is too long
        """
        max_depth = self.config.max_base_type_depth
        visited = set()
        chain: List[str] = []
        current = type_

        while True:
            if id(current) in visited:
                chain.append(current.name)
                raise CyclicTypeError(chain)
            if len(chain) >= max_depth:
                chain.append(current.name)
                raise CyclicTypeError(chain, max_depth)
            visited.add(id(current))
            chain.append(current.name)

            if self.index.is_registered_type_name(self.name_with_any_check(current)):
                break
            if current.base_type is None:
                break
            current = current.base_type

        logger.debug(f"Resolved {type_.name} via {' -> '.join(chain)}")
        return current

    def convert_type(self, type_name: str) -> str:
        """Apply the conversion table, or qualify names it does not cover."""
        converted = self.conversions.get(type_name)
        if converted is not None:
            return converted
        return self.with_package(type_name)

    def with_package(self, type_name: str) -> str:
        """Capitalise and prefix the namespace the index reports, if any."""
        capitalized = capitalize_type_name(type_name)
        namespace = self.index.namespace_of(type_name)
        if namespace:
            return f"{namespace}.{capitalized}"
        return capitalized

    def base_type_name(self, type_: TypeDescriptor) -> str:
        """Identifier of the resolved base type."""
        return self.name_with_any_check(self.resolve_base_representation(type_))

    def field_type_with_package(self, type_: TypeDescriptor) -> str:
        """Scalar resolution: full chain, then conversion and qualification."""
        return self.convert_type(self.base_type_name(type_))

    def field_type_unwrapped(self, type_: TypeDescriptor) -> str:
        """Element type for collections, scalar resolution otherwise."""
        # Element and scalar resolution share the walk; the collection
        # wrapper itself never goes through conversion.
        return self.field_type_with_package(type_)

    def object_type_of(self, type_: TypeDescriptor) -> str:
        """Declared type of the generated field."""
        if type_.is_collection:
            element = self.field_type_unwrapped(type_)
            return f"{self.config.collection_type}[{element}]"
        return self.field_type_with_package(type_)

    def is_basic(self, type_: TypeDescriptor) -> bool:
        """Immediate base type (one hop) exists and is not composite."""
        return type_.base_type is not None and not type_.base_type.is_composite

    def classify(self, type_: TypeDescriptor) -> FieldClassification:
        """
        Classify a field type and pick its template category.

        Order matters, the first match wins:
        collection of basic, collection of non-object, composite,
        non-object scalar, otherwise nothing is emitted.
        """
        unwrapped = self.field_type_unwrapped(type_)
        is_basic = self.is_basic(type_)
        is_opaque = unwrapped == self.config.object_type

        if type_.is_collection and is_basic:
            kind, representation = FieldKind.COLLECTION_OF_BASIC, unwrapped
        elif type_.is_collection and not is_opaque:
            kind, representation = FieldKind.COLLECTION_OF_COMPOSITE, unwrapped
        elif type_.is_composite:
            kind, representation = FieldKind.POJO, self.field_type_with_package(type_)
        elif not is_opaque:
            kind, representation = FieldKind.SIMPLE, self.field_type_with_package(type_)
        else:
            kind, representation = FieldKind.EMPTY, None

        return FieldClassification(
            is_collection=type_.is_collection,
            is_composite=type_.is_composite,
            is_basic=is_basic,
            is_opaque=is_opaque,
            kind=kind,
            type_representation=representation,
        )
