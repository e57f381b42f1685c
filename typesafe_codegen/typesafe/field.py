"""
Per-field synthesis.

DeclaredField ties one FieldDeclaration to the type resolver and the
template set: it answers the field-definition questions a class generator
asks (name, declared type, accessor metadata, modifiers) and produces the
from-map fragment for the field.
"""

import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..core.config import GeneratorConfig
from ..core.schema import FieldDeclaration, TypeDescriptor, TypeIndex
from ..core.templates import FieldKind, GeneratedFragment, TemplateSet
from ..logging_config import get_logger
from .templates import default_template_set
from .types import FieldClassification, TypeResolver

logger = get_logger(__name__)


@dataclass
class AnnotationDefinition:
    """An annotation to attach to a generated accessor."""

    name: str
    value_map: Dict[str, str] = field(default_factory=dict)

    def to_source(self) -> str:
        """Render as ``@name(key=value, ...)``."""
        if not self.value_map:
            return f"@{self.name}"
        args = ", ".join(f"{key}={value}" for key, value in self.value_map.items())
        return f"@{self.name}({args})"


class DeclaredField:
    """A generated field backed by one entry of a domain type."""

    def __init__(
        self,
        index: TypeIndex,
        declaration: FieldDeclaration,
        config: Optional[GeneratorConfig] = None,
        resolver: Optional[TypeResolver] = None,
    ):
        self.declaration = declaration
        self.config = config or (resolver.config if resolver else GeneratorConfig())
        self.resolver = resolver or TypeResolver(index, self.config)

    @classmethod
    def from_entry(
        cls,
        index: TypeIndex,
        key: str,
        type_: TypeDescriptor,
        config: Optional[GeneratorConfig] = None,
    ) -> "DeclaredField":
        """Build from a (declared key, type) pair of a composite type."""
        return cls(index, FieldDeclaration(declared_key=key, type=type_), config)

    @property
    def field_name(self) -> str:
        return self.declaration.generated_name

    @property
    def original_map_key(self) -> str:
        return self.declaration.declared_key

    @property
    def field_type(self) -> TypeDescriptor:
        return self.declaration.type

    @property
    def object_type(self) -> str:
        """Declared type of the generated field."""
        return self.resolver.object_type_of(self.field_type)

    # Fixed generation policy
    is_key_field = False
    create_accessors = True
    is_static = False
    is_final = False
    init_expr = None

    def getter_annotations(self) -> List[AnnotationDefinition]:
        """Single annotation mapping the accessor back to the declared key."""
        annotation = AnnotationDefinition(self.config.property_annotation)
        annotation.value_map["value"] = json.dumps(self.original_map_key, ensure_ascii=False)
        return [annotation]

    def classify(self) -> FieldClassification:
        return self.resolver.classify(self.field_type)

    def create_from_map(self, templates: Optional[TemplateSet] = None) -> GeneratedFragment:
        """
        Instantiate the template matching this field's classification.

        Returns:
            The substituted fragment, or an empty one for opaque scalars

        Raises:
            CyclicTypeError: If the field's base-type chain does not terminate
            UnparsableTypeRepresentationError: If the resolved type does not parse
            TemplateSubstitutionError: If the chosen template is defective
        """
        templates = templates or default_template_set()
        classification = self.classify()

        if classification.kind is FieldKind.EMPTY:
            logger.debug(f"No code emitted for opaque field {self.field_name}")
            return GeneratedFragment.empty()

        logger.debug(
            f"Field {self.field_name} ({self.original_map_key!r}) uses "
            f"{classification.kind.value} template"
        )
        return templates.for_kind(classification.kind).instantiate(
            self.field_name,
            self.original_map_key,
            classification.type_representation,
        )

    def __repr__(self) -> str:
        return f"DeclaredField({self.original_map_key!r} -> {self.field_name})"
