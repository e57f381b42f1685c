"""
Batch field generation.

Generates every declared field of a domain type independently. A field
whose type cannot be resolved or rendered is recorded as an error and the
remaining fields still generate; a defective template set aborts the run.
"""

from collections import Counter
from typing import Iterable, Optional

from ..core.config import GeneratorConfig
from ..core.errors import FieldGenerationError
from ..core.generator import GenerationResult
from ..core.schema import FieldDeclaration, TypeIndex
from ..core.templates import TemplateSet
from ..logging_config import get_logger
from .field import DeclaredField
from .templates import default_template_set
from .types import TypeResolver

logger = get_logger(__name__)


class TypesafeGenerator:
    """Generates from-map fragments for declared fields."""

    def __init__(
        self,
        index: TypeIndex,
        templates: Optional[TemplateSet] = None,
        config: Optional[GeneratorConfig] = None,
    ):
        self.config = config or GeneratorConfig()
        self.templates = templates or default_template_set()
        self.resolver = TypeResolver(index, self.config)

    def declared_field(self, declaration: FieldDeclaration) -> DeclaredField:
        return DeclaredField(
            self.resolver.index, declaration, self.config, resolver=self.resolver
        )

    def generate(self, declarations: Iterable[FieldDeclaration]) -> GenerationResult:
        """
        Generate every field.

        Raises:
            TemplateSubstitutionError: If any template lacks a required placeholder
        """
        self.templates.validate()

        result = GenerationResult()
        kinds: Counter = Counter()

        for declaration in declarations:
            field = self.declared_field(declaration)
            key = declaration.declared_key
            try:
                fragment = field.create_from_map(self.templates)
            except FieldGenerationError as e:
                logger.error(f"Field {key!r} failed: {e}")
                result.add_error(key, e)
                continue

            kinds[fragment.kind.value] += 1
            result.fragments[key] = fragment
            result.annotations[key] = field.getter_annotations()
            if fragment.is_empty:
                result.warnings.append(
                    f"Field {key!r} resolves to {self.config.object_type}; no code emitted"
                )

        result.metadata = {
            "field_count": len(result.fragments) + len(result.errors),
            "generated": sum(1 for f in result.fragments.values() if not f.is_empty),
            "failed": len(result.errors),
            "kinds": dict(kinds),
        }
        metadata = result.metadata
        logger.info(
            f"Generated {metadata['generated']} of {metadata['field_count']} fields "
            f"({metadata['failed']} failed)"
        )
        return result


def generate_fields(
    index: TypeIndex,
    declarations: Iterable[FieldDeclaration],
    templates: Optional[TemplateSet] = None,
    config: Optional[GeneratorConfig] = None,
) -> GenerationResult:
    """
    Convenience function to generate a batch of fields.

    Args:
        index: Registered type names and namespaces
        declarations: Fields to generate
        templates: Template set (the built-in from-map templates by default)
        config: Generator configuration

    Returns:
        GenerationResult with fragments, annotations, warnings and errors
    """
    return TypesafeGenerator(index, templates, config).generate(declarations)
