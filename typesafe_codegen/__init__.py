"""
Typesafe code generation from domain type models.

Resolves each declared field of a business-rules type model to a target
type and materialises the matching from-map code fragment.
"""

from .core import (
    CyclicTypeError,
    FieldDeclaration,
    FieldKind,
    GeneratedFragment,
    GenerationResult,
    GeneratorConfig,
    MappingTypeIndex,
    TemplateSet,
    TemplateSubstitutionError,
    TypeDescriptor,
    UnparsableTypeRepresentationError,
    load_config,
    load_type_model,
)
from .typesafe import DeclaredField, TypeResolver, default_template_set, generate_fields

__version__ = "0.1.0"


def generate_from_model(data, config=None):
    """
    Generate every field of a type model document.

    Args:
        data: Type model document (see core.schema.load_type_model)
        config: GeneratorConfig, dict of overrides, or None for defaults

    Returns:
        GenerationResult with fragments and collected field errors
    """
    if not isinstance(config, GeneratorConfig):
        config = load_config(custom_config=config)
    model = load_type_model(data)
    return generate_fields(model.index, model.fields, config=config)


__all__ = [
    "TypeDescriptor",
    "FieldDeclaration",
    "MappingTypeIndex",
    "GeneratorConfig",
    "TypeResolver",
    "DeclaredField",
    "TemplateSet",
    "FieldKind",
    "GeneratedFragment",
    "GenerationResult",
    "CyclicTypeError",
    "UnparsableTypeRepresentationError",
    "TemplateSubstitutionError",
    "default_template_set",
    "generate_fields",
    "generate_from_model",
    "load_config",
    "load_type_model",
]
