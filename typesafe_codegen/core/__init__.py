"""
Core code generation components.

Provides the type model, naming, configuration, error and template
machinery used by the typesafe field synthesizer.
"""

from .config import ConfigError, ConfigManager, GeneratorConfig, load_config
from .errors import (
    CodegenError,
    CyclicTypeError,
    FieldGenerationError,
    TemplateSubstitutionError,
    UnparsableTypeRepresentationError,
)
from .generator import GenerationResult
from .naming import NameSanitizer, NamingCase, field_identifier, type_identifier
from .schema import (
    FieldDeclaration,
    MappingTypeIndex,
    TypeDescriptor,
    TypeIndex,
    TypeModel,
    TypeModelError,
    load_type_model,
)
from .templates import (
    FieldKind,
    GeneratedFragment,
    KeyLiteralPlaceholder,
    NamePlaceholder,
    TemplateFragment,
    TemplateSet,
    TypePlaceholder,
    parse_type_expression,
)

__all__ = [
    # Type model
    "TypeDescriptor",
    "FieldDeclaration",
    "TypeIndex",
    "MappingTypeIndex",
    "TypeModel",
    "TypeModelError",
    "load_type_model",
    # Naming
    "NameSanitizer",
    "NamingCase",
    "field_identifier",
    "type_identifier",
    # Configuration
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Errors
    "CodegenError",
    "FieldGenerationError",
    "CyclicTypeError",
    "UnparsableTypeRepresentationError",
    "TemplateSubstitutionError",
    # Templates
    "FieldKind",
    "GeneratedFragment",
    "TemplateFragment",
    "TemplateSet",
    "NamePlaceholder",
    "KeyLiteralPlaceholder",
    "TypePlaceholder",
    "parse_type_expression",
    # Results
    "GenerationResult",
]
