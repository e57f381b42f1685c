"""
Typesafe field synthesis.

Resolves declared fields of a domain type model and instantiates the
from-map template matching each field.
"""

from .field import AnnotationDefinition, DeclaredField
from .generator import TypesafeGenerator, generate_fields
from .templates import default_template_set
from .types import (
    BUILTIN_TYPE_CONVERSIONS,
    LEGACY_DAY_TIME_DURATION,
    FieldClassification,
    TypeResolver,
)

__all__ = [
    "AnnotationDefinition",
    "DeclaredField",
    "TypesafeGenerator",
    "generate_fields",
    "default_template_set",
    "BUILTIN_TYPE_CONVERSIONS",
    "LEGACY_DAY_TIME_DURATION",
    "FieldClassification",
    "TypeResolver",
]
