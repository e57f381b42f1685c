"""
Exception hierarchy for field synthesis.

Field-level errors describe a problem with one field's data and are
collected by the batch generator. Systemic errors describe a defect in the
template set and abort the whole run.
"""

from typing import Optional, Sequence


class CodegenError(Exception):
    """Base exception for code generation errors."""

    pass


class FieldGenerationError(CodegenError):
    """A single field could not be generated; sibling fields are unaffected."""

    pass


class CyclicTypeError(FieldGenerationError):
    """The base-type chain of a type does not terminate."""

    def __init__(self, chain: Sequence[str], max_depth: Optional[int] = None):
        self.chain = list(chain)
        self.max_depth = max_depth
        path = " -> ".join(self.chain)
        if max_depth is not None:
            message = f"Base-type chain exceeds {max_depth} hops: {path}"
        else:
            message = f"Cyclic base-type chain: {path}"
        super().__init__(message)


class UnparsableTypeRepresentationError(FieldGenerationError):
    """A resolved type representation is not a valid type expression."""

    def __init__(self, representation: str, reason: str = ""):
        self.representation = representation
        message = f"Cannot parse type representation {representation!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class TemplateSubstitutionError(CodegenError):
    """A template lacks a placeholder kind its category requires."""

    pass
