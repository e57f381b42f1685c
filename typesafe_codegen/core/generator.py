"""
Generation results.

A run generates many fields independently. Field-level failures are
recorded here next to the fragments that did generate; systemic failures
never reach a result because they abort the run.
"""

import ast
from typing import Any, Dict, List, Optional

from .errors import FieldGenerationError
from .templates import GeneratedFragment


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        fragments: Optional[Dict[str, GeneratedFragment]] = None,
        annotations: Optional[Dict[str, List[Any]]] = None,
        warnings: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize generation result.

        Args:
            fragments: Declared key -> generated fragment
            annotations: Declared key -> accessor annotations
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.fragments = fragments if fragments is not None else {}
        self.annotations = annotations if annotations is not None else {}
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.errors: Dict[str, FieldGenerationError] = {}

    @property
    def success(self) -> bool:
        return not self.errors

    def add_error(self, declared_key: str, error: FieldGenerationError) -> None:
        self.errors[declared_key] = error

    @property
    def code(self) -> str:
        """All non-empty fragments rendered in declaration order."""
        body: List[ast.stmt] = []
        for fragment in self.fragments.values():
            body.extend(fragment.body)
        if not body:
            return ""
        return ast.unparse(ast.Module(body=body, type_ignores=[]))

    def error_messages(self) -> List[str]:
        return [f"{key}: {error}" for key, error in self.errors.items()]
