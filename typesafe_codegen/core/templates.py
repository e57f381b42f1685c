"""
Syntax-tree templates for code generation.

Templates are authored as Python source containing three markers:

    __property__    the generated field identifier (bare or as obj.__property__)
    "$property$"    a string literal holding the original declared key
    PropertyType    the field's resolved type

The markers are turned into typed placeholder nodes once, when the template
is authored. Instantiation deep-copies the marked tree and substitutes every
placeholder by node type, so a shared template is never modified.
"""

import ast
import copy
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Type

from .errors import TemplateSubstitutionError, UnparsableTypeRepresentationError
from ..logging_config import get_logger

logger = get_logger(__name__)

NAME_MARKER = "__property__"
KEY_MARKER = "$property$"
TYPE_MARKER = "PropertyType"


class FieldKind(Enum):
    """Template categories, plus EMPTY for fields that emit no code."""

    COLLECTION_OF_BASIC = "collection_of_basic"
    COLLECTION_OF_COMPOSITE = "collection_of_composite"
    POJO = "pojo"
    SIMPLE = "simple"
    EMPTY = "empty"


class Placeholder(ast.expr):
    """Base class for placeholder nodes living in a template tree."""

    _fields = ()

    def __reduce__(self):
        return (type(self), (), dict(self.__dict__))


class NamePlaceholder(Placeholder):
    """Stands for the generated field identifier.

    With an owner it is a member access (``owner.<field>``), otherwise a bare
    name. ``ctx`` keeps the load/store context of the authored node.
    """

    _fields = ("owner", "ctx")

    def __init__(self, owner: Optional[ast.expr] = None, ctx: Optional[ast.expr_context] = None):
        self.owner = owner
        self.ctx = ctx if ctx is not None else ast.Load()


class KeyLiteralPlaceholder(Placeholder):
    """Stands for a string literal holding the original declared key."""

    def __init__(self):
        pass


class TypePlaceholder(Placeholder):
    """Stands for the field's resolved type expression."""

    def __init__(self):
        pass


PLACEHOLDER_KINDS = (NamePlaceholder, KeyLiteralPlaceholder, TypePlaceholder)

# Every category needs all three kinds
REQUIRED_PLACEHOLDERS: Dict[FieldKind, FrozenSet[Type[Placeholder]]] = {
    kind: frozenset(PLACEHOLDER_KINDS) for kind in FieldKind if kind is not FieldKind.EMPTY
}

_TYPE_EXPRESSION_NODES = (ast.Name, ast.Attribute, ast.Subscript, ast.Tuple, ast.Load)


def parse_type_expression(representation: str) -> ast.expr:
    """
    Parse a type representation into an expression node.

    Only dotted names, subscripts and tuples are accepted, so
    "com.example.Person" and "Collection[LocalDate]" parse while
    "Full Name" or "a-b" do not.

    Raises:
        UnparsableTypeRepresentationError: If the string is not a type expression
    """
    try:
        tree = ast.parse(representation, mode="eval")
    except (SyntaxError, ValueError) as e:
        reason = getattr(e, "msg", None) or str(e)
        raise UnparsableTypeRepresentationError(representation, reason) from e

    for node in ast.walk(tree.body):
        if not isinstance(node, _TYPE_EXPRESSION_NODES):
            raise UnparsableTypeRepresentationError(
                representation, f"unexpected {type(node).__name__} node"
            )
    return tree.body


class _PlaceholderMarker(ast.NodeTransformer):
    """Replaces authoring markers with typed placeholder nodes."""

    def __init__(self):
        self.counts: Counter = Counter()

    def visit_Name(self, node: ast.Name) -> ast.AST:
        if node.id == NAME_MARKER:
            self.counts[NamePlaceholder] += 1
            return NamePlaceholder(owner=None, ctx=node.ctx)
        if node.id == TYPE_MARKER:
            self.counts[TypePlaceholder] += 1
            return TypePlaceholder()
        return node

    def visit_Attribute(self, node: ast.Attribute) -> ast.AST:
        self.generic_visit(node)
        if node.attr == NAME_MARKER:
            self.counts[NamePlaceholder] += 1
            return NamePlaceholder(owner=node.value, ctx=node.ctx)
        return node

    def visit_Constant(self, node: ast.Constant) -> ast.AST:
        if isinstance(node.value, str) and node.value == KEY_MARKER:
            self.counts[KeyLiteralPlaceholder] += 1
            return KeyLiteralPlaceholder()
        return node


class _PlaceholderSubstituter(ast.NodeTransformer):
    """Replaces every placeholder node in a cloned tree."""

    def __init__(self, field_name: str, declared_key: str, type_expr: ast.expr):
        self.field_name = field_name
        self.declared_key = declared_key
        self.type_expr = type_expr

    def visit_NamePlaceholder(self, node: NamePlaceholder) -> ast.expr:
        if node.owner is None:
            return ast.Name(id=self.field_name, ctx=node.ctx)
        owner = self.visit(node.owner)
        return ast.Attribute(value=owner, attr=self.field_name, ctx=node.ctx)

    def visit_KeyLiteralPlaceholder(self, node: KeyLiteralPlaceholder) -> ast.expr:
        return ast.Constant(value=self.declared_key)

    def visit_TypePlaceholder(self, node: TypePlaceholder) -> ast.expr:
        return copy.deepcopy(self.type_expr)


def _strip_authoring_notes(body: List[ast.stmt]) -> List[ast.stmt]:
    """Drop leading bare string statements (template documentation)."""
    start = 0
    while (
        start < len(body)
        and isinstance(body[start], ast.Expr)
        and isinstance(body[start].value, ast.Constant)
        and isinstance(body[start].value.value, str)
    ):
        start += 1
    return body[start:]


@dataclass
class GeneratedFragment:
    """A fully substituted statement list, owned by the caller."""

    body: List[ast.stmt] = field(default_factory=list)
    kind: FieldKind = FieldKind.EMPTY
    type_representation: Optional[str] = None

    @classmethod
    def empty(cls) -> "GeneratedFragment":
        """Fragment for fields that emit no code."""
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.body

    def to_module(self) -> ast.Module:
        """Wrap the statements in a module node."""
        return ast.Module(body=list(self.body), type_ignores=[])

    def to_source(self) -> str:
        """Render the fragment as Python source."""
        if self.is_empty:
            return ""
        return ast.unparse(self.to_module())


class TemplateFragment:
    """An authored template with typed placeholders. Never mutated."""

    def __init__(self, kind: FieldKind, tree: ast.Module, counts: Counter, source: str = ""):
        self.kind = kind
        self.source = source
        self._tree = tree
        self._counts = counts

    @classmethod
    def from_source(cls, source: str, kind: FieldKind) -> "TemplateFragment":
        """
        Author a template from Python source.

        Args:
            source: Template statements using the authoring markers
            kind: Category this template serves

        Raises:
            TemplateSubstitutionError: If the source does not parse
        """
        try:
            tree = ast.parse(source)
        except SyntaxError as e:
            raise TemplateSubstitutionError(
                f"Template for {kind.value} does not parse: {e.msg} (line {e.lineno})"
            ) from e
        marker = _PlaceholderMarker()
        marked = marker.visit(tree)
        return cls(kind, marked, marker.counts, source)

    def placeholder_count(self, placeholder: Type[Placeholder]) -> int:
        """Number of occurrences of a placeholder kind in this template."""
        return self._counts.get(placeholder, 0)

    def missing_placeholders(self) -> List[str]:
        """Names of placeholder kinds required by the category but absent."""
        required = REQUIRED_PLACEHOLDERS.get(self.kind, frozenset())
        return sorted(p.__name__ for p in required if not self._counts.get(p))

    def check(self) -> None:
        """Raise TemplateSubstitutionError if a required placeholder is absent."""
        missing = self.missing_placeholders()
        if missing:
            raise TemplateSubstitutionError(
                f"Template for {self.kind.value} has no {', '.join(missing)}"
            )

    def instantiate(
        self, field_name: str, declared_key: str, type_representation: str
    ) -> GeneratedFragment:
        """
        Produce a new fragment with every placeholder substituted.

        Args:
            field_name: Generated identifier of the field
            declared_key: Original declared key, used verbatim in literals
            type_representation: Resolved type, parsed into a type expression

        Returns:
            Fresh GeneratedFragment sharing no nodes with the template

        Raises:
            TemplateSubstitutionError: If the template lacks a required placeholder
            UnparsableTypeRepresentationError: If the type does not parse
        """
        self.check()
        type_expr = parse_type_expression(type_representation)

        clone = copy.deepcopy(self._tree)
        clone.body = _strip_authoring_notes(clone.body)
        _PlaceholderSubstituter(field_name, declared_key, type_expr).visit(clone)
        ast.fix_missing_locations(clone)

        logger.debug(
            f"Instantiated {self.kind.value} template for {field_name} as {type_representation}"
        )
        return GeneratedFragment(
            body=clone.body, kind=self.kind, type_representation=type_representation
        )


@dataclass(frozen=True)
class TemplateSet:
    """The four templates, one per category."""

    simple: TemplateFragment
    pojo: TemplateFragment
    collection_of_composite: TemplateFragment
    collection_of_basic: TemplateFragment

    @classmethod
    def from_sources(
        cls,
        simple: str,
        pojo: str,
        collection_of_composite: str,
        collection_of_basic: str,
    ) -> "TemplateSet":
        """Author all four templates from source strings."""
        return cls(
            simple=TemplateFragment.from_source(simple, FieldKind.SIMPLE),
            pojo=TemplateFragment.from_source(pojo, FieldKind.POJO),
            collection_of_composite=TemplateFragment.from_source(
                collection_of_composite, FieldKind.COLLECTION_OF_COMPOSITE
            ),
            collection_of_basic=TemplateFragment.from_source(
                collection_of_basic, FieldKind.COLLECTION_OF_BASIC
            ),
        )

    def for_kind(self, kind: FieldKind) -> TemplateFragment:
        """Template serving a category (EMPTY has none)."""
        if kind is FieldKind.EMPTY:
            raise KeyError(kind)
        return getattr(self, kind.value)

    def validate(self) -> None:
        """Check every template; raises TemplateSubstitutionError on the first defect."""
        for template in (
            self.simple,
            self.pojo,
            self.collection_of_composite,
            self.collection_of_basic,
        ):
            template.check()
