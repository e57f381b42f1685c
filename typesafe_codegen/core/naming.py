"""
Naming utilities for safe code generation.

Turns declared keys of the domain model into identifiers for generated
fields and type names. Every call is independent: nothing is cached and no
"used names" are tracked, so fields can be named in any order.
"""

import keyword
import re
from enum import Enum
from typing import List, Optional, Set


class NamingCase(Enum):
    """Different naming case styles."""

    SNAKE_CASE = "snake"  # user_name
    CAMEL_CASE = "camel"  # userName
    PASCAL_CASE = "pascal"  # UserName


_WORD_SEPARATORS = re.compile(r"[^0-9a-zA-Z_]+")


class NameSanitizer:
    """Handles name sanitization and case conversion."""

    def __init__(self, reserved_words: Optional[Set[str]] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Words that get a suffix when produced verbatim
        """
        self.reserved_words = reserved_words or set()

    def sanitize_name(
        self,
        name: str,
        target_case: NamingCase = NamingCase.CAMEL_CASE,
        suffix_on_conflict: str = "_",
    ) -> str:
        """
        Sanitize a name for safe use as an identifier.

        Args:
            name: Original name to sanitize
            target_case: Desired case style
            suffix_on_conflict: Suffix to add for reserved words

        Returns:
            Sanitized name safe for use
        """
        words = self._split_words(name)
        converted = self._convert_case(words, target_case)

        if converted[0].isdigit():
            converted = f"_{converted}"
        if converted in self.reserved_words:
            converted = f"{converted}{suffix_on_conflict}"
        return converted

    def _split_words(self, name: str) -> List[str]:
        """Split on invalid characters, underscores and lower-to-upper humps."""
        spaced = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", name)
        words = [w for w in re.split(r"[^0-9a-zA-Z]+", spaced) if w]
        return words or ["field"]

    def _convert_case(self, words: List[str], target_case: NamingCase) -> str:
        """Convert split words to target case style; camel and pascal keep inner case."""
        if target_case == NamingCase.SNAKE_CASE:
            return "_".join(w.lower() for w in words)
        elif target_case == NamingCase.PASCAL_CASE:
            return "".join(capitalize_first(w) for w in words)
        first = words[0][0].lower() + words[0][1:]
        return first + "".join(capitalize_first(w) for w in words[1:])


PYTHON_RESERVED_WORDS = set(keyword.kwlist)


def create_python_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Python identifiers."""
    return NameSanitizer(PYTHON_RESERVED_WORDS)


def field_identifier(declared_key: str) -> str:
    """Lower-camel identifier for a declared key ("Full Name" -> "fullName")."""
    return create_python_sanitizer().sanitize_name(declared_key, NamingCase.CAMEL_CASE)


def capitalize_first(name: str) -> str:
    """Upper-case the first letter only."""
    if not name:
        return name
    return name[0].upper() + name[1:]


def capitalize_type_name(name: str) -> str:
    """Capitalised type name; "_" is appended when it spells a keyword ("none" -> "None_")."""
    capitalized = capitalize_first(name)
    if keyword.iskeyword(capitalized):
        capitalized = f"{capitalized}_"
    return capitalized


def type_identifier(name: str) -> str:
    """
    Escape a domain type name into an identifier.

    Characters that are not valid in an identifier separate words; every
    word after the first has its first letter capitalised and the rest of
    the case is kept ("Full Name" -> "FullName", "tPerson" -> "tPerson").
    Names that are already identifiers are returned unchanged.
    """
    if name.isidentifier():
        return name
    words = [w for w in _WORD_SEPARATORS.split(name) if w]
    if not words:
        return "_"
    escaped = words[0] + "".join(capitalize_first(w) for w in words[1:])
    if escaped[0].isdigit():
        escaped = f"_{escaped}"
    return escaped
