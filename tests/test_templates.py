"""Tests for syntax-tree templates and placeholder substitution."""

import ast

import pytest

from typesafe_codegen.core.errors import (
    TemplateSubstitutionError,
    UnparsableTypeRepresentationError,
)
from typesafe_codegen.core.templates import (
    FieldKind,
    GeneratedFragment,
    KeyLiteralPlaceholder,
    NamePlaceholder,
    TemplateFragment,
    TemplateSet,
    TypePlaceholder,
    parse_type_expression,
)
from typesafe_codegen.typesafe.templates import (
    COLLECTION_BASIC_PROPERTY_TEMPLATE,
    COLLECTION_PROPERTY_TEMPLATE,
    POJO_PROPERTY_TEMPLATE,
    SIMPLE_PROPERTY_TEMPLATE,
    default_template_set,
)

DOUBLE_USE_TEMPLATE = '''
"""Uses every placeholder twice."""
__property__: PropertyType = values.get("$property$")
self.__property__: PropertyType = __property__
log("$property$")
'''


def _names(fragment: GeneratedFragment):
    return {n.id for n in ast.walk(fragment.to_module()) if isinstance(n, ast.Name)}


def _attrs(fragment: GeneratedFragment):
    return {n.attr for n in ast.walk(fragment.to_module()) if isinstance(n, ast.Attribute)}


def _strings(fragment: GeneratedFragment):
    return [
        n.value
        for n in ast.walk(fragment.to_module())
        if isinstance(n, ast.Constant) and isinstance(n.value, str)
    ]


class TestParseTypeExpression:
    @pytest.mark.parametrize(
        "representation",
        ["Object", "com.example.model.Person", "Collection[LocalDate]", "Dict[str, int]"],
    )
    def test_valid_type_expressions(self, representation):
        assert ast.unparse(parse_type_expression(representation)) == representation

    @pytest.mark.parametrize(
        "representation",
        ["", "Full Name", "a-b", "com.example.1model.Person", "f()", "x[0]", "'str'"],
    )
    def test_invalid_type_expressions(self, representation):
        with pytest.raises(UnparsableTypeRepresentationError) as exc_info:
            parse_type_expression(representation)
        assert exc_info.value.representation == representation


class TestTemplateAuthoring:
    def test_markers_become_typed_placeholders(self):
        template = TemplateFragment.from_source(DOUBLE_USE_TEMPLATE, FieldKind.SIMPLE)
        assert template.placeholder_count(NamePlaceholder) == 3
        assert template.placeholder_count(KeyLiteralPlaceholder) == 2
        assert template.placeholder_count(TypePlaceholder) == 2
        assert template.missing_placeholders() == []

    def test_missing_placeholder_is_reported(self):
        template = TemplateFragment.from_source(
            "self.__property__ = values.get('$property$')", FieldKind.SIMPLE
        )
        assert template.missing_placeholders() == ["TypePlaceholder"]
        with pytest.raises(TemplateSubstitutionError):
            template.instantiate("age", "Age", "int")

    def test_unparsable_template_is_systemic(self):
        with pytest.raises(TemplateSubstitutionError):
            TemplateFragment.from_source("def broken(:", FieldKind.POJO)

    def test_default_templates_are_complete(self):
        default_template_set().validate()

    def test_default_template_set_is_shared(self):
        assert default_template_set() is default_template_set()

    def test_for_kind(self):
        templates = default_template_set()
        assert templates.for_kind(FieldKind.POJO) is templates.pojo
        assert templates.for_kind(FieldKind.COLLECTION_OF_BASIC) is templates.collection_of_basic
        with pytest.raises(KeyError):
            templates.for_kind(FieldKind.EMPTY)

    def test_validate_reports_broken_template(self):
        templates = TemplateSet.from_sources(
            simple=SIMPLE_PROPERTY_TEMPLATE,
            pojo="self.__property__ = None",
            collection_of_composite=COLLECTION_PROPERTY_TEMPLATE,
            collection_of_basic=COLLECTION_BASIC_PROPERTY_TEMPLATE,
        )
        with pytest.raises(TemplateSubstitutionError, match="pojo"):
            templates.validate()


class TestInstantiate:
    def test_every_occurrence_is_replaced(self):
        template = TemplateFragment.from_source(DOUBLE_USE_TEMPLATE, FieldKind.SIMPLE)
        fragment = template.instantiate("fullName", "Full Name", "FullName")

        source = fragment.to_source()
        assert "__property__" not in source
        assert "$property$" not in source
        assert "PropertyType" not in source
        assert _strings(fragment) == ["Full Name", "Full Name"]
        assert {"fullName", "FullName"} <= _names(fragment)
        assert "fullName" in _attrs(fragment)

    def test_authoring_docstring_is_stripped(self):
        template = TemplateFragment.from_source(DOUBLE_USE_TEMPLATE, FieldKind.SIMPLE)
        fragment = template.instantiate("fullName", "Full Name", "FullName")
        assert "Uses every placeholder" not in fragment.to_source()
        assert len(fragment.body) == 3

    def test_qualified_type_is_structural(self):
        fragment = default_template_set().pojo.instantiate(
            "owner", "Owner", "com.example.model.Person"
        )
        calls = [
            ast.unparse(n.func)
            for n in ast.walk(fragment.to_module())
            if isinstance(n, ast.Call)
        ]
        assert "com.example.model.Person" in calls
        assert "self.owner: com.example.model.Person = _nested" in fragment.to_source()

    def test_store_context_is_kept(self):
        fragment = default_template_set().pojo.instantiate("owner", "Owner", "Person")
        stores = [
            n.attr
            for n in ast.walk(fragment.to_module())
            if isinstance(n, ast.Attribute) and isinstance(n.ctx, ast.Store)
        ]
        assert stores == ["owner"]

    def test_declared_key_is_verbatim(self):
        key = 'Say "hi" \\ now'
        fragment = default_template_set().simple.instantiate("sayHiNow", key, "String")
        assert _strings(fragment) == [key]
        compile(fragment.to_module(), "<fragment>", "exec")

    def test_template_is_not_mutated(self):
        template = default_template_set().simple
        first = template.instantiate("fullName", "Full Name", "FullName")
        second = template.instantiate("age", "Age", "Number")

        assert "fullName" not in second.to_source()
        assert "Full Name" not in second.to_source()
        assert "self.age: Number = values.get('Age')" in second.to_source()
        assert "self.fullName: FullName = values.get('Full Name')" in first.to_source()
        assert template.placeholder_count(NamePlaceholder) == 1

    def test_fragments_do_not_share_nodes(self):
        template = default_template_set().collection_of_composite
        first = template.instantiate("friends", "Friends", "Person")
        second = template.instantiate("friends", "Friends", "Person")
        first_ids = {
            id(n)
            for n in ast.walk(first.to_module())
            if not isinstance(n, ast.expr_context)
        }
        second_ids = {
            id(n)
            for n in ast.walk(second.to_module())
            if not isinstance(n, ast.expr_context)
        }
        assert len(first_ids & second_ids) == 0

    def test_unparsable_type_is_field_level(self):
        with pytest.raises(UnparsableTypeRepresentationError):
            default_template_set().simple.instantiate("x", "X", "not a type")

    def test_fragment_compiles(self):
        for template in (
            default_template_set().simple,
            default_template_set().pojo,
            default_template_set().collection_of_composite,
            default_template_set().collection_of_basic,
        ):
            fragment = template.instantiate("friends", "My Friends", "com.example.Person")
            compile(fragment.to_module(), "<fragment>", "exec")
            assert fragment.kind is template.kind
            assert fragment.type_representation == "com.example.Person"


class TestGeneratedFragment:
    def test_empty(self):
        fragment = GeneratedFragment.empty()
        assert fragment.is_empty
        assert fragment.to_source() == ""
        assert fragment.kind is FieldKind.EMPTY


class Person:
    def from_map(self, values):
        self.name = values.get("name")


class Holder:
    pass


def _run(fragment: GeneratedFragment, values):
    """Execute a fragment as the body of ``from_map`` and return the populated object."""
    module = ast.parse("def from_map(self, values):\n    pass\n")
    module.body[0].body = fragment.body
    ast.fix_missing_locations(module)
    namespace = {"Person": Person}
    exec(compile(module, "<fragment>", "exec"), namespace)
    target = Holder()
    namespace["from_map"](target, values)
    return target


LOCAL_LIKE_NAMES = ["friends", "item", "element", "self", "values", "nested", "propertyValues"]


class TestGeneratedCodeRuns:
    @pytest.mark.parametrize("name", LOCAL_LIKE_NAMES)
    def test_simple(self, name):
        fragment = default_template_set().simple.instantiate(name, "Key", "String")
        assert getattr(_run(fragment, {"Key": "x"}), name) == "x"

    @pytest.mark.parametrize("name", LOCAL_LIKE_NAMES)
    def test_pojo(self, name):
        fragment = default_template_set().pojo.instantiate(name, "Key", "Person")
        value = getattr(_run(fragment, {"Key": {"name": "a"}}), name)
        assert isinstance(value, Person)
        assert value.name == "a"

    @pytest.mark.parametrize("name", LOCAL_LIKE_NAMES)
    def test_collection_of_composite(self, name):
        fragment = default_template_set().collection_of_composite.instantiate(
            name, "Key", "Person"
        )
        values = {"Key": [{"name": "a"}, {"name": "b"}]}
        people = getattr(_run(fragment, values), name)
        assert [p.name for p in people] == ["a", "b"]

    @pytest.mark.parametrize("name", LOCAL_LIKE_NAMES)
    def test_collection_of_basic(self, name):
        fragment = default_template_set().collection_of_basic.instantiate(
            name, "Key", "String"
        )
        assert getattr(_run(fragment, {"Key": ("a", "b")}), name) == ["a", "b"]

    def test_missing_key_leaves_attribute_unset(self):
        fragment = default_template_set().pojo.instantiate("owner", "Owner", "Person")
        assert not hasattr(_run(fragment, {}), "owner")
