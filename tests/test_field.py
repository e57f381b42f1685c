"""Tests for DeclaredField: template selection, metadata and policy."""

import ast

import pytest

from typesafe_codegen.core.config import GeneratorConfig
from typesafe_codegen.core.errors import CyclicTypeError
from typesafe_codegen.core.schema import FieldDeclaration, MappingTypeIndex, TypeDescriptor
from typesafe_codegen.core.templates import FieldKind
from typesafe_codegen.typesafe.field import AnnotationDefinition, DeclaredField


def _field(index, key, type_, **kwargs):
    return DeclaredField.from_entry(index, key, type_, **kwargs)


class TestScenarios:
    def test_simple_scalar_field(self):
        index = MappingTypeIndex()
        field = _field(index, "Full Name", TypeDescriptor("FullName"))

        assert field.field_name == "fullName"
        assert field.object_type == "FullName"

        fragment = field.create_from_map()
        assert fragment.kind is FieldKind.SIMPLE
        assert fragment.type_representation == "FullName"
        assert fragment.to_source() == "self.fullName: FullName = values.get('Full Name')"

        annotations = field.getter_annotations()
        assert len(annotations) == 1
        assert annotations[0].value_map == {"value": '"Full Name"'}

    def test_scalar_type_named_like_the_key(self):
        field = _field(MappingTypeIndex(), "Full Name", TypeDescriptor("Full Name"))
        assert field.create_from_map().type_representation == "FullName"

    def test_collection_of_registered_composite(self, index, person):
        people = TypeDescriptor("People", is_collection=True, base_type=person)
        field = _field(index, "Friends", people)

        assert field.object_type == "Collection[com.example.model.Person]"
        fragment = field.create_from_map()
        assert fragment.kind is FieldKind.COLLECTION_OF_COMPOSITE
        assert fragment.type_representation == "com.example.model.Person"
        assert (
            "self.friends: Collection[com.example.model.Person] = _elements"
            in fragment.to_source()
        )

    def test_opaque_field_emits_nothing(self, index):
        field = _field(index, "Payload", TypeDescriptor("Any"))
        fragment = field.create_from_map()
        assert fragment.is_empty
        assert fragment.to_source() == ""
        assert field.object_type == "Object"

    def test_composite_three_hops_from_registered_type(self, index, person):
        hop3 = TypeDescriptor("tC", is_composite=True, base_type=person)
        hop2 = TypeDescriptor("tB", is_composite=True, base_type=hop3)
        hop1 = TypeDescriptor("tA", is_composite=True, base_type=hop2)
        fragment = _field(index, "Manager", hop1).create_from_map()
        assert fragment.kind is FieldKind.POJO
        assert fragment.type_representation == "com.example.model.Person"

    def test_collection_of_primitive(self, index, string_type):
        names = TypeDescriptor("Names", is_collection=True, base_type=string_type)
        fragment = _field(index, "Nick Names", names).create_from_map()
        assert fragment.kind is FieldKind.COLLECTION_OF_BASIC
        assert (
            "self.nickNames: Collection[String] = list(_property_values)"
            in fragment.to_source()
        )

    def test_converted_primitive(self, index):
        birthday = TypeDescriptor("tBirthday", base_type=TypeDescriptor("Date"))
        fragment = _field(index, "Birthday", birthday).create_from_map()
        assert fragment.to_source() == "self.birthday: LocalDate = values.get('Birthday')"

    def test_cyclic_type_raises(self, index):
        a = TypeDescriptor("tA")
        a.base_type = TypeDescriptor("tB", base_type=a)
        with pytest.raises(CyclicTypeError):
            _field(index, "Loop", a).create_from_map()


class TestFieldDefinition:
    def test_policy_constants(self, index, string_type):
        field = _field(index, "Name", string_type)
        assert field.is_key_field is False
        assert field.create_accessors is True
        assert field.is_static is False
        assert field.is_final is False
        assert field.init_expr is None

    def test_names(self, index, string_type):
        field = _field(index, "First Name", string_type)
        assert field.field_name == "firstName"
        assert field.original_map_key == "First Name"

    def test_explicit_generated_name_is_kept(self, index, string_type):
        declaration = FieldDeclaration("class", string_type, generated_name="klass")
        assert DeclaredField(index, declaration).field_name == "klass"

    def test_reserved_word_key(self, index, string_type):
        assert _field(index, "class", string_type).field_name == "class_"

    def test_annotation_name_is_configurable(self, index, string_type):
        config = GeneratorConfig(property_annotation="FEELProperty")
        field = _field(index, "Name", string_type, config=config)
        assert field.getter_annotations()[0].to_source() == '@FEELProperty(value="Name")'

    def test_default_annotation(self, index, string_type):
        annotation = _field(index, "Name", string_type).getter_annotations()[0]
        assert annotation.name == "org.kie.dmn.feel.lang.FEELProperty"

    def test_annotation_without_values(self):
        assert AnnotationDefinition("Marker").to_source() == "@Marker"

    def test_generated_code_uses_declared_key_literal(self, index, person):
        fragment = _field(index, "Home Owner", person).create_from_map()
        literals = [
            n.value
            for n in ast.walk(fragment.to_module())
            if isinstance(n, ast.Constant) and isinstance(n.value, str)
        ]
        assert literals == ["Home Owner"]
