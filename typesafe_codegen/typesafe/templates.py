"""
Default from-map templates.

Each template is the body of a generated ``from_map(self, values)`` method
for one field: it reads the field's value from ``values`` by the original
declared key and stores it on ``self`` under the generated identifier.

The generated identifier only ever appears as an attribute of ``self``.
Locals carry a leading underscore, which ``field_identifier`` never
produces, so no declared key can shadow them.
"""

from functools import lru_cache

from ..core.templates import TemplateSet

SIMPLE_PROPERTY_TEMPLATE = '''
"""Scalar value, stored as-is."""
self.__property__: PropertyType = values.get("$property$")
'''

POJO_PROPERTY_TEMPLATE = '''
"""Nested object populated from its own mapping."""
_property_value = values.get("$property$")
if _property_value is not None:
    _nested = PropertyType()
    _nested.from_map(_property_value)
    self.__property__: PropertyType = _nested
'''

COLLECTION_PROPERTY_TEMPLATE = '''
"""Collection of nested objects, each populated from its own mapping."""
_property_values = values.get("$property$")
if _property_values is not None:
    _elements = []
    for _item in _property_values:
        _element = PropertyType()
        _element.from_map(_item)
        _elements.append(_element)
    self.__property__: Collection[PropertyType] = _elements
'''

COLLECTION_BASIC_PROPERTY_TEMPLATE = '''
"""Collection of primitive values, copied into a list."""
_property_values = values.get("$property$")
if _property_values is not None:
    self.__property__: Collection[PropertyType] = list(_property_values)
'''


@lru_cache(maxsize=1)
def default_template_set() -> TemplateSet:
    """The built-in templates, authored once per process."""
    return TemplateSet.from_sources(
        simple=SIMPLE_PROPERTY_TEMPLATE,
        pojo=POJO_PROPERTY_TEMPLATE,
        collection_of_composite=COLLECTION_PROPERTY_TEMPLATE,
        collection_of_basic=COLLECTION_BASIC_PROPERTY_TEMPLATE,
    )
