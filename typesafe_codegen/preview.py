"""
Preview rendering for generated fields.

Wraps the generated from-map fragments of one domain type in a class
skeleton so they can be read in context. The skeleton is text rendered with
Jinja2; the fragments themselves come from the syntax-tree templates.
"""

from typing import Any, Dict, List

from jinja2 import DictLoader, Environment

from .core.generator import GenerationResult
from .typesafe.field import DeclaredField

PREVIEW_CLASS_TEMPLATE = '''\
from __future__ import annotations


class {{ class_name }}:
    """Preview of fields generated from the type model."""
{%- for field in fields %}

    {{ field.annotation }}
    @property
    def {{ field.name }}(self) -> {{ field.type }}:
        return self._{{ field.name }}

    @{{ field.name }}.setter
    def {{ field.name }}(self, value: {{ field.type }}) -> None:
        self._{{ field.name }} = value
{%- endfor %}

    def from_map(self, values):
{%- if body %}
{{ body | indent(8, true) }}
{%- else %}
        pass
{%- endif %}
'''


def _create_environment() -> Environment:
    env = Environment(
        loader=DictLoader({"preview_class": PREVIEW_CLASS_TEMPLATE}),
        keep_trailing_newline=True,
        autoescape=False,
    )
    return env


def render_preview(
    class_name: str, fields: List[DeclaredField], result: GenerationResult
) -> str:
    """
    Render a class skeleton around generated fragments.

    Args:
        class_name: Name of the previewed class
        fields: Declared fields, in declaration order
        result: Generation result for those fields

    Returns:
        Python source of the preview class
    """
    field_context: List[Dict[str, Any]] = []
    for field in fields:
        key = field.original_map_key
        if key not in result.fragments or result.fragments[key].is_empty:
            continue
        annotations = result.annotations.get(key) or field.getter_annotations()
        field_context.append(
            {
                "name": field.field_name,
                "type": field.object_type,
                "annotation": annotations[0].to_source(),
            }
        )

    template = _create_environment().get_template("preview_class")
    return template.render(class_name=class_name, fields=field_context, body=result.code)
