"""JSON Schema export of the test document model."""

from json import dumps
from typing import TYPE_CHECKING

from pydantic.json_schema import GenerateJsonSchema, JsonSchemaValue

from hera_testing.schema import BusinessProcessTest

if TYPE_CHECKING:
    from pydantic_core import core_schema as core


class SchemaGenerator(GenerateJsonSchema):
    """JSON Schema generator for business process test documents.

    Free-form values, such as dynamic field values and oracle arguments,
    are described as runtime values instead of an empty schema.
    """

    @classmethod
    def make_schema(cls, indent: int | str | None = 4) -> str:
        """Generate the JSON Schema of test documents.

        Args:
            indent: Indentation level used for JSON formatting.

        Returns:
            Serialized JSON Schema string.
        """
        schema = {
            **BusinessProcessTest.model_json_schema(schema_generator=cls),
            'title': 'hera-testing',
            'description': 'JSON Schema for HERA business process test documents',
            '$schema': cls.schema_dialect,
        }

        return dumps(
            schema,
            ensure_ascii=False,
            sort_keys=True,
            indent=indent,
        )

    def any_schema(self, schema: 'core.AnySchema') -> JsonSchemaValue:  # noqa: ARG002
        """Generate JSON Schema for free-form values.

        Args:
            schema: Pydantic core schema describing an arbitrary value.

        Returns:
            A permissive JSON Schema fragment.
        """
        return {'description': 'Runtime value'}
