"""Structural validation of raw test documents.

The validator checks an untyped tree (as produced by a YAML or JSON
loader) against the `BusinessProcessTest` schema and reports every
violation found, never only the first one. Issues carry a readable path
such as `steps[0].actions[1].data.entity_name`.
"""

from logging import getLogger
from typing import TYPE_CHECKING, Any, NamedTuple

from pydantic import ValidationError

from hera_testing.errors import SchemaIssue
from hera_testing.schema import BusinessProcessTest
from hera_testing.schema.documents import CROSS_CHECKS

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails

logger = getLogger(__name__)

#: Discriminator fields of the action and assertion unions.
DISCRIMINATORS = ('action_type', 'type')


class ValidationResult(NamedTuple):
    """Outcome of a schema validation.

    Exactly one of `model` and `issues` is meaningful: a valid document
    has a model and no issues, an invalid one has issues and no model.
    """

    model: BusinessProcessTest | None
    issues: tuple[SchemaIssue, ...] = ()

    @property
    def valid(self) -> bool:
        """Whether the document passed validation."""
        return self.model is not None and not self.issues


class SchemaValidator:
    """Validator of raw documents against the test document schema."""

    schema: type[BusinessProcessTest] = BusinessProcessTest

    def validate(self, data: Any) -> ValidationResult:  # noqa: ANN401
        """Validate an untyped document tree.

        Args:
            data: Deserialized document.

        Returns:
            A typed model with defaults applied, or the complete list
            of schema issues.
        """
        if not data:
            return ValidationResult(None, (SchemaIssue(path='', message='Document is empty'),))

        if not isinstance(data, dict):
            return ValidationResult(None, (SchemaIssue(
                path='',
                message=f'Document must be a mapping, got {type(data).__name__}',
            ),))

        issues: list[SchemaIssue] = []
        model = None

        try:
            model = self.schema.model_validate(data, context={CROSS_CHECKS: False})
        except ValidationError as error:
            issues.extend(self.collect_issues(error, data))

        issues.extend(self.check_personas(data))

        logger.debug('Document validated with %d issues', len(issues))

        if issues:
            return ValidationResult(None, tuple(issues))

        return ValidationResult(model)

    @classmethod
    def collect_issues(cls, error: ValidationError, data: Any) -> list[SchemaIssue]:  # noqa: ANN401
        """Convert a Pydantic validation failure into schema issues.

        Args:
            error: Validation error raised by Pydantic.
            data: Root data structure being validated.

        Returns:
            One issue per Pydantic error.
        """
        return [
            SchemaIssue(
                path=cls.format_path(data, item['loc']),
                message=cls.format_message(item),
            )
            for item in error.errors(include_url=False, include_input=False)
        ]

    @staticmethod
    def check_personas(data: dict[str, Any]) -> list[SchemaIssue]:
        """Report steps referring to personas that are not declared.

        Args:
            data: Root data structure being validated.

        Returns:
            One issue per offending step.
        """
        personas = data.get('personas')
        steps = data.get('steps')
        if not isinstance(personas, dict) or not isinstance(steps, list):
            return []

        declared = ', '.join(sorted(map(str, personas))) or 'none'

        return [
            SchemaIssue(
                path=f'steps[{position}].persona',
                message=f'Unknown persona {step['persona']!r} (declared: {declared})',
            )
            for position, step in enumerate(steps)
            if isinstance(step, dict)
            and isinstance(step.get('persona'), str)
            and step['persona'] not in personas
        ]

    @staticmethod
    def format_message(error: 'ErrorDetails') -> str:
        """Build a readable message for a Pydantic error."""
        context = error.get('ctx') or {}

        if error['type'] == 'union_tag_invalid':
            return (
                f'Unknown variant {context.get('tag')!r} for {context.get('discriminator')}, '
                f'expected one of {context.get('expected_tags')}'
            )

        if error['type'] == 'union_tag_not_found':
            return f'Missing variant discriminator {context.get('discriminator')}'

        return error['msg']

    @staticmethod
    def format_path(data: Any, location: tuple[int | str, ...]) -> str:  # noqa: ANN401
        """Render a Pydantic error location as a document path.

        The location is walked over the original data. Pydantic names the
        variant of a discriminated union right after the union item, and
        that single segment is not part of the document, so it is skipped.

        Args:
            data: Root data structure being validated.
            location: Pydantic error location.

        Returns:
            Path such as `steps[0].actions[1].data`.
        """
        path = ''
        current = data
        entered = True

        for key in location:
            if entered and isinstance(current, dict) and any(
                current.get(field) == key for field in DISCRIMINATORS
            ):
                entered = False
                continue

            if isinstance(key, int):
                path += f'[{key}]'
            else:
                path += f'.{key}' if path else str(key)

            if isinstance(current, (list, tuple)) and isinstance(key, int) and 0 <= key < len(current):
                current = current[key]
            elif isinstance(current, dict) and key in current:
                current = current[key]
            else:
                current = None

            entered = True

        return path
