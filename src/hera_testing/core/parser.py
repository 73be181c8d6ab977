"""Test document parser.

This module defines the high-level entry point turning raw document text
into an executable `BusinessProcessTest`.

The parser coordinates:
- deserialization of YAML (or JSON) text with a PyYAML loader;
- structural validation with the schema validator;
- seeding of a run context for the test;
- template resolution of setup, step and cleanup actions, in this order,
  threading one run context through all of them.

It also provides tolerant entry points for validation-only and metadata
extraction, which never raise on malformed documents.
"""

from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal, NamedTuple, TypedDict

from yaml import SafeLoader, load
from yaml.error import YAMLError

from hera_testing.context import RunContext
from hera_testing.errors import ParseError

from .validator import SchemaValidator

if TYPE_CHECKING:
    from collections.abc import Iterator
    from io import TextIOBase

if TYPE_CHECKING:
    from yaml import BaseLoader

if TYPE_CHECKING:
    from hera_testing.schema import BusinessProcessTest, Step, StepAction

logger = getLogger(__name__)

#: Document section an action belongs to.
type Phase = Literal['setup', 'step', 'cleanup']


class ResolvedAction(NamedTuple):
    """Action with its templates resolved, in document order."""

    phase: Phase
    step: 'Step | None'
    action: 'StepAction'


class ParsedTest(NamedTuple):
    """Resolved test together with the run context it was resolved in."""

    test: 'BusinessProcessTest'
    context: RunContext


class ValidationReport(TypedDict):
    """Result of a validation-only parse."""

    valid: bool
    errors: list[str]


class DocumentSummary(TypedDict, total=False):
    """Lightweight metadata of a test document."""

    id: str
    title: str
    industry: str
    step_count: int
    persona_count: int
    estimated_duration: int | float


class DocumentParser:
    """Parser of business process test documents.

    The parser holds no per-document state: every call to `parse` seeds
    its own run context unless the caller supplies one, so a single
    parser may be shared between independent parses.
    """

    def __init__(self, loader: type['BaseLoader'] = SafeLoader,
                 validator: SchemaValidator | None = None) -> None:
        """Initialize the document parser.

        Args:
            loader: YAML loader class used for deserialization.
            validator: Schema validator, a default one if not provided.
        """
        self.loader = loader
        self.validator = validator or SchemaValidator()

    def load(self, content: 'TextIOBase | str', *,
             filename: str | None = None) -> Any:  # noqa: ANN401
        """Deserialize document text into an untyped tree.

        Args:
            content: YAML or JSON content as a string or file-like object.
            filename: Optional name of the source file.

        Returns:
            The deserialized document.

        Raises:
            ParseError: If the content is not a well-formed document.
        """
        try:
            return load(content, Loader=self.loader)  # noqa: S506

        except YAMLError as base:
            raise ParseError.from_yaml_error(base, filename=filename) from base

        except Exception as base:
            raise ParseError('Unexpected error', kind='malformed-document') from base

    def parse(self, content: 'TextIOBase | str', *,
              context: RunContext | None = None,
              clock: str | None = None,
              filename: str | None = None) -> 'BusinessProcessTest':
        """Parse a document into a validated and resolved test model.

        A runner executing the test must keep working against the run
        context used for the parse. Pass it explicitly or use
        `parse_with_context`.

        Args:
            content: YAML or JSON content as a string or file-like object.
            context: Run context to resolve templates against. A fresh,
                seeded context is created if not provided.
            clock: Clock override of a fresh context.
            filename: Optional name of the source file.

        Returns:
            The test model with every template resolvable at parse
            time expanded.

        Raises:
            ParseError: With kind `malformed-document` if the content can
                not be deserialized, or `schema-invalid` with the complete
                list of issues if it violates the document schema.
        """
        return self.parse_with_context(
            content,
            context=context,
            clock=clock,
            filename=filename,
        ).test

    def parse_with_context(self, content: 'TextIOBase | str', *,
                           context: RunContext | None = None,
                           clock: str | None = None,
                           filename: str | None = None) -> ParsedTest:
        """Parse a document and return it with the run context used.

        Args:
            content: YAML or JSON content as a string or file-like object.
            context: Run context to resolve templates against. A fresh,
                seeded context is created if not provided.
            clock: Clock override of a fresh context.
            filename: Optional name of the source file.

        Returns:
            The resolved test model and its run context.

        Raises:
            ParseError: If the document is malformed or schema-invalid.
        """
        data = self.load(content, filename=filename)

        result = self.validator.validate(data)
        if result.model is None:
            raise ParseError.from_issues(result.issues, filename=filename)

        test = result.model
        if context is None:
            context = self.create_context(test, clock=clock)

        logger.debug('Resolving test %r with %d steps', test.id, len(test.steps))

        return ParsedTest(self.resolve(test, context), context)

    def parse_file(self, path: str | Path, *,
                   context: RunContext | None = None) -> 'BusinessProcessTest':
        """Parse a document file.

        Args:
            path: Path to a YAML or JSON document.
            context: Optional run context, see `parse`.

        Returns:
            The resolved test model.

        Raises:
            ParseError: If the document is malformed or schema-invalid.
        """
        path = Path(path)

        return self.parse(path.read_text(encoding='utf-8'), context=context, filename=str(path))

    @staticmethod
    def create_context(test: 'BusinessProcessTest', *,
                       clock: str | None = None) -> RunContext:
        """Seed a fresh run context for a test.

        Args:
            test: Validated test model.
            clock: Clock override. Defaults to the document clock,
                then to the current time.

        Returns:
            A new run context.
        """
        return RunContext.seed(
            test.context.organization_id,
            clock=clock or test.context.clock,
        )

    @staticmethod
    def iter_actions(test: 'BusinessProcessTest',
                     context: RunContext) -> 'Iterator[ResolvedAction]':
        """Lazily resolve every action in document order.

        Setup actions come first, then the actions of each step, then
        cleanup actions. Each action is resolved only when requested, so
        values stored into the context between iterations are visible
        to the actions that follow.

        Args:
            test: Validated test model.
            context: Run context shared by all actions.

        Yields:
            Resolved actions together with their phase and step.
        """
        for action in test.setup or ():
            yield ResolvedAction('setup', None, resolve_action(action, context))

        for step in test.steps:
            for action in step.actions:
                yield ResolvedAction('step', step, resolve_action(action, context))

        for action in test.cleanup or ():
            yield ResolvedAction('cleanup', None, resolve_action(action, context))

    @staticmethod
    def resolve(test: 'BusinessProcessTest', context: RunContext) -> 'BusinessProcessTest':
        """Build a copy of a test with all actions resolved.

        Args:
            test: Validated test model.
            context: Run context shared by all actions.

        Returns:
            A new test model.
        """
        setup = None
        if test.setup is not None:
            setup = [resolve_action(action, context) for action in test.setup]

        steps = [
            step.model_copy(update={
                'actions': [resolve_action(action, context) for action in step.actions],
            })
            for step in test.steps
        ]

        cleanup = None
        if test.cleanup is not None:
            cleanup = [resolve_action(action, context) for action in test.cleanup]

        return test.model_copy(update={
            'setup': setup,
            'steps': steps,
            'cleanup': cleanup,
        })

    def validate(self, content: 'TextIOBase | str') -> ValidationReport:
        """Validate a document without building the executable model.

        Args:
            content: YAML or JSON content as a string or file-like object.

        Returns:
            Validity flag and the list of error messages.
        """
        try:
            data = self.load(content)
        except ParseError as error:
            return ValidationReport(valid=False, errors=[error.message])

        result = self.validator.validate(data)

        return ValidationReport(
            valid=result.valid,
            errors=[str(issue) for issue in result.issues],
        )

    def extract_metadata(self, content: 'TextIOBase | str') -> DocumentSummary:
        """Extract lightweight metadata without validating the document.

        Args:
            content: YAML or JSON content as a string or file-like object.

        Returns:
            Found metadata fields, or an empty mapping if the content
            can not be deserialized into a mapping.
        """
        try:
            data = self.load(content)
        except ParseError:
            logger.debug('Metadata extraction skipped malformed document')
            return DocumentSummary()

        if not isinstance(data, dict):
            return DocumentSummary()

        summary = DocumentSummary()

        if isinstance(value := data.get('id'), str):
            summary['id'] = value
        if isinstance(value := data.get('title'), str):
            summary['title'] = value

        context = data.get('context')
        industry = data.get('industry')
        if not industry and isinstance(context, dict):
            industry = context.get('industry')
        if isinstance(industry, str):
            summary['industry'] = industry

        if isinstance(steps := data.get('steps'), list):
            summary['step_count'] = len(steps)
        if isinstance(personas := data.get('personas'), dict):
            summary['persona_count'] = len(personas)

        metadata = data.get('metadata')
        if isinstance(metadata, dict):
            duration = metadata.get('estimated_duration')
            if isinstance(duration, (int, float)) and not isinstance(duration, bool):
                summary['estimated_duration'] = duration

        return summary


def resolve_action(action: 'StepAction', context: RunContext) -> 'StepAction':
    """Resolve the templates of a single action.

    Args:
        action: Validated action.
        context: Run context to resolve against.

    Returns:
        A new action of the same variant.
    """
    data = context.resolve(action.model_dump(exclude_unset=True))

    return type(action).model_validate(data)
