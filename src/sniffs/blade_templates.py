"""Report references to Blade templates that do not exist."""

from __future__ import annotations

from typing import TYPE_CHECKING

from contract.findings import CODE_TEMPLATE_NOT_FOUND, CODE_UNKNOWN_VIEW_NAMESPACE
from parse.tokens import TokenKind
from sniffs.base import FileSeenSet
from sniffs.directives import DirectiveExtractor
from sniffs.template_paths import TemplateNotFound, UnknownNamespace, is_analyzable

if TYPE_CHECKING:
    from sniffs.base import SourceFile
    from sniffs.directives import TemplateReference
    from sniffs.template_paths import TemplatePathResolver

STDIN_PATH = "STDIN"
STUB_MARKER = ".stub"


class NonExistingBladeTemplateSniff:
    """Check every template referenced by a file against the view paths.

    Registered on open tags and inline HTML, but the whole file is analyzed
    on the first matching token; later tokens of the same file are skipped
    through the seen set.
    """

    name = "Laravel.NonExistingBladeTemplate"
    CODE_TEMPLATE_NOT_FOUND = CODE_TEMPLATE_NOT_FOUND
    CODE_UNKNOWN_VIEW_NAMESPACE = CODE_UNKNOWN_VIEW_NAMESPACE
    NOT_FOUND_MESSAGE = 'Template "{name}" ({candidates}) does not exist in "{file}"'
    UNKNOWN_NAMESPACE_MESSAGE = (
        'Unknown view namespace "{namespace}" for template "{name}" in "{file}"'
    )

    def __init__(
        self,
        resolver: TemplatePathResolver,
        *,
        extractor: DirectiveExtractor | None = None,
        seen: FileSeenSet | None = None,
    ) -> None:
        self.resolver = resolver
        self.extractor = extractor if extractor is not None else DirectiveExtractor()
        self.seen = seen if seen is not None else FileSeenSet()

    def register(self) -> frozenset[TokenKind]:
        return frozenset({TokenKind.OPEN_TAG, TokenKind.INLINE_HTML})

    def process(self, source_file: SourceFile, position: int) -> None:
        path = source_file.path
        if path == STDIN_PATH or STUB_MARKER in path:
            return
        if not self.seen.first_sight(path):
            return

        for reference in self.extractor.extract_references(source_file.tokens):
            self._validate(source_file, reference)

    def _validate(self, source_file: SourceFile, reference: TemplateReference) -> None:
        if not is_analyzable(reference.identifier):
            return

        outcome = self.resolver.resolve(reference.identifier)
        if isinstance(outcome, TemplateNotFound):
            source_file.add_error(
                self.name,
                self.CODE_TEMPLATE_NOT_FOUND,
                self.NOT_FOUND_MESSAGE.format(
                    name=reference.identifier,
                    candidates=", ".join(str(path) for path in outcome.candidates),
                    file=source_file.path,
                ),
                reference.position,
            )
        elif isinstance(outcome, UnknownNamespace):
            source_file.add_warning(
                self.name,
                self.CODE_UNKNOWN_VIEW_NAMESPACE,
                self.UNKNOWN_NAMESPACE_MESSAGE.format(
                    namespace=outcome.namespace,
                    name=reference.identifier,
                    file=source_file.path,
                ),
                reference.position,
            )


__all__ = ["NonExistingBladeTemplateSniff"]
