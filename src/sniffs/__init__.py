"""Sniffs for Laravel projects: call arity and Blade template references."""

from sniffs.abort_message import RequireCustomAbortMessageSniff
from sniffs.arity import ArityPolicy, ArityViolation, audit_call
from sniffs.base import FileSeenSet, Sniff, SourceFile
from sniffs.blade_templates import NonExistingBladeTemplateSniff
from sniffs.directives import (
    DirectiveContractError,
    DirectiveExtractor,
    TemplateReference,
)
from sniffs.missing_argument import MissingOptionalArgumentSniff
from sniffs.template_paths import (
    TemplateFound,
    TemplateNotFound,
    TemplatePathResolver,
    UnknownNamespace,
    is_analyzable,
)

__all__ = [
    "ArityPolicy",
    "ArityViolation",
    "DirectiveContractError",
    "DirectiveExtractor",
    "FileSeenSet",
    "MissingOptionalArgumentSniff",
    "NonExistingBladeTemplateSniff",
    "RequireCustomAbortMessageSniff",
    "Sniff",
    "SourceFile",
    "TemplateFound",
    "TemplateNotFound",
    "TemplatePathResolver",
    "TemplateReference",
    "UnknownNamespace",
    "audit_call",
    "is_analyzable",
]
