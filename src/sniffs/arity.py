"""Minimum-argument policies and the auditor that enforces them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from parse.call_targets import CallSite


def normalize_identity(identity: str) -> str:
    """Normalize a policy key the way identities are computed from tokens.

    Function names are case-insensitive and lower-cased; in ``Type::method``
    the type name is kept verbatim and only the method part is lower-cased.
    """
    identity = identity.strip()
    if "::" in identity:
        qualifier, _, method = identity.rpartition("::")
        return qualifier.lstrip("\\") + "::" + method.lower()
    return identity.lstrip("\\").lower()


@dataclass(frozen=True)
class ArityPolicy:
    """Identity (``name`` or ``Type::method``) to minimum argument count."""

    minimums: Mapping[str, int] = field(default_factory=dict)

    @classmethod
    def from_tables(
        cls,
        functions: Mapping[str, int] | None = None,
        static_methods: Mapping[str, int] | None = None,
    ) -> ArityPolicy:
        minimums: dict[str, int] = {}
        for table in (functions or {}, static_methods or {}):
            for identity, required in table.items():
                if required < 0:
                    msg = f"Minimum argument count for '{identity}' must be >= 0"
                    raise ValueError(msg)
                minimums[normalize_identity(identity)] = required
        return cls(minimums=minimums)

    @property
    def callee_names(self) -> frozenset[str]:
        """Lower-cased callee names governed by the policy."""
        return frozenset(key.rpartition("::")[2] for key in self.minimums)

    def required(self, identity: str) -> int | None:
        return self.minimums.get(identity)

    def __bool__(self) -> bool:
        return bool(self.minimums)


@dataclass(frozen=True)
class ArityViolation:
    identity: str
    actual: int
    required: int
    position: int


def audit_call(call_site: CallSite, policy: ArityPolicy) -> ArityViolation | None:
    """Compare a call site against the policy.

    Instance calls are never audited, and identities absent from the policy
    are not governed.
    """
    identity = call_site.identity
    if identity is None:
        return None

    required = policy.required(identity)
    if required is None or call_site.argument_count >= required:
        return None

    return ArityViolation(
        identity=identity,
        actual=call_site.argument_count,
        required=required,
        position=call_site.name_position,
    )


__all__ = ["ArityPolicy", "ArityViolation", "audit_call", "normalize_identity"]
