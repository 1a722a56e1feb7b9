"""Roles and the role guard (authorization decision point)."""

from enum import Enum


class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


# Which required roles each role satisfies. Every Role must have an entry.
_GRANTS: dict[Role, frozenset[Role]] = {
    Role.ADMIN: frozenset({Role.ADMIN, Role.USER}),
    Role.USER: frozenset({Role.USER}),
}

_missing = set(Role) - set(_GRANTS)
if _missing:
    raise RuntimeError(f"Role grant table is missing entries for: {sorted(r.value for r in _missing)}")


def parse_role(value: str) -> Role | None:
    """Return the Role for a claim value, or None if the value is not a known role."""
    try:
        return Role(value)
    except ValueError:
        return None


def check(role: str, required: Role | None) -> Decision:
    """
    Decide whether an identity holding `role` may use a route requiring `required`.

    admin satisfies any requirement, user satisfies only user-level requirements,
    and unknown roles are always denied. required=None means any known role.
    """
    held = parse_role(role)
    if held is None:
        return Decision.DENY
    if required is None or required in _GRANTS[held]:
        return Decision.ALLOW
    return Decision.DENY
