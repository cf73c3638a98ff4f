from enum import Enum


class FamilyRole(str, Enum):
    owner = "owner"
    admin = "admin"
    member = "member"


class MemberStatus(str, Enum):
    active = "active"
    removed = "removed"


class Capability(str, Enum):
    add_member = "add_member"
    remove_member = "remove_member"
    update_settings = "update_settings"


# Single place where role semantics live; handlers ask for a capability, never a role name
ROLE_CAPABILITIES = {
    FamilyRole.owner: frozenset(Capability),
    FamilyRole.admin: frozenset(Capability),
    FamilyRole.member: frozenset(),
}


def capabilities(role: FamilyRole) -> frozenset:
    return ROLE_CAPABILITIES.get(FamilyRole(role), frozenset())


def has_capability(role: FamilyRole, capability: Capability) -> bool:
    return capability in capabilities(role)
