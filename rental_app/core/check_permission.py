from fastapi import HTTPException

from models.enums import Capability, UserRole

ROLE_CAPABILITIES: dict[UserRole, frozenset[Capability]] = {
    UserRole.TENANT: frozenset({Capability.SUBMIT_APPLICATIONS}),
    UserRole.LANDLORD: frozenset(
        {Capability.LIST_PROPERTIES, Capability.REVIEW_APPLICATIONS}
    ),
    UserRole.PROPERTY_MANAGER: frozenset(
        {Capability.LIST_PROPERTIES, Capability.REVIEW_APPLICATIONS}
    ),
}


def capabilities_for(role: UserRole) -> frozenset[Capability]:
    try:
        return ROLE_CAPABILITIES[role]
    except KeyError:
        raise LookupError(f"No capabilities registered for role {role!r}")


class CheckRolePermission:
    def has(self, current_user, capability: Capability) -> bool:
        return capability in capabilities_for(current_user.role)

    async def require(self, current_user, capability: Capability, detail: str):
        if not self.has(current_user, capability):
            raise HTTPException(status_code=403, detail=detail)

    async def check_can_list_properties(self, current_user):
        await self.require(
            current_user,
            Capability.LIST_PROPERTIES,
            "Only landlords and property managers can create properties",
        )

    async def check_can_apply(self, current_user):
        await self.require(
            current_user,
            Capability.SUBMIT_APPLICATIONS,
            "Only tenants can submit applications",
        )
