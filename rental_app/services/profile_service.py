from core.mapper import ORMMapper
from repos.profile_repo import UserProfileRepo
from schemas.schema import (
    NotificationPreferencesOut,
    NotificationPreferencesSchema,
    ProfileOut,
    UserPublicSchema,
)


class UserProfileService:
    def __init__(self, db):
        self.repo: UserProfileRepo = UserProfileRepo(db)
        self.mapper: ORMMapper = ORMMapper()

    async def get(self, current_user) -> ProfileOut:
        return ProfileOut(profile=self.mapper.one(current_user, UserPublicSchema))

    async def update(self, current_user, data) -> ProfileOut:
        changes = data.model_dump(exclude_unset=True)
        # a blank name keeps the current one
        if changes.get("name") is None:
            changes.pop("name", None)

        if changes:
            current_user = await self.repo.update_user(current_user, **changes)
        return ProfileOut(profile=self.mapper.one(current_user, UserPublicSchema))

    async def get_preferences(self, current_user) -> NotificationPreferencesOut:
        prefs = await self.repo.get_or_create_preferences(current_user.id)
        return NotificationPreferencesOut(
            preferences=self.mapper.one(prefs, NotificationPreferencesSchema)
        )

    async def update_preferences(self, current_user, data) -> NotificationPreferencesOut:
        prefs = await self.repo.get_or_create_preferences(current_user.id)
        changes = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None
        }
        if changes:
            prefs = await self.repo.update_preferences(prefs, **changes)
        return NotificationPreferencesOut(
            preferences=self.mapper.one(prefs, NotificationPreferencesSchema)
        )
