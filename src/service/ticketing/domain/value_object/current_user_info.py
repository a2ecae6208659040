import attrs

from src.service.ticketing.domain.enum.user_role import UserRole


@attrs.define(frozen=True)
class CurrentUserInfo:
    """Caller identity passed explicitly into every use case"""

    user_id: str
    role: UserRole = UserRole.USER
    access_token: str = attrs.field(default='', repr=False)

    def is_organizer(self) -> bool:
        return self.role in (UserRole.ORGANIZER, UserRole.ADMIN, UserRole.SUPERADMIN)

    def is_admin(self) -> bool:
        return self.role in (UserRole.ADMIN, UserRole.SUPERADMIN)
