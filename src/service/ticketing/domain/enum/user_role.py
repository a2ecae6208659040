from enum import StrEnum


class UserRole(StrEnum):
    USER = 'USER'
    ORGANIZER = 'ORGANIZER'
    ADMIN = 'ADMIN'
    SUPERADMIN = 'SUPERADMIN'
