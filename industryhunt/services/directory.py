from industryhunt.models.roles import UserRole
from industryhunt.schemas import DirectoryEntry, DirectoryUser
from industryhunt.services.store import DataStore


def to_directory_entry(user: DirectoryUser) -> DirectoryEntry:
    # Only the first role record counts; a user without one is listed by user id.
    record_id = user.role_record_ids[0] if user.role_record_ids else None
    return DirectoryEntry(
        id=record_id or user.id,
        userId=user.id,
        name=user.name,
        email=user.email,
        avatar_url=user.avatar_url,
    )


def list_directory(store: DataStore, role: UserRole) -> list[DirectoryEntry]:
    return [to_directory_entry(user) for user in store.list_users_by_role(role)]
