"""Administrative account management: commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from identity.domain import identity, logger
from identity.user.user import User
from shared.errors import PermissionDenied


@identity.command(part_of="User")
class UpdateUserAccount:
    """An administrator edits another account's name, email or role."""

    user_id: Identifier(required=True)
    name: String(max_length=30)
    email: String(max_length=254)
    role: String(max_length=10)


@identity.command(part_of="User")
class DeleteUserAccount:
    user_id: Identifier(required=True)
    requested_by: Identifier(required=True)


@identity.command_handler(part_of=User)
class AdministerUsersHandler:
    @handle(UpdateUserAccount)
    def update_user_account(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        if command.email and repo.email_taken(command.email, exclude_id=user.id):
            raise ValidationError({"email": ["Email is already registered"]})

        user.assign(name=command.name, email=command.email, role=command.role)
        repo.add(user)
        logger.info("user_account_changed", user_id=str(user.id), role=user.role)

    @handle(DeleteUserAccount)
    def delete_user_account(self, command):
        if str(command.user_id) == str(command.requested_by):
            raise PermissionDenied("You cannot delete your own account")

        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        repo.remove(user)
        logger.info("user_account_deleted", user_id=str(command.user_id), deleted_by=str(command.requested_by))
