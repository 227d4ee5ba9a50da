"""Self-service account changes: commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.user.user import User


@identity.command(part_of="User")
class UpdateProfile:
    user_id: Identifier(required=True)
    name: String(max_length=30)
    email: String(max_length=254)
    phone_number: String(max_length=20)


@identity.command(part_of="User")
class ChangePassword:
    user_id: Identifier(required=True)
    old_password: String(required=True, max_length=128)
    new_password: String(required=True, max_length=128)


@identity.command_handler(part_of=User)
class ManageProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        if command.email and repo.email_taken(command.email, exclude_id=user.id):
            raise ValidationError({"email": ["Email is already registered"]})

        user.update_profile(
            name=command.name,
            email=command.email,
            phone_number=command.phone_number if command.phone_number is not None else user.phone_number,
        )
        repo.add(user)

    @handle(ChangePassword)
    def change_password(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.change_password(command.old_password, command.new_password)
        repo.add(user)
