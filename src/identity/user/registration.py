"""User registration: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from identity.domain import identity, logger
from identity.user.user import User


@identity.command(part_of="User")
class RegisterUser:
    """Create a new account with the ``user`` or ``seller`` role."""

    name: String(required=True, max_length=30)
    email: String(required=True, max_length=254)
    password: String(required=True, max_length=128)
    role: String(max_length=10, default="user")
    phone_number: String(max_length=20)


@identity.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.email_taken(command.email):
            raise ValidationError({"email": ["Email is already registered"]})

        user = User.register(
            name=command.name,
            email=command.email,
            password=command.password,
            role=command.role,
            phone_number=command.phone_number,
        )
        repo.add(user)
        logger.info("user_registered", user_id=str(user.id), role=user.role)
        return str(user.id)
