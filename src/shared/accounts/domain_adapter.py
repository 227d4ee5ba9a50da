"""Account directory backed by the in-process identity domain."""

from protean.exceptions import ObjectNotFoundError

from shared.accounts.port import AccountDirectoryPort, AccountRecord


class DomainAccountDirectory(AccountDirectoryPort):
    def __init__(self, domain=None):
        if domain is None:
            from identity.domain import identity as domain
        self.domain = domain

    def find(self, user_id) -> AccountRecord | None:
        from identity.user.user import User

        with self.domain.domain_context():
            try:
                user = self.domain.repository_for(User).get(str(user_id))
            except ObjectNotFoundError:
                return None
            return AccountRecord(user_id=str(user.id), name=user.name, role=user.role)
