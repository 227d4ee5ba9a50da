import pytest
from identity.user.authentication import INVALID_CREDENTIALS, authenticate
from identity.user.registration import RegisterUser
from protean import current_domain
from shared.errors import AuthenticationFailed


@pytest.fixture()
def user_id():
    return current_domain.process(
        RegisterUser(name="Login User", email="login@example.com", password="s3cret-pass"),
        asynchronous=False,
    )


class TestAuthenticate:
    def test_valid_credentials_return_the_user(self, user_id):
        user = authenticate("Login@Example.com", "s3cret-pass")
        assert str(user.id) == str(user_id)

    def test_wrong_password_fails(self, user_id):
        with pytest.raises(AuthenticationFailed) as exc:
            authenticate("login@example.com", "wrong-pass")
        assert exc.value.message == INVALID_CREDENTIALS

    def test_unknown_email_fails_with_same_message(self, user_id):
        with pytest.raises(AuthenticationFailed) as exc:
            authenticate("ghost@example.com", "s3cret-pass")
        assert exc.value.message == INVALID_CREDENTIALS
