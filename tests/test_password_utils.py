import pytest

from shopapp.core.exceptions import ValidationFailedError
from shopapp.utils import password_utils


def test_hash_and_verify():
    hashed = password_utils.get_password_hash("secret123")
    assert hashed != "secret123"
    assert password_utils.verify_password("secret123", hashed)
    assert not password_utils.verify_password("wrong-pass", hashed)


@pytest.mark.parametrize("password, ok", [("12345", False), ("123456", True), ("", False), (None, False)])
def test_minimum_length(password, ok):
    assert password_utils.is_password_long_enough(password) is ok


def test_policy_error_names_the_field():
    with pytest.raises(ValidationFailedError) as exc:
        password_utils.ensure_password_policy("abc", label="New password", field="new_password")
    assert exc.value.user_message == "New password must be at least 6 characters"
    assert exc.value.context == {"field": "new_password"}
