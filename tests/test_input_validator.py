import pytest
from ballotbox.errors import ValidationError
from ballotbox.security.input_validator import InputValidator


@pytest.fixture
def validator():
    return InputValidator()


def test_sanitize_string_strips_markup(validator):
    assert validator.sanitize_string("<b>alice</b>") == "alice"
    assert validator.sanitize_string("  bob  ") == "bob"
    assert len(validator.sanitize_string("a" * 300)) == 255


def test_sanitize_string_rejects_non_strings(validator):
    with pytest.raises(ValueError):
        validator.sanitize_string(123)


@pytest.mark.parametrize("email,valid", [
    ("alice@example.com", True),
    ("first.last+tag@sub.example.org", True),
    ("not-an-email", False),
    ("missing@tld", False),
    (None, False),
])
def test_validate_email(validator, email, valid):
    assert validator.validate_email(email) is valid


def test_validate_registration(validator):
    data = validator.validate_registration(
        {"username": "alice", "email": "alice@example.com", "password": "pw123"}
    )
    assert data == {"username": "alice", "email": "alice@example.com", "password": "pw123"}


def test_password_is_not_sanitised(validator):
    data = validator.validate_registration(
        {"username": "alice", "email": "alice@example.com", "password": " <pw> "}
    )
    assert data["password"] == " <pw> "


@pytest.mark.parametrize("payload", [
    None,
    [],
    {"username": "alice", "email": "alice@example.com"},
    {"username": "", "email": "alice@example.com", "password": "pw"},
    {"username": "alice", "email": "alice@example.com", "password": 123},
    {"username": "alice", "email": "bad", "password": "pw"},
    {"username": "has space", "email": "alice@example.com", "password": "pw"},
])
def test_validate_registration_rejects(validator, payload):
    with pytest.raises(ValueError):
        validator.validate_registration(payload)


def test_validate_login(validator):
    assert validator.validate_login({"username": "alice", "password": "pw"}) == {
        "username": "alice", "password": "pw"
    }
    with pytest.raises(ValueError):
        validator.validate_login({"username": "alice"})


@pytest.mark.parametrize("payload", [None, {}, {"candidate": "2"}, {"candidate": True}, {"candidate": 1.5}])
def test_validate_vote_rejects(validator, payload):
    with pytest.raises(ValueError):
        validator.validate_vote(payload)


def test_validate_vote(validator):
    assert validator.validate_vote({"candidate": 2}) == {"candidate": 2}


@pytest.mark.parametrize("username", ["<b>bob</b>", "x" * 100, " alice ", "bob&co"])
def test_username_is_rejected_not_rewritten(validator, username):
    with pytest.raises(ValidationError):
        validator.validate_registration(
            {"username": username, "email": "bob@example.com", "password": "pw"}
        )


@pytest.mark.parametrize("email", ["<i>bob@example.com</i>", "a" * 250 + "@example.com", " bob@example.com"])
def test_email_is_rejected_not_rewritten(validator, email):
    with pytest.raises(ValidationError):
        validator.validate_registration({"username": "bob", "email": email, "password": "pw"})


def test_longest_username_is_kept_intact(validator):
    name = "x" * 64
    data = validator.validate_registration({"username": name, "email": "x@example.com", "password": "pw"})
    assert data["username"] == name
