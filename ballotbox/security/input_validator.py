# ballotbox/security/input_validator.py

import re
import bleach

from ballotbox.errors import ValidationError

# Input validation for registration, login and vote bodies. Raises
# ValidationError with a client-safe message; the error handlers turn that
# into a 400. Identity fields are checked as sent and never rewritten.

class InputValidator:
    def __init__(self):
        self.patterns = {
            'email': re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'),
            'username': re.compile(r'^[A-Za-z0-9_.@+-]{1,64}$'),
        }

    def sanitize_string(self, input_str, max_length=255):
        if not isinstance(input_str, str):
            raise ValidationError("Input must be a string")
        if len(input_str) > max_length:
            input_str = input_str[:max_length]
        # strip every tag; names and emails never carry markup
        return bleach.clean(input_str, tags=[], attributes={}, strip=True).strip()

    def is_clean(self, input_str, max_length=255):
        """True when sanitising would leave the value exactly as sent."""
        return isinstance(input_str, str) and self.sanitize_string(input_str, max_length) == input_str

    def validate_email(self, email):
        return isinstance(email, str) and bool(self.patterns['email'].match(email))

    def validate_username(self, username):
        return isinstance(username, str) and bool(self.patterns['username'].match(username))

    def _require_body(self, payload, fields):
        if not isinstance(payload, dict):
            raise ValidationError("Invalid request body")
        for field in fields:
            value = payload.get(field)
            if not isinstance(value, str) or not value:
                raise ValidationError("All fields are required")

    def validate_registration(self, payload):
        self._require_body(payload, ('username', 'email', 'password'))
        username = payload['username']
        email = payload['email']
        if not self.is_clean(username, max_length=64) or not self.validate_username(username):
            raise ValidationError("Invalid username")
        if not self.is_clean(email, max_length=254) or not self.validate_email(email):
            raise ValidationError("Invalid email address")
        # passwords are hashed as given, never sanitised
        return {'username': username, 'email': email, 'password': payload['password']}

    def validate_login(self, payload):
        self._require_body(payload, ('username', 'password'))
        return {'username': payload['username'], 'password': payload['password']}

    def validate_vote(self, payload):
        if not isinstance(payload, dict) or 'candidate' not in payload:
            raise ValidationError("Invalid request body")
        candidate = payload['candidate']
        # bool is an int subclass; reject it explicitly
        if isinstance(candidate, bool) or not isinstance(candidate, int):
            raise ValidationError("Candidate must be an integer id")
        return {'candidate': candidate}
