"""Tests for request payload validation."""

from engine.kernel.validation import (
    validate_education,
    validate_experience,
    validate_login,
    validate_post,
    validate_profile,
    validate_register,
)


class TestRegister:
    def test_valid(self):
        data = {"name": "Jane Doe", "email": "jane@devconnect.io", "password": "secret1", "password2": "secret1"}
        assert validate_register(data) == {}

    def test_all_missing(self):
        errors = validate_register({})
        assert errors == {
            "name": "Name field is required",
            "email": "Email field is required",
            "password": "Password field is required",
            "password2": "Confirm Password field is required",
        }

    def test_bad_values(self):
        errors = validate_register(
            {"name": "J", "email": "not-an-email", "password": "abc", "password2": "abd"}
        )
        assert errors["name"] == "Name must be between 2 and 30 characters"
        assert errors["email"] == "Email is invalid"
        assert errors["password"] == "Password must be between 6 and 30 characters"
        assert errors["password2"] == "Passwords must match"

    def test_password_too_long(self):
        password = "x" * 40
        errors = validate_register(
            {"name": "Jane Doe", "email": "jane@devconnect.io", "password": password, "password2": password}
        )
        assert errors == {"password": "Password must be between 6 and 30 characters"}


class TestLogin:
    def test_valid(self):
        assert validate_login({"email": "a@x.com", "password": "whatever"}) == {}

    def test_invalid_email(self):
        assert validate_login({"email": "nope", "password": "x"}) == {"email": "Email is invalid"}


class TestProfile:
    def test_create_requires_handle_status_skills(self):
        errors = validate_profile({}, creating=True)
        assert errors == {
            "handle": "Profile handle is required",
            "status": "Status field is required",
            "skills": "Skills field is required",
        }

    def test_update_accepts_subset(self):
        assert validate_profile({"bio": "Hello"}, creating=False) == {}

    def test_handle_length(self):
        errors = validate_profile({"handle": "j", "status": "Dev", "skills": "x"})
        assert errors == {"handle": "Handle needs to be between 2 and 40 characters"}

    def test_urls(self):
        errors = validate_profile(
            {
                "handle": "jdoe",
                "status": "Dev",
                "skills": "python",
                "website": "not a url",
                "twitter": "twitter.com/jdoe",
                "social": None,
            }
        )
        assert errors == {"website": "Not a valid URL"}

    def test_nested_social_urls(self):
        errors = validate_profile({"social": {"youtube": "???"}}, creating=False)
        assert errors == {"youtube": "Not a valid URL"}


class TestExperienceAndEducation:
    def test_experience_required(self):
        assert validate_experience({}) == {
            "title": "Job title field is required",
            "company": "Company field is required",
            "from": "From date field is required",
        }

    def test_experience_valid(self):
        assert validate_experience({"title": "Dev", "company": "Acme", "from": "2020-01-01"}) == {}

    def test_education_required(self):
        assert validate_education({"school": "MIT"}) == {
            "degree": "Degree field is required",
            "fieldOfStudy": "Field of study field is required",
            "from": "From date field is required",
        }


class TestPost:
    def test_missing_text(self):
        assert validate_post({}) == {"text": "Text field is required"}

    def test_too_short(self):
        assert validate_post({"text": "short"}) == {"text": "Post must be between 10 and 300 characters"}

    def test_too_long(self):
        assert validate_post({"text": "x" * 301}) == {"text": "Post must be between 10 and 300 characters"}

    def test_valid(self):
        assert validate_post({"text": "A perfectly fine post"}) == {}
