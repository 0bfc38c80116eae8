"""Tests for Verifier and VerificationResult."""

from formscope.profiles.loader import FieldDefinition, ValidationRules
from formscope.verification import FieldStatus, VerificationResult, Verifier


def make_verifier() -> Verifier:
    return Verifier.from_dict("person", [
        {"name": "name_first", "required": True, "filters": ["trim"]},
        {"name": "name_last", "required": True},
        {"name": "age", "type": "integer", "validation": {"min": 0}},
        {"name": "email", "type": "email"},
    ])


class TestVerify:
    def test_success(self):
        result = make_verifier().verify({
            "name_first": " Cory ",
            "name_last": "Watson",
            "age": "40",
        })
        assert result.success is True
        assert result.valids() == ["name_first", "name_last", "age", "email"]
        assert result.get_value("name_first") == "Cory"
        assert result.get_original_value("name_first") == " Cory "
        assert result.get_value("age") == 40

    def test_missing_and_invalid(self):
        result = make_verifier().verify({"name_first": "Cory", "age": -1, "email": "x"})
        assert result.success is False
        assert result.missings() == ["name_last"]
        assert result.invalids() == ["age", "email"]
        assert result.is_missing("name_last")
        assert result.is_invalid("age")
        assert result.is_valid("name_first")
        assert [e.code for e in result.get_errors("age")] == ["MIN_VALUE"]

    def test_invalid_field_has_no_value(self):
        result = make_verifier().verify({"name_first": "a", "name_last": "b", "email": "x"})
        assert result.get_value("email") is None
        assert result.get_original_value("email") == "x"

    def test_unknown_keys_ignored(self):
        result = make_verifier().verify({
            "name_first": "Cory",
            "name_last": "Watson",
            "favorite_color": "blue",
        })
        assert result.success
        assert "favorite_color" not in result.fields

    def test_values_only_valid_fields(self):
        result = make_verifier().verify({"name_first": "Cory", "email": "bad"})
        assert result.values() == {"name_first": "Cory", "age": None}

    def test_unknown_field_queries(self):
        result = make_verifier().verify({})
        assert result.is_valid("nope") is False
        assert result.is_missing("nope") is False
        assert result.get_value("nope") is None
        assert result.get_errors("nope") == []

    def test_verifier_is_reusable(self):
        verifier = make_verifier()
        first = verifier.verify({})
        second = verifier.verify({"name_first": "a", "name_last": "b"})
        assert first.success is False
        assert second.success is True

    def test_empty_profile_always_succeeds(self):
        assert Verifier.from_dict("empty", {}).verify({"a": 1}).success

    def test_from_fields(self):
        verifier = Verifier.from_fields("one", [
            FieldDefinition(name="code", validation=ValidationRules(required=True)),
        ])
        assert verifier.verify({}).missings() == ["code"]
        assert verifier.profile.name == "one"


class TestResultSerialization:
    def test_to_dict(self):
        result = make_verifier().verify({"name_first": "Cory"})
        data = result.to_dict()
        assert data["profile"] == "person"
        assert data["success"] is False
        assert [f["name"] for f in data["fields"]] == ["name_first", "name_last", "age", "email"]

    def test_from_dict_restores_statuses(self):
        original = make_verifier().verify({"name_first": "Cory", "email": "bad"})
        restored = VerificationResult.from_dict(original.to_dict())
        assert restored.success is False
        assert restored.missings() == ["name_last"]
        assert restored.invalids() == ["email"]
        assert restored.fields["email"].status == FieldStatus.INVALID
        assert restored.get_errors("email")[0].code == "INVALID_EMAIL"
