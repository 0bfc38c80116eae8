"""Tests for profile loading and schema checks."""

import textwrap

import pytest

from formscope.errors import ProfileError
from formscope.profiles import (
    FieldDefinition,
    Profile,
    ProfileLoader,
    load_profile_file,
    validate_profile_file,
    validate_profiles_dir,
)


def write(path, content: str):
    path.write_text(textwrap.dedent(content))
    return path


class TestFieldDefinition:
    def test_display_name_defaults_from_name(self):
        assert FieldDefinition(name="name_first").display_name == "Name First"
        assert FieldDefinition(name="zipCode").display_name == "Zip Code"

    def test_required_shorthand(self):
        f = FieldDefinition.from_dict({"name": "a", "required": True})
        assert f.validation.required is True

    def test_camel_case_rules(self):
        f = FieldDefinition.from_dict({
            "name": "a",
            "validation": {"minLength": 2, "maxLength": 5, "min": 1},
        })
        assert f.validation.min_length == 2
        assert f.validation.max_length == 5
        assert f.validation.min == 1

    def test_option_dicts_flattened(self):
        f = FieldDefinition.from_dict({
            "name": "a",
            "type": "picklist",
            "options": [{"value": "x", "label": "X"}, "y"],
        })
        assert f.options == ["x", "y"]

    def test_unknown_filter(self):
        with pytest.raises(ProfileError, match="unknown filter"):
            FieldDefinition.from_dict({"name": "a", "filters": ["shout"]})

    def test_missing_name(self):
        with pytest.raises(ProfileError):
            FieldDefinition.from_dict({"type": "text"})


class TestProfile:
    def test_mapping_form(self):
        profile = Profile.from_dict({
            "profile": "p",
            "fields": {"a": {"required": True}, "b": None},
        })
        assert profile.field_names == ["a", "b"]
        assert profile.get_field("a").validation.required
        assert profile.get_field("zzz") is None

    def test_mapping_form_body_must_be_mapping(self):
        with pytest.raises(ProfileError, match="'name_first' must be a mapping"):
            Profile.from_dict({"profile": "p", "fields": {"name_first": True}})

    def test_list_form_entry_must_be_mapping(self):
        with pytest.raises(ProfileError, match="no name"):
            Profile.from_dict({"profile": "p", "fields": ["name_first"]})

    def test_duplicate_field(self):
        with pytest.raises(ProfileError, match="twice"):
            Profile.from_dict({"profile": "p", "fields": [{"name": "a"}, {"name": "a"}]})

    def test_no_name(self):
        with pytest.raises(ProfileError):
            Profile.from_dict({"fields": []})


class TestProfileLoader:
    def test_load_fixture_profiles(self, profiles_dir):
        loader = ProfileLoader(profiles_dir)
        loader.load_all()
        assert loader.list_profiles() == ["address", "name"]
        name = loader.get_profile("name")
        assert name.field_names == ["name_first", "name_last"]
        assert name.get_field("name_last").validation.max_length == 40
        assert loader.get_profile("address").get_field("country").options == ["US", "CA", "MX"]

    def test_load_all_twice(self, profiles_dir):
        loader = ProfileLoader(profiles_dir)
        loader.load_all()
        loader.load_all()
        assert loader.list_profiles() == ["address", "name"]

    def test_reload_picks_up_removed_file(self, tmp_path):
        write(tmp_path / "a.yaml", "profile: a\nfields: []\n")
        write(tmp_path / "b.yaml", "profile: b\nfields: []\n")
        loader = ProfileLoader(tmp_path)
        loader.load_all()
        (tmp_path / "b.yaml").unlink()
        loader.load_all()
        assert loader.list_profiles() == ["a"]

    def test_failed_reload_keeps_previous_profiles(self, tmp_path):
        write(tmp_path / "a.yaml", "profile: a\nfields: []\n")
        loader = ProfileLoader(tmp_path)
        loader.load_all()
        write(tmp_path / "b.yaml", "profile: a\nfields: []\n")
        with pytest.raises(ProfileError, match="Duplicate profile 'a'"):
            loader.load_all()
        assert loader.list_profiles() == ["a"]

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ProfileError, match="not found"):
            ProfileLoader(tmp_path / "nope").load_all()

    def test_duplicate_profile(self, tmp_path):
        write(tmp_path / "a.yaml", "profile: dup\nfields: []\n")
        write(tmp_path / "b.yml", "profile: dup\nfields: []\n")
        with pytest.raises(ProfileError, match="Duplicate profile 'dup'"):
            ProfileLoader(tmp_path).load_all()

    def test_files_without_profile_key_skipped(self, tmp_path):
        write(tmp_path / "other.yaml", "something: else\n")
        loader = ProfileLoader(tmp_path)
        loader.load_all()
        assert loader.profiles == {}

    def test_unparseable_file(self, tmp_path):
        path = write(tmp_path / "bad.yaml", "profile: [unclosed\n")
        with pytest.raises(ProfileError, match="Cannot parse"):
            load_profile_file(path)


class TestProfileSchema:
    def test_fixture_profiles_are_valid(self, profiles_dir):
        assert validate_profiles_dir(profiles_dir) == []

    def test_unknown_key(self, tmp_path):
        path = write(tmp_path / "p.yaml", """
            profile: p
            fields:
              - name: a
                colour: red
        """)
        issues = validate_profile_file(path)
        assert len(issues) == 1
        assert issues[0].severity == "error"
        assert issues[0].path == "fields"

    def test_bad_type(self, tmp_path):
        path = write(tmp_path / "p.yaml", """
            profile: p
            fields:
              a:
                type: colour
        """)
        assert validate_profile_file(path)

    def test_missing_fields_key(self, tmp_path):
        path = write(tmp_path / "p.yaml", "profile: p\n")
        issues = validate_profile_file(path)
        assert any("'fields' is a required property" in i.message for i in issues)

    def test_empty_file(self, tmp_path):
        path = write(tmp_path / "p.yaml", "")
        issues = validate_profile_file(path)
        assert "empty" in issues[0].message

    def test_non_profile_file_warns(self, tmp_path):
        path = write(tmp_path / "p.yaml", "other: 1\n")
        issues = validate_profile_file(path)
        assert issues[0].severity == "warning"

    def test_strict_escalates_warnings(self, tmp_path):
        write(tmp_path / "p.yaml", "other: 1\n")
        issues = validate_profiles_dir(tmp_path, strict=True)
        assert [i.severity for i in issues] == ["error"]

    def test_missing_directory(self, tmp_path):
        issues = validate_profiles_dir(tmp_path / "nope")
        assert "does not exist" in issues[0].message

    def test_issue_str(self, tmp_path):
        path = write(tmp_path / "p.yaml", "profile: p\n")
        assert str(validate_profile_file(path)[0]).startswith("[ERROR] ")
