import pytest

from studio_eighty7.rules.loader import DEFAULT_RULES_PATH, default_rules, load_rules


def test_bundled_rules_load():
    rules = load_rules(DEFAULT_RULES_PATH)

    assert rules.rate_limits.generate.window_seconds == 60
    assert rules.rate_limits.generate.max_requests == 5
    assert rules.rate_limits.contact.window_seconds == 3600
    assert rules.rate_limits.contact.max_requests == 3
    assert rules.rate_limits.client_cooldown_seconds == 5
    assert rules.requests.max_body_bytes == 10240
    assert rules.validation.topic.max == 200
    assert rules.validation.message.min == 10
    assert rules.ops.required_env == ["GEMINI_API_KEY"]


def test_default_rules_is_cached():
    assert default_rules() is default_rules()


def test_contact_policy_has_its_own_wording():
    rules = default_rules()
    assert rules.rate_limits.contact.error == "Too many messages"
    assert rules.rate_limits.generate.error == "Too many requests"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_rules(tmp_path / "nope.yaml")


def test_invalid_yaml(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text("project: [unclosed")

    with pytest.raises(ValueError, match="Invalid YAML"):
        load_rules(path)


def test_schema_violation(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text("project:\n  slug: x\n")

    with pytest.raises(ValueError, match="Rules validation failed"):
        load_rules(path)


def test_markdown_fenced_rules(tmp_path):
    body = DEFAULT_RULES_PATH.read_text()
    path = tmp_path / "rules.md"
    path.write_text(f"# Studio rules\n\nSome prose.\n\n```yaml\n{body}\n```\n\nMore prose.\n")

    rules = load_rules(path)

    assert rules.project.slug == "studio-eighty7"
