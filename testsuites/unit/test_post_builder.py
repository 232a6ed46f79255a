import json

from testsuites.api_testing.framework.post_builder import PostBuilder


def test_defaults():
    assert PostBuilder.new().build() == {
        "title": "Test Title",
        "body": "Test Body",
        "userId": 1,
    }


def test_fluent_setters_override_defaults():
    payload = (
        PostBuilder.new()
        .with_title("hello")
        .with_body("from test")
        .with_user_id(42)
        .build_json()
    )

    assert json.loads(payload) == {"title": "hello", "body": "from test", "userId": 42}


def test_build_json_keeps_non_ascii_and_special_characters():
    payload = PostBuilder.new().with_title("Spécial: <>&\"'").build_json()

    assert "Spécial" in payload
    assert json.loads(payload)["title"] == "Spécial: <>&\"'"
