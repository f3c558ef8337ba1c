import pytest

from app.application.services.response_normalizer import (
    ResponseParseError,
    extract_json_object,
    normalize_design_roast,
    normalize_persona_reply,
    normalize_startup_analysis,
    parse_leading_int,
)


def test_startup_analysis_extracted_from_surrounding_text():
    text = 'foo{"marketFit":"77","techStack":["x"],"competitors":["y"],"analysis":"z","emoji":"🚀"}bar'
    assert normalize_startup_analysis(text) == {
        "marketFit": 77,
        "techStack": ["x"],
        "competitors": ["y"],
        "analysis": "z",
        "emoji": "🚀",
    }


def test_markdown_fenced_json_is_extracted():
    text = 'Here you go:\n```json\n{"title": "Neat", "score": 8}\n```'
    assert extract_json_object(text) == {"title": "Neat", "score": 8}


def test_greedy_span_covers_nested_objects():
    text = 'x {"feedback": [{"type": "positive", "text": "ok"}], "score": "6"} y'
    data = normalize_design_roast(text)
    assert data["score"] == 6
    assert data["feedback"] == [{"type": "positive", "text": "ok"}]


@pytest.mark.parametrize("text", ["", "no braces at all", "{not json}", "[1, 2, 3]", '"{" then nothing'])
def test_unusable_text_raises(text):
    with pytest.raises(ResponseParseError):
        extract_json_object(text)


def test_two_separate_objects_are_rejected_not_merged():
    with pytest.raises(ResponseParseError):
        extract_json_object('{"a": 1} and also {"b": 2}')


def test_numeric_strings_use_leading_integer():
    assert parse_leading_int("7/10") == 7
    assert parse_leading_int(" 42 ") == 42
    with pytest.raises(ResponseParseError):
        parse_leading_int("about seventy")


def test_integer_and_float_scores():
    assert normalize_design_roast('{"score": 9}')["score"] == 9
    assert normalize_design_roast('{"score": 6.6}')["score"] == 7


def test_feedback_trimmed_to_three_items():
    text = '{"feedback": [{"type":"positive","text":"a"},{"type":"negative","text":"b"},' \
           '{"type":"warning","text":"c"},{"type":"positive","text":"d"}]}'
    assert [f["text"] for f in normalize_design_roast(text)["feedback"]] == ["a", "b", "c"]


def test_emoji_variation_selector_dropped():
    data = normalize_startup_analysis('{"emoji": "⚠️"}')
    assert data["emoji"] == "⚠"


def test_persona_reply_is_stripped_text():
    assert normalize_persona_reply("  Keep going.\n") == {"response": "Keep going."}
    with pytest.raises(ResponseParseError):
        normalize_persona_reply("   ")


@pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity", "1e999"])
def test_non_finite_numbers_rejected(literal):
    with pytest.raises(ResponseParseError):
        normalize_design_roast('{"score": %s}' % literal)


def test_over_long_digit_string_rejected():
    with pytest.raises(ResponseParseError):
        normalize_startup_analysis('{"marketFit": "%s"}' % ("9" * 5000))


def test_deeply_nested_json_rejected():
    with pytest.raises(ResponseParseError):
        extract_json_object('{"a": ' + "[" * 100000 + "]" * 100000 + "}")
