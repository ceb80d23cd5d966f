import json

import pytest
from pydantic import ValidationError

from platesnap.errors import UpstreamContractViolation
from platesnap.schemas.responses import AnalysisResult
from platesnap.utils.model_output import parse_analysis, strip_code_fence


@pytest.mark.parametrize("raw, expected", [
    ('{"items": []}', '{"items": []}'),
    ('  \n{"items": []}\n ', '{"items": []}'),
    ('```json\n{"items": []}\n```', '{"items": []}'),
    ('```\n{"items": []}\n```', '{"items": []}'),
    ('```json\n{"items": []}', '{"items": []}'),
    ('```json\n{\n  "items": []\n}\n  ```  ', '{\n  "items": []\n}'),
    ('```', ''),
])
def test_strip_code_fence(raw, expected):
    assert strip_code_fence(raw) == expected


def test_fence_only_stripped_at_start():
    text = 'Here you go:\n```json\n{"items": []}\n```'
    assert strip_code_fence(text) == text


def test_parse_fenced_reply():
    raw = '```json\n{"items":[{"name":"apple","estimatedGrams":150}]}\n```'
    assert parse_analysis(raw) == {"items": [{"name": "apple", "estimatedGrams": 150}]}


def test_parse_keeps_nulls_and_floats():
    raw = '{"items":[{"name":"rice","estimatedGrams":null},{"name":"egg","estimatedGrams":52.5}]}'
    result = parse_analysis(raw)
    assert result["items"][0]["estimatedGrams"] is None
    assert result["items"][1]["estimatedGrams"] == 52.5


def test_unparseable_reply_includes_raw_preview():
    raw = "I see a sandwich. " + "x" * 1000
    with pytest.raises(UpstreamContractViolation) as exc_info:
        parse_analysis(raw)

    message = exc_info.value.message
    assert message.startswith("Failed to parse response as valid JSON. Raw response: I see a sandwich.")
    assert message.endswith(raw[:500])
    assert raw[:501] not in message


@pytest.mark.parametrize("raw", [
    '{"items":[{"name":"apple","estimatedGrams":NaN}]}',
    '{"items":[{"name":"apple","estimatedGrams":Infinity}]}',
])
def test_non_finite_literals_are_not_json(raw):
    with pytest.raises(UpstreamContractViolation, match="Failed to parse"):
        parse_analysis(raw)


@pytest.mark.parametrize("raw, fragment", [
    ('[{"name":"apple","estimatedGrams":1}]', "expected an object"),
    ('null', "expected an object"),
    ('{"food":[]}', "'items' to be an array"),
    ('{"items":{"name":"apple"}}', "'items' to be an array"),
    ('{"items":["apple"]}', "each item must be an object"),
    ('{"items":[{"estimatedGrams":1}]}', "'name' string property"),
    ('{"items":[{"name":7,"estimatedGrams":1}]}', "'name' string property"),
    ('{"items":[{"name":"apple","estimatedGrams":"150"}]}', "'estimatedGrams' must be"),
    ('{"items":[{"name":"apple","estimatedGrams":-1}]}', "'estimatedGrams' must be"),
    ('{"items":[{"name":"apple","estimatedGrams":true}]}', "'estimatedGrams' must be"),
    ('{"items":[{"name":"apple"}]}', "'estimatedGrams' must be"),
    ('{"items":[{"name":"apple","estimatedGrams":1e400}]}', "'estimatedGrams' must be"),
])
def test_shape_violations_fail_closed(raw, fragment):
    with pytest.raises(UpstreamContractViolation) as exc_info:
        parse_analysis(raw)
    assert "Invalid response structure" in exc_info.value.message
    assert fragment in exc_info.value.message


def test_one_bad_item_rejects_whole_result():
    raw = json.dumps({"items": [
        {"name": "apple", "estimatedGrams": 150},
        {"name": "pear", "estimatedGrams": "a lot"},
    ]})
    with pytest.raises(UpstreamContractViolation):
        parse_analysis(raw)


def test_analysis_result_survives_json_round_trip():
    result = {"items": [
        {"name": "apple", "estimatedGrams": 150},
        {"name": "soup", "estimatedGrams": 310.25},
        {"name": "bread", "estimatedGrams": None},
        {"name": "salt", "estimatedGrams": 0},
    ]}
    again = json.loads(json.dumps(result))

    assert again == result
    assert type(again["items"][0]["estimatedGrams"]) is int
    assert AnalysisResult.model_validate(again).model_dump() == result


def test_analysis_result_model_does_not_coerce():
    with pytest.raises(ValidationError):
        AnalysisResult.model_validate({"items": [{"name": "apple", "estimatedGrams": "150"}]})
    with pytest.raises(ValidationError):
        AnalysisResult.model_validate({"items": [{"name": "apple", "estimatedGrams": -3}]})


def test_huge_integer_grams_is_accepted():
    grams = int("1" * 400)
    raw = '{"items":[{"name":"a","estimatedGrams":%d}]}' % grams

    assert parse_analysis(raw) == {"items": [{"name": "a", "estimatedGrams": grams}]}
