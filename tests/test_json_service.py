import io
import json
import math
from dataclasses import dataclass

import pytest
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from typing_extensions import NotRequired, TypedDict
from werkzeug.exceptions import RequestEntityTooLarge
from werkzeug.test import EnvironBuilder
from werkzeug.wrappers import Request

from toolkit.core.exceptions import (
    EmptyBodyError,
    JSONDecodeFailedError,
    JSONSerializationError,
    JSONTooLargeError,
    JSONTypeMismatchError,
    MalformedJSONError,
    MultipleJSONValuesError,
    UnknownJSONFieldError,
)
from toolkit.core.json_errors import classify_json_error


class Foo(BaseModel):
    foo: str


class Tag(BaseModel):
    name: str


class Post(BaseModel):
    title: str
    author_id: int = Field(alias="authorId")
    tags: list[Tag] = Field(default_factory=list)
    main_tag: Tag | None = None


class Strict(BaseModel):
    model_config = ConfigDict(extra="forbid")

    x: int


class TagDict(TypedDict):
    name: str


class PostDict(TypedDict):
    title: str
    tags: list[TagDict]
    main_tag: NotRequired[TagDict]


@dataclass
class Point:
    x: int
    y: int


@dataclass
class Shape:
    name: str
    points: list[Point]


# -------------------------
# Leitura
# -------------------------

def test_decode_single_object(tools, json_request):
    result = tools.read_json(json_request('{"foo": "bar"}'), Foo)

    assert result == Foo(foo="bar")


def test_decode_surrounding_whitespace(tools, json_request):
    assert tools.read_json(json_request('\n  {"foo": "bar"}  \n'), Foo).foo == "bar"


def test_type_mismatch_names_field(tools, json_request):
    with pytest.raises(JSONTypeMismatchError) as exc:
        tools.read_json(json_request('{"foo": 1}'), Foo)

    assert exc.value.field == "foo"


def test_string_is_not_coerced_into_int(tools, json_request):
    with pytest.raises(JSONTypeMismatchError) as exc:
        tools.read_json(json_request('{"title": "t", "authorId": "7"}'), Post)

    assert exc.value.field == "authorId"


def test_two_json_values(tools, json_request):
    with pytest.raises(MultipleJSONValuesError):
        tools.read_json(json_request('{"foo": "bar"}{"foo": "baz"}'), Foo)


def test_trailing_garbage(tools, json_request):
    with pytest.raises(MultipleJSONValuesError):
        tools.read_json(json_request('{"foo": "bar"} trailing'), Foo)


@pytest.mark.parametrize("body", ["", "   \n\t "])
def test_empty_body(tools, json_request, body):
    with pytest.raises(EmptyBodyError):
        tools.read_json(json_request(body), Foo)


def test_unknown_field_rejected_by_default(tools, json_request):
    with pytest.raises(UnknownJSONFieldError) as exc:
        tools.read_json(json_request('{"foo": "bar", "alpha": "beta"}'), Foo)

    assert exc.value.field == "alpha"


def test_unknown_field_allowed(tools, config, json_request):
    config.allow_unknown_json_fields = True

    result = tools.read_json(json_request('{"foo": "bar", "alpha": "beta"}'), Foo)

    assert result.foo == "bar"


def test_unknown_nested_field_reports_path(tools, json_request):
    body = '{"title": "t", "authorId": 1, "tags": [{"name": "a"}, {"name": "b", "color": "red"}]}'

    with pytest.raises(UnknownJSONFieldError) as exc:
        tools.read_json(json_request(body), Post)

    assert exc.value.field == "tags.1.color"


def test_unknown_field_inside_optional_model(tools, json_request):
    body = '{"title": "t", "authorId": 1, "main_tag": {"name": "a", "extra": 1}}'

    with pytest.raises(UnknownJSONFieldError) as exc:
        tools.read_json(json_request(body), Post)

    assert exc.value.field == "main_tag.extra"


def test_alias_is_a_known_field(tools, json_request):
    post = tools.read_json(json_request('{"title": "t", "authorId": 3, "tags": [{"name": "x"}]}'), Post)

    assert post.author_id == 3
    assert post.tags == [Tag(name="x")]


def test_model_forbid_wins_when_unknown_allowed(tools, config, json_request):
    config.allow_unknown_json_fields = True

    with pytest.raises(UnknownJSONFieldError) as exc:
        tools.read_json(json_request('{"x": 1, "y": 2}'), Strict)

    assert exc.value.field == "y"


def test_body_over_limit(tools, config, json_request):
    config.max_json_bytes = 16

    with pytest.raises(JSONTooLargeError) as exc:
        tools.read_json(json_request('{"foo": "a perfectly valid but long value"}'), Foo)

    assert exc.value.status_code == 413


def test_streamed_body_over_limit(tools, config):
    config.max_json_bytes = 16
    builder = EnvironBuilder(method="POST", data=b'{"foo": "' + b"x" * 64 + b'"}', content_type="application/json")
    environ = builder.get_environ()
    environ.pop("CONTENT_LENGTH", None)
    environ["wsgi.input_terminated"] = True
    environ["wsgi.input"] = io.BytesIO(b'{"foo": "' + b"x" * 64 + b'"}')

    with pytest.raises(JSONTooLargeError):
        tools.read_json(Request(environ), Foo)


@pytest.mark.parametrize(
    "body",
    [
        '{"foo": "bar",}',
        '{"foo": ',
        "{'foo': 'bar'}",
        '{"foo": NaN}',
        "[1, 2",
    ],
)
def test_malformed(tools, json_request, body):
    with pytest.raises(MalformedJSONError):
        tools.read_json(json_request(body), Foo)


def test_malformed_reports_offset(tools, json_request):
    with pytest.raises(MalformedJSONError) as exc:
        tools.read_json(json_request('{"foo" "bar"}'), Foo)

    assert exc.value.offset == 7


def test_invalid_utf8(tools, json_request):
    with pytest.raises(MalformedJSONError):
        tools.read_json(json_request(b'{"foo": "\xff"}'), Foo)


def test_missing_required_field_is_generic_failure(tools, json_request):
    with pytest.raises(JSONDecodeFailedError):
        tools.read_json(json_request("{}"), Foo)


def test_non_model_target(tools, json_request):
    assert tools.read_json(json_request("[1, 2, 3]"), list[int]) == [1, 2, 3]


def test_non_model_target_type_mismatch(tools, json_request):
    with pytest.raises(JSONTypeMismatchError) as exc:
        tools.read_json(json_request('[1, "two"]'), list[int])

    assert exc.value.field == "1"


def test_type_mismatch_wins_over_unknown_field(tools, json_request):
    with pytest.raises(JSONTypeMismatchError) as exc:
        tools.read_json(json_request('{"foo": 1, "extra": 2}'), Foo)

    assert exc.value.field == "foo"


def test_unknown_field_wins_over_missing_field(tools, json_request):
    with pytest.raises(UnknownJSONFieldError) as exc:
        tools.read_json(json_request('{"extra": 2}'), Foo)

    assert exc.value.field == "extra"


def test_typeddict_target(tools, json_request):
    body = '{"title": "t", "tags": [{"name": "a"}], "main_tag": {"name": "b"}}'

    assert tools.read_json(json_request(body), PostDict) == {
        "title": "t",
        "tags": [{"name": "a"}],
        "main_tag": {"name": "b"},
    }


@pytest.mark.parametrize(
    ("body", "field"),
    [
        ('{"title": "t", "tags": [], "extra": 1}', "extra"),
        ('{"title": "t", "tags": [{"name": "a", "color": "red"}]}', "tags.0.color"),
        ('{"title": "t", "tags": [], "main_tag": {"name": "b", "size": 2}}', "main_tag.size"),
    ],
)
def test_unknown_field_in_typeddict(tools, json_request, body, field):
    with pytest.raises(UnknownJSONFieldError) as exc:
        tools.read_json(json_request(body), PostDict)

    assert exc.value.field == field


def test_dataclass_target(tools, json_request):
    shape = tools.read_json(json_request('{"name": "tri", "points": [{"x": 0, "y": 1}]}'), Shape)

    assert shape == Shape(name="tri", points=[Point(x=0, y=1)])


@pytest.mark.parametrize(
    ("body", "field"),
    [
        ('{"name": "tri", "points": [], "color": "red"}', "color"),
        ('{"name": "tri", "points": [{"x": 0, "y": 1}, {"x": 2, "y": 3, "z": 4}]}', "points.1.z"),
    ],
)
def test_unknown_field_in_dataclass(tools, json_request, body, field):
    with pytest.raises(UnknownJSONFieldError) as exc:
        tools.read_json(json_request(body), Shape)

    assert exc.value.field == field


def test_unknown_field_allowed_for_dataclass(tools, config, json_request):
    config.allow_unknown_json_fields = True

    shape = tools.read_json(json_request('{"name": "tri", "points": [], "color": "red"}'), Shape)

    assert shape.name == "tri"


# -------------------------
# Classificação
# -------------------------

def test_classify_unknown_field_from_validation():
    with pytest.raises(ValidationError) as exc:
        Strict.model_validate({"x": 1, "zzz": 2})

    err = classify_json_error(exc.value, max_bytes=10)

    assert isinstance(err, UnknownJSONFieldError)
    assert err.field == "zzz"


def test_classify_type_error_has_priority_over_unknown_field():
    with pytest.raises(ValidationError) as exc:
        Strict.model_validate({"x": "nope", "zzz": 2}, strict=True)

    assert isinstance(classify_json_error(exc.value, max_bytes=10), JSONTypeMismatchError)


def test_classify_size_and_empty_and_catch_all():
    assert isinstance(classify_json_error(RequestEntityTooLarge(), max_bytes=10), JSONTooLargeError)

    with pytest.raises(json.JSONDecodeError) as exc:
        json.loads("  ")
    assert isinstance(classify_json_error(exc.value, max_bytes=10), EmptyBodyError)

    assert isinstance(classify_json_error(RuntimeError("?"), max_bytes=10), JSONDecodeFailedError)


def test_classify_returns_json_errors_unchanged():
    err = MultipleJSONValuesError()

    assert classify_json_error(err, max_bytes=10) is err


# -------------------------
# Escrita
# -------------------------

def test_write_json(tools):
    response = tools.write_json({"hello": "world"}, status=201)

    assert response.status_code == 201
    assert response.headers["Content-Type"] == "application/json"
    assert json.loads(response.get_data()) == {"hello": "world"}


def test_write_json_model(tools):
    response = tools.write_json(Post(title="t", authorId=1))

    assert json.loads(response.get_data())["author_id"] == 1


def test_write_json_headers_verbatim_but_content_type_forced(tools):
    response = tools.write_json(
        {"ok": True},
        headers={"X-Request-Id": "abc", "Content-Type": "text/plain", "Vary": ["Origin", "Accept"]},
    )

    assert response.headers["X-Request-Id"] == "abc"
    assert response.headers.getlist("Vary") == ["Origin", "Accept"]
    assert response.headers["Content-Type"] == "application/json"


def test_write_json_unserializable(tools):
    with pytest.raises(JSONSerializationError):
        tools.write_json({"bad": object()})


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_write_json_rejects_non_finite_floats(tools, value):
    with pytest.raises(JSONSerializationError):
        tools.write_json({"x": value})


def test_error_json_default_status(tools):
    response = tools.error_json(ValueError("boom"))

    assert response.status_code == 400
    assert json.loads(response.get_data()) == {"error": True, "message": "boom"}


def test_error_json_custom_status(tools):
    response = tools.error_json("gone", status=410)

    assert response.status_code == 410
    assert json.loads(response.get_data())["message"] == "gone"


def test_error_json_with_headers(tools):
    response = tools.error_json("slow down", status=429, headers={"Retry-After": "30"})

    assert response.status_code == 429
    assert response.headers["Retry-After"] == "30"
    assert response.headers["Content-Type"] == "application/json"
