"""Tests for the plain dictionary source."""

import httpx
import pytest

from models.source_result import SourceStatus
from sources import tdk_client

pytestmark = pytest.mark.unit


def _lookup(run, handler, word="kelime"):
    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await tdk_client.lookup(word, client)

    return run(go())


def test_parse_response_maps_fields(tdk_kelime):
    payload = tdk_client.parse_response(tdk_kelime)

    assert payload.definition == "Anlamlı ses veya ses birliği, söz, sözcük"
    assert payload.type == "isim"
    assert payload.etymology == "Arapça kelime"


def test_examples_are_collected_across_senses_and_capped(tdk_kelime):
    payload = tdk_client.parse_response(tdk_kelime)

    assert payload.examples == (
        "Her kelimesi bir inci tanesiydi.",
        "Bir kelime ile anlattı.",
        "Kelimeyi ağzından kaçırdı.",
    )


def test_missing_optional_fields_become_empty():
    payload = tdk_client.parse_response([{"madde": "su", "anlamlarListe": [{"anlam": "Sıvı"}]}])

    assert payload.definition == "Sıvı"
    assert payload.type == ""
    assert payload.etymology == ""
    assert payload.examples == ()


def test_headword_without_meanings_is_still_a_hit():
    payload = tdk_client.parse_response([{"madde": "su"}])
    assert payload is not None
    assert payload.definition == ""


@pytest.mark.parametrize("data", [{"error": "Sonuç bulunamadı"}, [], [{"lisan": "x"}], None])
def test_no_headword_is_none(data):
    assert tdk_client.parse_response(data) is None


def test_lookup_found(run, kelime_handler):
    result = _lookup(run, kelime_handler)

    assert result.status == SourceStatus.FOUND
    assert result.to_dict()["data"]["type"] == "isim"


def test_lookup_unknown_word_is_not_found(run, kelime_handler):
    result = _lookup(run, kelime_handler, word="qwxz")

    assert result.status == SourceStatus.NOT_FOUND
    assert result.error.code == "not_found"


def test_lookup_malformed_body_is_error(run):
    result = _lookup(run, lambda request: httpx.Response(200, text="<html>bakım</html>"))

    assert result.status == SourceStatus.UPSTREAM_ERROR
    assert result.error.code == "malformed"


def test_lookup_http_error_status(run):
    result = _lookup(run, lambda request: httpx.Response(502))

    assert result.status == SourceStatus.UPSTREAM_ERROR
    assert result.error.code == "http_status"


def test_lookup_transport_error(run):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    result = _lookup(run, handler)

    assert result.status == SourceStatus.UPSTREAM_ERROR
    assert result.error.code == "transport"


def test_lookup_unexpected_shape_is_not_found(run):
    # examples field is a number instead of a list
    data = [{"madde": "su", "anlamlarListe": [{"anlam": "Sıvı", "orneklerListe": 5}]}]
    result = _lookup(run, lambda request: httpx.Response(200, json=data))

    assert result.status == SourceStatus.NOT_FOUND
