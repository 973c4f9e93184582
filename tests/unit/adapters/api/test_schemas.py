"""
Tests des schemas de payloads TMDB.

Verifie le defaulting a la frontiere de decodage : listes nulles ou absentes
converties en [], champs supplementaires conserves sur les elements, payloads
mal formes traduits en UpstreamError.
"""

import pytest

from cinecache.adapters.api.schemas import (
    CreditsPayload,
    KeywordsPayload,
    LanguageEntry,
    MediaItem,
    MediaPage,
    parse_payload,
    parse_payload_list,
)
from cinecache.core.errors import UpstreamError
from tests.fixtures.tmdb_responses import (
    TMDB_LANGUAGES_RESPONSE,
    TMDB_MOVIE_KEYWORDS_RESPONSE,
    TMDB_POPULAR_MOVIES_RESPONSE,
    TMDB_TV_KEYWORDS_RESPONSE,
)


class TestParsePayload:
    def test_media_page(self) -> None:
        page = parse_payload(MediaPage, TMDB_POPULAR_MOVIES_RESPONSE)

        assert page.total_pages == 10
        assert page.results[0].genre_ids == [28]
        assert page.results[1].backdrop_path is None

    def test_null_lists_become_empty(self) -> None:
        page = parse_payload(MediaPage, {"results": None})
        credits = parse_payload(CreditsPayload, {"cast": None})

        assert page.results == []
        assert credits.cast == []
        assert credits.crew == []

    def test_item_keeps_extra_fields(self) -> None:
        item = parse_payload(MediaItem, {"id": 1, "overview": "Resume", "genre_ids": None})

        dumped = item.model_dump(exclude_unset=True)
        assert dumped["overview"] == "Resume"
        assert item.genre_ids == []

    def test_malformed_payload_raises_upstream_error(self) -> None:
        with pytest.raises(UpstreamError):
            parse_payload(MediaPage, {"results": "not a list"})

    def test_non_mapping_payload_raises_upstream_error(self) -> None:
        with pytest.raises(UpstreamError):
            parse_payload(MediaPage, ["unexpected"])

    def test_keywords_entries_for_movie_and_tv(self) -> None:
        movie = parse_payload(KeywordsPayload, TMDB_MOVIE_KEYWORDS_RESPONSE)
        tv = parse_payload(KeywordsPayload, TMDB_TV_KEYWORDS_RESPONSE)

        assert [k.name for k in movie.entries] == ["loss of loved one", "dream"]
        assert [k.name for k in tv.entries] == ["drug dealer"]


class TestParsePayloadList:
    def test_list_of_languages(self) -> None:
        entries = parse_payload_list(LanguageEntry, TMDB_LANGUAGES_RESPONSE)

        assert [e.iso_639_1 for e in entries] == ["en", "fr"]

    def test_non_list_raises_upstream_error(self) -> None:
        with pytest.raises(UpstreamError):
            parse_payload_list(LanguageEntry, {"iso_639_1": "en"})
