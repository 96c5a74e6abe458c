"""Tests for the word meaning service."""
import pytest
from unittest.mock import patch, Mock, AsyncMock

import httpx

from scripture_api.services.word_meaning_service import (
    WordMeaningService,
    build_search_query,
    detailed_explanation,
    example_sentences,
    telugu_translation,
    verb_forms,
)


def _mock_client(mock_client_class, response=None, error=None):
    mock_client = AsyncMock()
    if error is not None:
        mock_client.get = AsyncMock(side_effect=error)
    else:
        mock_client.get = AsyncMock(return_value=response)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=None)
    mock_client_class.return_value = mock_client
    return mock_client


def _settings(configured=True):
    return Mock(
        web_search_configured=configured,
        google_search_api_key="key" if configured else "",
        google_search_engine_id="cx" if configured else "",
        external_request_timeout=5.0,
    )


SEARCH_PAYLOAD = {
    "items": [
        {
            "title": "Grace - Wikipedia",
            "snippet": "Grace is the unmerited favour of God.",
            "link": "https://en.wikipedia.org/wiki/Grace",
            "displayLink": "en.wikipedia.org",
        },
    ],
    "searchInformation": {"totalResults": "1200"},
}


class TestLookupHelpers:

    def test_search_query_targets_biblical_sites(self):
        query = build_search_query("grace")

        assert query.startswith('"grace" biblical meaning ')
        assert "site:en.wikipedia.org" in query
        assert "site:biblegateway.com" in query
        assert "site:gotquestions.org" in query

    def test_known_telugu_translation(self):
        assert telugu_translation("Love") == "ప్రేమ"

    def test_unknown_telugu_translation(self):
        assert telugu_translation("covenant") == "covenant (తెలుగు అనువాదం)"

    def test_default_explanation_mentions_word(self):
        assert detailed_explanation("covenant").startswith("covenant is a significant term")

    def test_known_examples(self):
        assert len(example_sentences("love")) > 0

    def test_default_examples_mention_word(self):
        examples = example_sentences("covenant")

        assert len(examples) == 4
        assert all("covenant" in sentence for sentence in examples)


class TestVerbForms:

    def test_irregular(self):
        assert verb_forms("go") == ("go", "went", "gone", "going", "goes")

    def test_irregular_is_case_insensitive(self):
        assert verb_forms("Give")[1] == "gave"

    def test_regular(self):
        assert verb_forms("walk") == ("walk", "walked", "walked", "walking", "walks")

    def test_silent_e(self):
        assert verb_forms("shine") == ("shine", "shined", "shined", "shining", "shines")

    def test_consonant_y(self):
        assert verb_forms("cry") == ("cry", "cried", "cried", "crying", "cries")

    def test_doubled_final_consonant(self):
        assert verb_forms("stop") == ("stop", "stopped", "stopped", "stopping", "stops")

    def test_sibilant_ending(self):
        assert verb_forms("reach")[4] == "reaches"


class TestSearchBiblicalSites:

    @pytest.mark.asyncio
    @patch("scripture_api.services.word_meaning_service.get_settings")
    async def test_not_configured(self, mock_settings):
        mock_settings.return_value = _settings(configured=False)

        assert await WordMeaningService.search_biblical_sites("grace") is None

    @pytest.mark.asyncio
    @patch("scripture_api.services.word_meaning_service.CacheService")
    @patch("scripture_api.services.word_meaning_service.httpx.AsyncClient")
    @patch("scripture_api.services.word_meaning_service.get_settings")
    async def test_success_is_cached(self, mock_settings, mock_client_class, mock_cache):
        mock_settings.return_value = _settings()
        mock_cache.get_word_search.return_value = None
        response = Mock(status_code=200)
        response.json.return_value = SEARCH_PAYLOAD
        client = _mock_client(mock_client_class, response)

        result = await WordMeaningService.search_biblical_sites("grace", "Eph 2:8")

        assert result["total_results"] == 1200
        assert result["results"][0]["source"] == "en.wikipedia.org"
        assert client.get.call_args[1]["params"]["num"] == 5
        mock_cache.set_word_search.assert_called_once_with("grace", "Eph 2:8", result)

    @pytest.mark.asyncio
    @patch("scripture_api.services.word_meaning_service.CacheService")
    @patch("scripture_api.services.word_meaning_service.httpx.AsyncClient")
    @patch("scripture_api.services.word_meaning_service.get_settings")
    async def test_cache_hit_skips_request(self, mock_settings, mock_client_class, mock_cache):
        mock_settings.return_value = _settings()
        mock_cache.get_word_search.return_value = {"results": [], "total_results": 0}

        result = await WordMeaningService.search_biblical_sites("grace")

        assert result == {"results": [], "total_results": 0}
        mock_client_class.assert_not_called()

    @pytest.mark.asyncio
    @patch("scripture_api.services.word_meaning_service.CacheService")
    @patch("scripture_api.services.word_meaning_service.httpx.AsyncClient")
    @patch("scripture_api.services.word_meaning_service.get_settings")
    async def test_non_200(self, mock_settings, mock_client_class, mock_cache):
        mock_settings.return_value = _settings()
        mock_cache.get_word_search.return_value = None
        _mock_client(mock_client_class, Mock(status_code=403))

        assert await WordMeaningService.search_biblical_sites("grace") is None

    @pytest.mark.asyncio
    @patch("scripture_api.services.word_meaning_service.CacheService")
    @patch("scripture_api.services.word_meaning_service.httpx.AsyncClient")
    @patch("scripture_api.services.word_meaning_service.get_settings")
    async def test_timeout(self, mock_settings, mock_client_class, mock_cache):
        mock_settings.return_value = _settings()
        mock_cache.get_word_search.return_value = None
        _mock_client(mock_client_class, error=httpx.ReadTimeout("timed out"))

        assert await WordMeaningService.search_biblical_sites("grace") is None
        mock_cache.set_word_search.assert_not_called()

    @pytest.mark.asyncio
    @patch("scripture_api.services.word_meaning_service.CacheService")
    @patch("scripture_api.services.word_meaning_service.httpx.AsyncClient")
    @patch("scripture_api.services.word_meaning_service.get_settings")
    async def test_no_items(self, mock_settings, mock_client_class, mock_cache):
        mock_settings.return_value = _settings()
        mock_cache.get_word_search.return_value = None
        response = Mock(status_code=200)
        response.json.return_value = {"searchInformation": {"totalResults": "0"}}
        _mock_client(mock_client_class, response)

        assert await WordMeaningService.search_biblical_sites("zzzz") is None


class TestAnalyze:

    @pytest.mark.asyncio
    @patch("scripture_api.services.word_meaning_service.get_settings")
    @patch.object(WordMeaningService, "search_biblical_sites", new_callable=AsyncMock)
    async def test_with_web_results(self, mock_search, mock_settings):
        mock_settings.return_value = _settings()
        mock_search.return_value = {"results": [{"title": "a"}, {"title": "b"}], "total_results": 40}

        result = await WordMeaningService().analyze("  grace ", "Eph 2:8")

        assert result["word"] == "grace"
        assert result["source"] == "web_search_biblical_sites"
        assert result["results_count"] == 2
        assert result["total_web_results"] == 40
        assert result["telugu_translation"] == "కృప"
        mock_search.assert_awaited_once_with("grace", "Eph 2:8")

    @pytest.mark.asyncio
    @patch("scripture_api.services.word_meaning_service.get_settings")
    @patch.object(WordMeaningService, "search_biblical_sites", new_callable=AsyncMock)
    async def test_configured_without_results(self, mock_search, mock_settings):
        mock_settings.return_value = _settings()
        mock_search.return_value = None

        result = await WordMeaningService().analyze("grace")

        assert result["source"] == "enhanced_biblical_analysis"
        assert result["results_count"] == 5
        assert result["web_search_results"] is None

    @pytest.mark.asyncio
    @patch("scripture_api.services.word_meaning_service.get_settings")
    @patch.object(WordMeaningService, "search_biblical_sites", new_callable=AsyncMock)
    async def test_not_configured(self, mock_search, mock_settings):
        mock_settings.return_value = _settings(configured=False)
        mock_search.return_value = None

        result = await WordMeaningService().analyze("walk")

        assert result["source"] == "structured_biblical_reference"
        assert result["results_count"] == 0
        assert result["verb_forms"] == "walk, walked, walked, walking, walks"
        assert result["search_query"] == build_search_query("walk")

    def test_fallback(self):
        result = WordMeaningService.fallback(" grace ")

        assert result["word"] == "grace"
        assert result["source"] == "fallback_analysis"
        assert result["error"] == "Service temporarily unavailable"
        assert result["results_count"] == 0
