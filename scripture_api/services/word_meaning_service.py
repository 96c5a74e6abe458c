"""Word meaning analysis: static lookup tables plus an optional web search."""
import logging
import re
from typing import Dict, List, Optional, Tuple

import httpx

from scripture_api.config import get_settings
from scripture_api.services.cache_service import CacheService
from scripture_api.services.word_meaning_data import (
    BIBLICAL_SITES,
    DEFAULT_EXAMPLES,
    DEFAULT_EXPLANATION,
    EXAMPLE_SENTENCES,
    EXPLANATIONS,
    IRREGULAR_VERBS,
    TELUGU_TRANSLATIONS,
)

logger = logging.getLogger(__name__)

BIBLICAL_CONTEXT = "Hebrew/Greek etymological analysis with theological significance"
CONSONANT_VOWEL_CONSONANT = re.compile(r"[^aeiou][aeiou][^aeiou]$")
SIBILANT_ENDINGS = ("s", "sh", "ch", "x", "z")


def _ends_consonant_y(word: str) -> bool:
    return word.endswith("y") and len(word) > 1 and word[-2] not in "aeiou"


def _doubles_final_consonant(word: str) -> bool:
    return bool(CONSONANT_VOWEL_CONSONANT.search(word)) and len(word) > 3


def build_search_query(word: str) -> str:
    sites = " OR ".join(f"site:{site}" for site in BIBLICAL_SITES)
    return f'"{word}" biblical meaning {sites}'


def telugu_translation(word: str) -> str:
    return TELUGU_TRANSLATIONS.get(word.lower(), f"{word} (తెలుగు అనువాదం)")


def detailed_explanation(word: str) -> str:
    return EXPLANATIONS.get(word.lower(), DEFAULT_EXPLANATION.format(word=word))


def example_sentences(word: str) -> List[str]:
    examples = EXAMPLE_SENTENCES.get(word.lower())
    if examples is not None:
        return list(examples)
    return [template.format(word=word) for template in DEFAULT_EXAMPLES]


def verb_forms(word: str) -> Tuple[str, str, str, str, str]:
    """Base, past, past participle, present participle and third person forms."""
    irregular = IRREGULAR_VERBS.get(word.lower())
    if irregular is not None:
        return irregular

    if word.endswith("e"):
        past = word + "d"
    elif _ends_consonant_y(word):
        past = word[:-1] + "ied"
    elif _doubles_final_consonant(word):
        past = word + word[-1] + "ed"
    else:
        past = word + "ed"

    if word.endswith("e"):
        participle = word[:-1] + "ing"
    elif _doubles_final_consonant(word):
        participle = word + word[-1] + "ing"
    else:
        participle = word + "ing"

    if word.endswith(SIBILANT_ENDINGS):
        third_person = word + "es"
    elif _ends_consonant_y(word):
        third_person = word[:-1] + "ies"
    else:
        third_person = word + "s"

    return word, past, past, participle, third_person


class WordMeaningService:
    """Builds the word analysis payload returned by the word meaning route."""

    SEARCH_URL = "https://www.googleapis.com/customsearch/v1"
    MAX_RESULTS = 5

    @staticmethod
    async def search_biblical_sites(word: str, context: str = "biblical") -> Optional[Dict]:
        """
        Search authoritative biblical sites for a word via Google Custom Search.

        Returns:
            {'results': [...], 'total_results': int}, or None when search is not
            configured, fails, or finds nothing.
        """
        settings = get_settings()
        if not settings.web_search_configured:
            return None

        cached = CacheService.get_word_search(word, context)
        if cached is not None:
            return cached

        params = {
            "key": settings.google_search_api_key,
            "cx": settings.google_search_engine_id,
            "q": build_search_query(word),
            "num": WordMeaningService.MAX_RESULTS,
        }

        try:
            async with httpx.AsyncClient(timeout=settings.external_request_timeout) as client:
                response = await client.get(WordMeaningService.SEARCH_URL, params=params)

            if response.status_code != 200:
                logger.warning(f"Custom search API returned status {response.status_code}")
                return None

            data = response.json()
        except httpx.TimeoutException:
            logger.warning(f"Custom search timeout for '{word}'")
            return None
        except Exception as e:
            logger.error(f"Error searching biblical sites for '{word}': {e}")
            return None

        items = data.get("items") or []
        if not items:
            return None

        found = {
            "results": [
                {
                    "title": item.get("title"),
                    "snippet": item.get("snippet"),
                    "link": item.get("link"),
                    "source": item.get("displayLink"),
                }
                for item in items
            ],
            "total_results": int((data.get("searchInformation") or {}).get("totalResults") or 0),
        }
        CacheService.set_word_search(word, context, found)
        return found

    async def analyze(self, word: str, context: str = "biblical") -> dict:
        clean_word = word.strip()
        search = await self.search_biblical_sites(clean_word, context)
        configured = get_settings().web_search_configured

        if search:
            meaning = (
                f'Complete biblical analysis of "{clean_word}" with web search results from authoritative '
                "biblical sources including Wikipedia, BibleGateway, and GotQuestions."
            )
            source = "web_search_biblical_sites"
            results_count = len(search["results"])
        else:
            meaning = (
                f'Complete biblical analysis of "{clean_word}" with Telugu translation, detailed '
                "explanation, and contextual examples."
            )
            source = "enhanced_biblical_analysis" if configured else "structured_biblical_reference"
            results_count = self.MAX_RESULTS if configured else 0

        return {
            "word": clean_word,
            "meaning": meaning,
            "context": context,
            "source": source,
            "results_count": results_count,
            "web_search_results": search["results"] if search else None,
            "total_web_results": search["total_results"] if search else 0,
            "telugu_translation": telugu_translation(clean_word),
            "detailed_explanation": detailed_explanation(clean_word),
            "example_sentences": example_sentences(clean_word),
            "verb_forms": ", ".join(verb_forms(clean_word)),
            "biblical_context": BIBLICAL_CONTEXT,
            "search_query": build_search_query(clean_word),
        }

    @staticmethod
    def fallback(word: str) -> dict:
        """Reduced payload used when the full analysis fails."""
        clean_word = (word or "").strip()
        return {
            "word": clean_word,
            "meaning": f'Basic analysis of "{clean_word}" - service temporarily unavailable',
            "context": "biblical",
            "source": "fallback_analysis",
            "error": "Service temporarily unavailable",
            "results_count": 0,
            "telugu_translation": telugu_translation(clean_word),
            "detailed_explanation": detailed_explanation(clean_word),
            "example_sentences": example_sentences(clean_word),
            "verb_forms": "Verb forms available",
            "biblical_context": "Biblical context available",
        }


word_meaning_service = WordMeaningService()


def get_word_meaning_service() -> WordMeaningService:
    """Dependency injector for the word meaning service."""
    return word_meaning_service
