"""Client for the authenticated remote vocabulary API."""

import asyncio
from typing import Any, Dict, List, NamedTuple, Optional, Protocol

import aiohttp
import structlog
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential_jitter,
    retry_if_exception_type,
)

from .config import (
    API_PAGE_SIZE,
    AUTH_URL,
    LOGIN_TIMEOUT,
    MEANINGS_BATCH_SIZE,
    MEANINGS_URL,
    PAGE_TIMEOUT,
    RETRY_ATTEMPTS,
    WORDSET_WORDS_URL,
    WORDSETS_URL,
)
from .errors import SourceUnavailable
from .models import Credentials, RawPair
from .utils import chunked, clean_text, unique

log = structlog.get_logger()


class MemberPage(NamedTuple):
    """One page of meaning ids belonging to a word set."""

    meaning_ids: List[int]
    last_page: int


class VocabularyProvider(Protocol):
    """Credential-gated source of word sets and meanings."""

    async def login(self, login: str, password: str) -> Optional[str]:
        ...

    async def list_sets(self, token: str, student_id: str) -> List[int]:
        ...

    async def list_set_members(self, token: str, student_id: str, set_id: int, page: int) -> MemberPage:
        ...

    async def resolve_meanings(self, token: str, meaning_ids: List[int]) -> List[Dict[str, Any]]:
        ...


def create_api_retry_decorator():
    """Create a retry decorator for transient network failures."""
    return retry(
        stop=stop_after_attempt(RETRY_ATTEMPTS),
        wait=wait_exponential_jitter(initial=1, max=10, jitter=1),
        retry=retry_if_exception_type((
            aiohttp.ClientConnectionError,
            asyncio.TimeoutError,
        )),
        reraise=True,
    )


class HttpVocabularyProvider:
    """``VocabularyProvider`` backed by the Skyeng words and dictionary APIs."""

    def __init__(self, session: aiohttp.ClientSession):
        self.session = session

    @create_api_retry_decorator()
    async def _request_json(self, method: str, url: str, timeout: float, token: Optional[str] = None, **kwargs):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        async with self.session.request(
            method,
            url,
            headers=headers,
            timeout=aiohttp.ClientTimeout(total=timeout),
            **kwargs
        ) as response:
            if response.status != 200:
                raise SourceUnavailable(f"{method} {url} returned {response.status}")
            return await response.json(content_type=None)

    async def login(self, login: str, password: str) -> Optional[str]:
        data = await self._request_json(
            "POST", AUTH_URL, LOGIN_TIMEOUT,
            json={"username": login, "password": password},
        )
        return (data or {}).get("token")

    async def list_sets(self, token: str, student_id: str) -> List[int]:
        set_ids = []
        page = 1
        while True:
            data = await self._request_json(
                "GET", WORDSETS_URL, PAGE_TIMEOUT, token=token,
                params={"studentId": student_id, "pageSize": API_PAGE_SIZE, "page": page},
            )
            set_ids.extend(item["id"] for item in data.get("data", []))
            if page >= data.get("meta", {}).get("lastPage", page):
                return set_ids
            page += 1

    async def list_set_members(self, token: str, student_id: str, set_id: int, page: int) -> MemberPage:
        data = await self._request_json(
            "GET", WORDSET_WORDS_URL.format(set_id=set_id), PAGE_TIMEOUT, token=token,
            params={"studentId": student_id, "pageSize": API_PAGE_SIZE, "page": page},
        )
        meaning_ids = [item["meaningId"] for item in data.get("data", [])]
        return MemberPage(meaning_ids, data.get("meta", {}).get("lastPage", page))

    async def resolve_meanings(self, token: str, meaning_ids: List[int]) -> List[Dict[str, Any]]:
        if len(meaning_ids) > MEANINGS_BATCH_SIZE:
            raise ValueError(f"At most {MEANINGS_BATCH_SIZE} meanings per request, got {len(meaning_ids)}")
        return await self._request_json(
            "GET", MEANINGS_URL, PAGE_TIMEOUT, token=token,
            params={"ids": ",".join(str(i) for i in meaning_ids)},
        )


def meaning_to_pair(meaning: Dict[str, Any]) -> Optional[RawPair]:
    """Turn a meaning record into a pair, or None if either side is blank."""
    term = clean_text(meaning.get("text") or "")
    translation = clean_text((meaning.get("translation") or {}).get("text") or "")
    if term and translation:
        return RawPair(term, translation)
    return None


async def _collect_meaning_ids(provider: VocabularyProvider, token: str, student_id: str,
                               set_ids: List[int]) -> List[int]:
    meaning_ids = []
    for set_id in set_ids:
        page = 1
        while True:
            member_page = await provider.list_set_members(token, student_id, set_id, page)
            meaning_ids.extend(member_page.meaning_ids)
            if not member_page.meaning_ids or page >= member_page.last_page:
                break
            page += 1
    return meaning_ids


async def fetch_vocabulary(provider: VocabularyProvider, credentials: Credentials) -> List[RawPair]:
    """Fetch every word of the account's word sets.

    Stages run in order: login, list sets, page through set members, resolve
    meanings in batches. Any failure discards everything fetched so far.
    """
    try:
        token = await provider.login(credentials.login, credentials.password)
        if not token:
            raise SourceUnavailable("Login did not return a session token")

        set_ids = unique(await provider.list_sets(token, credentials.student_id))
        log.info("Word sets listed", count=len(set_ids))

        meaning_ids = unique(await _collect_meaning_ids(provider, token, credentials.student_id, set_ids))
        log.info("Set members listed", count=len(meaning_ids))

        pairs = []
        for batch in chunked(meaning_ids, MEANINGS_BATCH_SIZE):
            meanings = await provider.resolve_meanings(token, list(batch))
            for meaning in meanings:
                pair = meaning_to_pair(meaning)
                if pair:
                    pairs.append(pair)

    except Exception as e:
        log.error("Vocabulary API unavailable", error=str(e), error_type=type(e).__name__)
        return []

    log.info("Vocabulary API fetched", count=len(pairs))
    return pairs


async def fetch_vocabulary_http(credentials: Credentials) -> List[RawPair]:
    """Fetch the account vocabulary over HTTP."""
    async with aiohttp.ClientSession() as session:
        return await fetch_vocabulary(HttpVocabularyProvider(session), credentials)
