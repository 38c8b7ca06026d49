"""Best-effort lookup of synonyms, example sentences and transcriptions."""

from typing import Awaitable, Callable, List, NamedTuple, Optional
from urllib.parse import quote

import aiohttp
import structlog
from bs4 import BeautifulSoup

from .config import LOOKUP_TIMEOUT, LOOKUP_URL, MAX_SENTENCES, PROBE_TIMEOUT, PROBE_URL
from .console import Console, Style
from .errors import LookupFailed
from .models import Alternate, Direction, WordEntry
from .utils import clean_text

log = structlog.get_logger()


class LookupResult(NamedTuple):
    sentences: List[str]
    alternates: List[Alternate]
    transcription: str


async def is_reachable(url: str = PROBE_URL, timeout: float = PROBE_TIMEOUT) -> bool:
    """Probe the network once; any error or timeout means unreachable."""
    try:
        async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=timeout)) as session:
            async with session.get(url) as response:
                return response.status < 400
    except Exception as e:
        log.warning("Reachability probe failed", url=url, error=str(e))
        return False


class SentenceLookupClient:
    """Fetches lookup pages for single terms."""

    def __init__(self, url_template: str = LOOKUP_URL, timeout: float = LOOKUP_TIMEOUT):
        self.url_template = url_template
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        self.session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))
        return self

    async def __aexit__(self, *exc_info):
        await self.session.close()
        self.session = None

    async def lookup(self, term: str) -> str:
        url = self.url_template.format(term=quote(term))
        async with self.session.get(url) as response:
            if response.status != 200:
                raise LookupFailed(f"Lookup for {term!r} returned {response.status}")
            return await response.text()


def parse_lookup_page(markup: str, word: WordEntry, max_sentences: int = MAX_SENTENCES) -> LookupResult:
    """Extract sentences, synonyms and a transcription from a lookup page.

    Synonyms without their own translation inherit the word's translation.
    """
    soup = BeautifulSoup(markup, "html.parser")

    sentences = [clean_text(node.get_text()) for node in soup.select("div.sentence")]
    sentences = [s for s in sentences if s][:max_sentences]

    alternates = []
    seen = {word.name.casefold()}
    for node in soup.select("div.synonym"):
        anchor = node.select_one("a")
        name = clean_text((anchor or node).get_text())
        if not name or name.casefold() in seen:
            continue
        seen.add(name.casefold())
        translation_node = node.select_one(".translation")
        translation = clean_text(translation_node.get_text()) if translation_node else ""
        alternates.append(Alternate(name=name, translation=translation or word.translation))

    transcription_node = soup.select_one(".transcription")
    transcription = clean_text(transcription_node.get_text()) if transcription_node else ""

    return LookupResult(sentences, alternates, transcription)


async def enrich_words(words: List[WordEntry], console: Console, offline: bool = False,
                       client: Optional[SentenceLookupClient] = None,
                       probe: Callable[[], Awaitable[bool]] = is_reachable,
                       direction: Direction = Direction.NATIVE_TO_FOREIGN) -> int:
    """Attach lookup data to ``words`` and return how many were enriched.

    Nothing is attempted when offline or when the probe fails. A failed
    lookup leaves that word untouched and moves on to the next one. Progress
    lines show the prompt side of each word so the answer stays hidden.
    """
    if offline:
        log.info("Offline mode, skipping enrichment")
        return 0

    if not await probe():
        console.write_line("Lookup service unreachable, skipping synonyms and sentences", Style.INFO)
        return 0

    client = client or SentenceLookupClient()
    enriched = 0
    async with client:
        for i, word in enumerate(words, start=1):
            console.write_line(f"[{i}/{len(words)}] {direction.prompt(word)}", Style.INFO)
            try:
                result = parse_lookup_page(await client.lookup(word.name), word)
            except Exception as e:
                log.warning("Word lookup failed", word=word.name, error=str(e))
                continue

            word.sentences = result.sentences
            word.alternates = result.alternates
            if result.transcription and not word.transcription:
                word.transcription = result.transcription
            enriched += 1

    log.info("Enrichment completed", total=len(words), enriched=enriched)
    console.write_line()
    return enriched
