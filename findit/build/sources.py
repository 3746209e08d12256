"""Raw source fetching and parsing.

Sources:
- Unicode emoji-test.txt: symbols with qualification status, group, subgroup.
- Unicode CLDR annotations (full + derived) per locale: tts label and keywords.

Downloads go through an on-disk cache so a rebuild with a warm cache reads
exactly the same bytes.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

import httpx

from findit.build.errors import SourceError
from findit.symbols import normalize_symbol

logger = logging.getLogger("findit.build.sources")

SYMBOL_TEST_URL = "https://www.unicode.org/Public/emoji/latest/emoji-test.txt"
CLDR_JSON_BASE_URL = "https://raw.githubusercontent.com/unicode-org/cldr-json/main/cldr-json"

SYMBOL_TEST_CACHE_FILE = "emoji-test.txt"

INCLUDE_STATUSES = frozenset({"fully-qualified", "component"})

_SKIN_TONE_RE = re.compile("[\U0001F3FB-\U0001F3FF]")
# "😀 E1.0 grinning face" after the '#'
_COMMENT_RE = re.compile(r"^(\S+)\s+E(\d+(?:\.\d+)?)\s+(.*)$")


def annotations_url(locale: str) -> str:
    return f"{CLDR_JSON_BASE_URL}/cldr-annotations-full/annotations/{locale}/annotations.json"


def annotations_derived_url(locale: str) -> str:
    return (
        f"{CLDR_JSON_BASE_URL}/cldr-annotations-derived-full/"
        f"annotationsDerived/{locale}/annotations.json"
    )


def strip_skin_tone(symbol: str) -> str:
    return _SKIN_TONE_RE.sub("", symbol)


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SourceEntry:
    symbol: str
    version: str
    name: str
    group: str
    subgroup: str
    status: str


@dataclass(frozen=True)
class Annotation:
    tts: str | None
    keywords: tuple[str, ...]


@dataclass
class LocaleData:
    annotations: dict[str, Annotation] = field(default_factory=dict)
    derived: dict[str, Annotation] = field(default_factory=dict)

    def _entry(self, table: dict[str, Annotation], symbol: str) -> Annotation | None:
        exact = table.get(symbol)
        if exact is not None:
            return exact
        normalized = normalize_symbol(symbol)
        if normalized != symbol:
            return table.get(normalized)
        return None

    def label(self, symbol: str) -> str | None:
        """The tts label, preferring full annotations over derived ones."""
        for table in (self.annotations, self.derived):
            entry = self._entry(table, symbol)
            if entry is not None and entry.tts:
                return entry.tts
        return None

    def names(self, symbol: str) -> list[str]:
        names = []
        for table in (self.annotations, self.derived):
            entry = self._entry(table, symbol)
            if entry is not None and entry.tts:
                names.append(entry.tts)
        return names

    def keywords(self, symbol: str) -> list[str]:
        keywords: list[str] = []
        for table in (self.annotations, self.derived):
            entry = self._entry(table, symbol)
            if entry is not None:
                keywords.extend(entry.keywords)
        return keywords


@dataclass
class SourceSnapshot:
    entries: list[SourceEntry]
    locale_data: dict[str, LocaleData]
    urls: list[str]


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def parse_symbol_test(text: str) -> list[SourceEntry]:
    """Parse emoji-test.txt into entries with an included status."""
    entries: list[SourceEntry] = []
    group: str | None = None
    subgroup: str | None = None

    for line in text.splitlines():
        if not line.strip():
            continue
        if line.startswith("# group:"):
            group = line[len("# group:"):].strip()
            continue
        if line.startswith("# subgroup:"):
            subgroup = line[len("# subgroup:"):].strip()
            continue
        if line.startswith("#") or ";" not in line:
            continue

        data, _, comment = line.partition("#")
        fields = data.split(";")
        if len(fields) < 2:
            continue
        status = fields[1].strip()
        if status not in INCLUDE_STATUSES:
            continue

        match = _COMMENT_RE.match(comment.strip())
        if not match:
            continue

        if not group or not subgroup:
            raise SourceError(f"Missing group/subgroup for symbol entry: {line}")

        try:
            symbol = "".join(chr(int(cp, 16)) for cp in fields[0].split())
        except ValueError as exc:
            raise SourceError(f"Bad code points in line: {line}") from exc

        entries.append(
            SourceEntry(
                symbol=symbol,
                version=match.group(2),
                name=match.group(3).strip(),
                group=group,
                subgroup=subgroup,
                status=status,
            )
        )

    return entries


def parse_annotations(json_text: str, root_key: str) -> dict[str, Annotation]:
    """Parse one CLDR annotations file (root_key: annotations / annotationsDerived)."""
    try:
        parsed = json.loads(json_text)
    except json.JSONDecodeError as exc:
        raise SourceError(f"Invalid JSON in {root_key} file: {exc}") from exc

    root = parsed.get(root_key) if isinstance(parsed, dict) else None
    if not isinstance(root, dict) or not isinstance(root.get("annotations"), dict):
        raise SourceError(f"Missing {root_key}.annotations in CLDR file")

    result: dict[str, Annotation] = {}
    for symbol, data in root["annotations"].items():
        if not isinstance(data, dict):
            raise SourceError(f"Malformed {root_key} entry for {symbol!r}")
        tts = data.get("tts")
        if isinstance(tts, list):
            tts = tts[0] if tts else None
        keywords = data.get("default")
        result[symbol] = Annotation(
            tts=tts,
            keywords=tuple(keywords) if isinstance(keywords, list) else (),
        )
    return result


# ---------------------------------------------------------------------------
# Fetching
# ---------------------------------------------------------------------------

def fetch_text_cached(
    client: httpx.Client | None,
    url: str,
    cache_path: Path,
    offline: bool = False,
) -> str:
    """Return the cached copy of `url`, downloading it on a cache miss."""
    if cache_path.exists():
        return cache_path.read_text(encoding="utf-8")
    if offline or client is None:
        raise SourceError(f"{cache_path} not cached and offline mode is on")

    logger.info("Downloading %s", url)
    try:
        resp = client.get(url)
        resp.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SourceError(
            f"HTTP {exc.response.status_code} while fetching {url}"
        ) from exc
    except httpx.HTTPError as exc:
        raise SourceError(f"Failed to fetch {url}: {exc}") from exc

    cache_path.parent.mkdir(parents=True, exist_ok=True)
    cache_path.write_text(resp.text, encoding="utf-8")
    return resp.text


def load_sources(
    cache_dir: Path,
    locales: tuple[str, ...],
    offline: bool = False,
    client: httpx.Client | None = None,
) -> SourceSnapshot:
    """Fetch (or read cached) symbol list and annotations for every locale."""
    own_client = client is None and not offline
    if own_client:
        client = httpx.Client(timeout=60.0, follow_redirects=True)

    try:
        text = fetch_text_cached(
            client, SYMBOL_TEST_URL, cache_dir / SYMBOL_TEST_CACHE_FILE, offline
        )
        entries = parse_symbol_test(text)
        urls = [SYMBOL_TEST_URL]

        locale_data: dict[str, LocaleData] = {}
        for locale in locales:
            full_text = fetch_text_cached(
                client, annotations_url(locale),
                cache_dir / f"annotations.{locale}.json", offline,
            )
            derived_text = fetch_text_cached(
                client, annotations_derived_url(locale),
                cache_dir / f"annotationsDerived.{locale}.json", offline,
            )
            locale_data[locale] = LocaleData(
                annotations=parse_annotations(full_text, "annotations"),
                derived=parse_annotations(derived_text, "annotationsDerived"),
            )
            urls.extend([annotations_url(locale), annotations_derived_url(locale)])
    finally:
        if own_client:
            client.close()

    logger.info("Loaded %d symbol entries, %d locales", len(entries), len(locale_data))
    return SourceSnapshot(entries=entries, locale_data=locale_data, urls=urls)
