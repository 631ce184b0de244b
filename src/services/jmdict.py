"""
JMdict-based dictionary index using jmdict-simplified JSON.

Builds the two read-only lookup indices used by the translator:

    kanji_index: {<kanji>: {<kana reading>: <entry key>, ...}, ...}
    kana_index:  {<kana>: {<entry key>: {<sense key>: Sense(pos, glosses), ...}, ...}, ...}

The dictionary is automatically downloaded from the latest release
if not found locally.
"""

import gzip
import http.client
import json
import logging
import re
import urllib.request
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import NamedTuple, Self

from services import settings

logger = logging.getLogger(__name__)

# GitHub API endpoint for latest release
JMDICT_RELEASES_API = "https://api.github.com/repos/scriptin/jmdict-simplified/releases/latest"
JMDICT_DOWNLOAD_PATTERN = r"jmdict-eng-\d+\.\d+\.\d+\.json\.gz"


class Sense(NamedTuple):
    """One meaning of an entry: part-of-speech tag and English glosses."""

    pos: str
    glosses: list[str]


KanjiIndex = dict[str, dict[str, str]]
KanaIndex = dict[str, dict[str, dict[str, Sense]]]


class DictionaryLoadError(ValueError):
    """A dictionary file exists but cannot be read as jmdict-simplified JSON."""


@dataclass
class DictionaryIndex:
    """Kanji and kana lookup tables. Treated as read-only once built."""

    kanji_index: KanjiIndex = field(default_factory=dict)
    kana_index: KanaIndex = field(default_factory=dict)


def _applies(applies_to: list[str] | None, text: str) -> bool:
    """jmdict-simplified restriction lists use "*" for "applies to all"."""
    if not applies_to:
        return True
    return "*" in applies_to or text in applies_to


class JMDictionary:
    """
    Japanese-English dictionary loaded from jmdict-simplified JSON.

    Automatically downloads the latest version if not found.
    """

    def __init__(self, dict_path: Path | str | None = None, auto_download: bool | None = None) -> None:
        """
        Initialize the dictionary.

        Args:
            dict_path: Path to jmdict-eng.json or jmdict-eng.json.gz
                       If None, searches common locations or downloads latest.
            auto_download: Download the latest release when nothing is found
                           locally. Defaults to settings.JMDICT_AUTO_DOWNLOAD.
        """
        self._index = DictionaryIndex()
        self._loaded = False
        self._version: str | None = None
        self._auto_download = settings.JMDICT_AUTO_DOWNLOAD if auto_download is None else auto_download

        if dict_path:
            self._load(Path(dict_path))
        else:
            self._find_and_load()

    def _find_and_load(self) -> None:
        """Find dictionary file in common locations or download if not found."""
        data_dir = settings.DATA_DIR

        search_paths = [
            data_dir / "jmdict-eng.json",
            data_dir / "jmdict-eng.json.gz",
            Path.home() / ".jmdict" / "jmdict-eng.json",
            Path.home() / ".jmdict" / "jmdict-eng.json.gz",
        ]

        # Also search for versioned files
        if data_dir.exists():
            for f in sorted(data_dir.glob("jmdict-eng-*.json*")):
                search_paths.insert(0, f)

        if settings.JMDICT_PATH:
            search_paths.insert(0, settings.JMDICT_PATH)

        for path in search_paths:
            if not path.exists():
                continue
            try:
                self._load(path)
                return
            except DictionaryLoadError as e:
                logger.error("Skipping unreadable dictionary: %s", e)

        if not self._auto_download:
            logger.warning("JMdict not found in %s and auto-download is disabled", data_dir)
            return

        logger.info("JMdict not found locally. Attempting to download latest version...")
        try:
            self._download_latest(data_dir)
        except (OSError, RuntimeError, ValueError, http.client.HTTPException) as e:
            logger.error("Failed to download JMdict: %s", e)
            logger.error(
                "Manual download: curl -L https://github.com/scriptin/jmdict-simplified/releases/latest/"
                "download/jmdict-eng-3.5.0.json.gz -o data/jmdict-eng.json.gz"
            )

    def _get_latest_release_info(self, pattern: str) -> tuple[str, str] | None:
        """
        Get the latest release download URL and version from GitHub API.

        Returns:
            Tuple of (download_url, version) or None if failed.
        """
        req = urllib.request.Request(
            JMDICT_RELEASES_API,
            headers={"User-Agent": "jetranslator", "Accept": "application/vnd.github.v3+json"}
        )
        try:
            with urllib.request.urlopen(req, timeout=30) as response:
                data = json.loads(response.read().decode())
        except (OSError, ValueError, http.client.HTTPException) as e:
            logger.warning("Failed to fetch release info: %s", e)
            return None

        version = data.get("tag_name", "unknown")
        for asset in data.get("assets", []):
            name = asset.get("name", "")
            if re.match(pattern, name):
                return asset.get("browser_download_url"), version

        logger.warning("No English dictionary found in release assets")
        return None

    def _download_latest(self, data_dir: Path) -> None:
        """Download the latest JMdict from GitHub releases."""
        release_info = self._get_latest_release_info(JMDICT_DOWNLOAD_PATTERN)

        if not release_info:
            raise RuntimeError("Could not find latest release info")

        download_url, version = release_info
        logger.info("Downloading JMdict %s...", version)

        data_dir.mkdir(parents=True, exist_ok=True)
        target_path = data_dir / "jmdict-eng.json.gz"
        # Only a complete download is moved to a name the search looks for
        part_path = target_path.with_name(target_path.name + ".part")

        req = urllib.request.Request(download_url, headers={"User-Agent": "jetranslator"})
        try:
            with urllib.request.urlopen(req, timeout=300) as response:
                total_size = int(response.headers.get("Content-Length", 0))
                downloaded = 0
                chunk_size = 1024 * 1024
                next_report = 16 * chunk_size

                with open(part_path, "wb") as f:
                    while True:
                        chunk = response.read(chunk_size)
                        if not chunk:
                            break
                        f.write(chunk)
                        downloaded += len(chunk)
                        if total_size and downloaded >= next_report:
                            next_report += 16 * chunk_size
                            logger.info(
                                "Downloaded %d MB / %d MB",
                                downloaded // chunk_size, total_size // chunk_size,
                            )

            part_path.replace(target_path)
        finally:
            part_path.unlink(missing_ok=True)

        logger.info("Downloaded to %s", target_path)

        self._load(target_path)
        self._version = version

    def _load(self, path: Path) -> None:
        """Load and index the dictionary."""
        logger.info("Loading JMdict from %s...", path)

        match = re.search(r"jmdict-eng-(\d+\.\d+\.\d+)", path.name)
        if match:
            self._version = match.group(1)

        # Truncated gzip raises EOFError rather than OSError
        try:
            if path.suffix == ".gz":
                with gzip.open(path, "rt", encoding="utf-8") as f:
                    data = json.load(f)
            else:
                with open(path, encoding="utf-8") as f:
                    data = json.load(f)
        except (EOFError, OSError, ValueError) as e:
            raise DictionaryLoadError(f"Cannot read {path}: {e}") from e

        if not isinstance(data, dict):
            raise DictionaryLoadError(f"Cannot read {path}: expected a JSON object")

        if "version" in data:
            self._version = data["version"]

        words = data.get("words", [])
        for entry in words:
            self._add_entry(entry)

        self._loaded = True
        version_str = f" (v{self._version})" if self._version else ""
        logger.info(
            "Loaded %d entries (%d kanji, %d kana)%s",
            len(words), len(self._index.kanji_index), len(self._index.kana_index), version_str,
        )

    def _add_entry(self, entry: dict) -> None:
        """Index one jmdict-simplified word under each of its kana readings."""
        kanji_index = self._index.kanji_index
        kana_index = self._index.kana_index
        kanji_forms = [k.get("text", "") for k in entry.get("kanji", []) if k.get("text")]

        for kana in entry.get("kana", []):
            reading = kana.get("text", "")
            if not reading:
                continue

            senses: dict[str, Sense] = {}
            for sense in entry.get("sense", []):
                if not _applies(sense.get("appliesToKana"), reading):
                    continue
                glosses = [g.get("text", "") for g in sense.get("gloss", []) if g.get("text")]
                pos = ",".join(sense.get("partOfSpeech", []))
                senses[f"sense_{len(senses) + 1}"] = Sense(pos, glosses)

            entries = kana_index.setdefault(reading, {})
            entry_key = f"entry_{len(entries) + 1}"
            entries[entry_key] = senses

            # First entry seen for a (kanji, reading) pair wins
            for kanji in kanji_forms:
                if _applies(kana.get("appliesToKanji"), kanji):
                    kanji_index.setdefault(kanji, {}).setdefault(reading, entry_key)

    @classmethod
    @lru_cache(maxsize=1)
    def get_instance(cls) -> Self:
        """Get or create a singleton instance."""
        return cls()

    @property
    def index(self) -> DictionaryIndex:
        """The kanji and kana lookup tables."""
        return self._index

    @property
    def is_loaded(self) -> bool:
        """Check if dictionary was successfully loaded."""
        return self._loaded

    @property
    def version(self) -> str | None:
        """Get the JMDict version if known."""
        return self._version
