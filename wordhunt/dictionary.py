import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable

from wordhunt.exceptions import DictionaryLoadError
from wordhunt.trie import Trie

logger = logging.getLogger("wordhunt")


class ReadWriteLock:
    """Many concurrent readers or one writer. Waiting writers block new readers."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self):
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class Dictionary:
    """Owned word list shared between loaders and solvers.

    Loads hold the write lock for the whole file; solvers take a private
    snapshot under the read lock and search it without any locking.
    """

    def __init__(self):
        self._trie = Trie()
        self._lock = ReadWriteLock()

    @property
    def word_count(self) -> int:
        with self._lock.read():
            return len(self._trie)

    def load(self, path) -> int:
        """Insert every non-empty line of a UTF-8 file, lowercased.

        A missing file is a no-op. Returns the number of lines inserted.
        """
        path = Path(path)
        with self._lock.write():
            try:
                contents = path.read_text(encoding="utf-8")
            except FileNotFoundError:
                logger.warning("Dictionary file %s does not exist, nothing loaded", path)
                return 0
            except (OSError, UnicodeDecodeError) as e:
                raise DictionaryLoadError(f"Could not read dictionary {path}: {e}") from e

            inserted = 0
            for line in contents.splitlines():
                word = line.strip().lower()
                if word:
                    self._trie.insert(word)
                    inserted += 1

        logger.info("Loaded %d words from %s", inserted, path)
        return inserted

    def add_words(self, words: Iterable[str]) -> int:
        inserted = 0
        with self._lock.write():
            for w in words:
                word = w.strip().lower()
                if word:
                    self._trie.insert(word)
                    inserted += 1
        return inserted

    def snapshot(self) -> Trie:
        with self._lock.read():
            return self._trie.clone()


def load_dictionary(dictionary: Dictionary, path) -> int:
    return dictionary.load(path)
