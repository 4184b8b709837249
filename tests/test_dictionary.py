import threading
from pathlib import Path

import pytest

from wordhunt.dictionary import Dictionary, ReadWriteLock, load_dictionary
from wordhunt.exceptions import DictionaryLoadError


def test_load_lowercases_and_skips_blank_lines(tmp_path):
    dict_file = tmp_path / "words.txt"
    dict_file.write_text("Tear\nTARS\n\n  \nears\r\n", encoding="utf-8")
    dictionary = Dictionary()

    loaded = dictionary.load(dict_file)

    assert loaded == 3
    assert dictionary.word_count == 3
    trie = dictionary.snapshot()
    assert trie.is_word("tear")
    assert trie.is_word("tars")
    assert trie.is_word("ears")
    assert not trie.is_word("Tear")


def test_load_missing_file_is_noop(tmp_path):
    dictionary = Dictionary()
    dictionary.add_words(["top"])

    loaded = load_dictionary(dictionary, tmp_path / "missing.txt")

    assert loaded == 0
    assert dictionary.word_count == 1
    assert dictionary.snapshot().is_word("top")


def test_load_malformed_utf8_raises(tmp_path):
    dict_file = tmp_path / "bad.txt"
    dict_file.write_bytes(b"tear\n\xff\xfe\xfa\n")
    dictionary = Dictionary()

    with pytest.raises(DictionaryLoadError):
        dictionary.load(dict_file)


def test_load_directory_raises(tmp_path):
    dictionary = Dictionary()
    with pytest.raises(DictionaryLoadError):
        dictionary.load(tmp_path)


def test_load_permission_error_raises(tmp_path, monkeypatch):
    dict_file = tmp_path / "words.txt"
    dict_file.write_text("tear\n", encoding="utf-8")

    def deny(self, *args, **kwargs):
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "read_text", deny)
    dictionary = Dictionary()

    with pytest.raises(DictionaryLoadError):
        dictionary.load(dict_file)
    assert dictionary.word_count == 0


def test_loads_accumulate(tmp_path):
    first = tmp_path / "a.txt"
    second = tmp_path / "b.txt"
    first.write_text("ear\n", encoding="utf-8")
    second.write_text("ears\near\n", encoding="utf-8")
    dictionary = Dictionary()

    dictionary.load(first)
    dictionary.load(second)

    assert dictionary.word_count == 2


def test_snapshot_not_affected_by_later_loads():
    dictionary = Dictionary()
    dictionary.add_words(["top"])
    snapshot = dictionary.snapshot()

    dictionary.add_words(["tops"])

    assert not snapshot.is_word("tops")
    assert dictionary.snapshot().is_word("tops")


def test_writer_blocks_readers():
    lock = ReadWriteLock()
    events = []
    writer_holding = threading.Event()
    release_writer = threading.Event()

    def writer():
        with lock.write():
            writer_holding.set()
            release_writer.wait(timeout=5)
            events.append("write done")

    def reader():
        with lock.read():
            events.append("read")

    w = threading.Thread(target=writer)
    w.start()
    assert writer_holding.wait(timeout=5)
    r = threading.Thread(target=reader)
    r.start()
    r.join(timeout=0.1)
    assert events == []

    release_writer.set()
    w.join(timeout=5)
    r.join(timeout=5)
    assert events == ["write done", "read"]


def test_concurrent_readers():
    lock = ReadWriteLock()
    with lock.read():
        # a second reader does not wait for the first
        done = threading.Event()

        def reader():
            with lock.read():
                done.set()

        t = threading.Thread(target=reader)
        t.start()
        assert done.wait(timeout=5)
        t.join(timeout=5)
