from __future__ import annotations


class TrieNode:
    __slots__ = ("children", "is_word")

    def __init__(self):
        self.children: dict[str, TrieNode] = {}
        self.is_word: bool = False


class Trie:
    """Prefix tree over single characters.

    Board tiles holding several characters ("qu") are matched by walking one
    edge per character, so callers only ever deal in plain strings.
    """

    def __init__(self):
        self.root = TrieNode()
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, word: str) -> bool:
        return self.is_word(word)

    def insert(self, word: str):
        node = self.root
        for ch in word:
            if ch not in node.children:
                node.children[ch] = TrieNode()
            node = node.children[ch]
        if not node.is_word:
            node.is_word = True
            self._size += 1

    def find(self, prefix: str) -> TrieNode | None:
        """Return the node reached by following ``prefix``, or None."""
        node = self.root
        for ch in prefix:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    def has_prefix(self, prefix: str) -> bool:
        return self.find(prefix) is not None

    def is_word(self, word: str) -> bool:
        node = self.find(word)
        return node is not None and node.is_word

    def clone(self) -> Trie:
        """Deep copy with no nodes shared with this trie."""
        copy = Trie()
        copy._size = self._size
        copy.root.is_word = self.root.is_word
        stack = [(self.root, copy.root)]
        while stack:
            src, dst = stack.pop()
            for ch, child in src.children.items():
                new_child = TrieNode()
                new_child.is_word = child.is_word
                dst.children[ch] = new_child
                stack.append((child, new_child))
        return copy
