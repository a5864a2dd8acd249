from __future__ import annotations

import logging

logger = logging.getLogger("wordgrid")


class TrieNode:
    __slots__ = ("ch", "children", "is_terminal")

    def __init__(self, ch: str | None = None):
        self.ch: str | None = ch  # None only for the root
        self.children: dict[str, TrieNode] = {}
        self.is_terminal: bool = False

    @classmethod
    def new_root(cls) -> TrieNode:
        return cls()

    def find_in_children(self, key: str) -> TrieNode | None:
        return self.children.get(key)

    def add_word(self, word: str):
        node = self
        for ch in word:
            child = node.children.get(ch)
            if child is None:
                child = node.children[ch] = TrieNode(ch)
            node = child
        node.is_terminal = True

    def contains_word(self, word: str) -> bool:
        node = self
        for ch in word:
            node = node.children.get(ch)
            if node is None:
                return False
        return node.is_terminal

    def node_count(self) -> int:
        return 1 + sum(child.node_count() for child in self.children.values())

    def leaf_count(self) -> int:
        if not self.children:
            return 1
        return sum(child.leaf_count() for child in self.children.values())

    def max_depth(self) -> int:
        return 1 + max((child.max_depth() for child in self.children.values()), default=0)

    def __repr__(self) -> str:
        return f"TrieNode({self.ch!r}, terminal={self.is_terminal}, children={sorted(self.children)})"


def load_trie(path: str, min_length: int = 3) -> TrieNode:
    root = TrieNode.new_root()
    count = 0
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            word = line.strip().upper()
            if len(word) >= min_length and word.isalpha():
                root.add_word(word)
                count += 1
    logger.info("Loaded %d words from %s (min_length=%d)", count, path, min_length)
    return root
