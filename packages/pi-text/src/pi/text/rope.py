"""Chunked rope addressed by UTF-8 byte offsets.

Nodes live in an arena (a plain list) and refer to their children by
index. Leaves hold up to ``leaf_size`` chars of text; internal nodes
hold up to ``max_children`` child indices and the summed metrics of
their subtree. All leaves sit at the same depth.

A ``\\r\\n`` pair is never split across two leaves, so line breaks can
be counted per leaf.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator

from pi.text.config import get_text_config
from pi.text.errors import ByteIndexOutOfBounds, InvalidRange, RowIndexOutOfBounds
from pi.text.utils import byte_len, count_line_breaks

logger = logging.getLogger(__name__)

_BREAK_RE = re.compile(r"\r\n|\r|\n")


class _Node:
    __slots__ = ("text", "children", "nbytes", "nchars", "nbreaks")

    def __init__(self, text: str = "", children: list[int] | None = None) -> None:
        self.text = text
        self.children = children
        self.nbytes = 0
        self.nchars = 0
        self.nbreaks = 0

    @property
    def is_leaf(self) -> bool:
        return self.children is None


def _char_offset(text: str, byte: int) -> int:
    """Char index of *byte* inside *text*."""
    try:
        return len(text.encode("utf-8")[:byte].decode("utf-8"))
    except UnicodeDecodeError as e:
        raise InvalidRange(f"byte {byte} is not on a char boundary") from e


class Rope:
    """Balanced tree of text chunks."""

    def __init__(
        self,
        text: str = "",
        leaf_size: int | None = None,
        max_children: int | None = None,
    ) -> None:
        config = get_text_config()
        self._leaf_size = max(leaf_size or config.rope_leaf_size, 4)
        self._max_children = max(max_children or config.rope_max_children, 2)
        self._nodes: list[_Node | None] = []
        self._free: list[int] = []
        self._root = self._build(text)

    # ------------------------------------------------------------------
    # Arena
    # ------------------------------------------------------------------

    def _node(self, idx: int) -> _Node:
        node = self._nodes[idx]
        assert node is not None, f"dangling rope node {idx}"
        return node

    def _alloc(self, node: _Node) -> int:
        if self._free:
            idx = self._free.pop()
            self._nodes[idx] = node
        else:
            idx = len(self._nodes)
            self._nodes.append(node)
        return idx

    def _release(self, idx: int) -> None:
        stack = [idx]
        while stack:
            i = stack.pop()
            node = self._node(i)
            if node.children:
                stack.extend(node.children)
            self._nodes[i] = None
            self._free.append(i)

    def _alloc_leaf(self, text: str) -> int:
        idx = self._alloc(_Node(text))
        self._set_leaf(idx, text)
        return idx

    def _set_leaf(self, idx: int, text: str) -> None:
        node = self._node(idx)
        node.text = text
        node.nbytes = byte_len(text)
        node.nchars = len(text)
        node.nbreaks = count_line_breaks(text)

    def _update(self, idx: int) -> None:
        node = self._node(idx)
        assert node.children is not None
        node.nbytes = node.nchars = node.nbreaks = 0
        for child in node.children:
            c = self._node(child)
            node.nbytes += c.nbytes
            node.nchars += c.nchars
            node.nbreaks += c.nbreaks

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _split_text(self, text: str) -> list[str]:
        if len(text) <= self._leaf_size:
            return [text]
        step = self._leaf_size // 2
        chunks = []
        i = 0
        while i < len(text):
            j = min(i + step, len(text))
            if j < len(text) and text[j - 1] == "\r" and text[j] == "\n":
                j += 1
            chunks.append(text[i:j])
            i = j
        return chunks

    def _group(self, ids: list[int]) -> list[int]:
        """Wrap *ids* into as few evenly filled parents as possible."""
        n_groups = -(-len(ids) // self._max_children)
        size, extra = divmod(len(ids), n_groups)
        parents = []
        i = 0
        for g in range(n_groups):
            j = i + size + (1 if g < extra else 0)
            idx = self._alloc(_Node(children=ids[i:j]))
            self._update(idx)
            parents.append(idx)
            i = j
        return parents

    def _build(self, text: str) -> int:
        ids = [self._alloc_leaf(chunk) for chunk in self._split_text(text)]
        while len(ids) > 1:
            ids = self._group(ids)
        if len(self._nodes) > 1:
            logger.debug("Built rope: %d nodes, %d bytes", len(self._nodes), self._node(ids[0]).nbytes)
        return ids[0]

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    def len_bytes(self) -> int:
        return self._node(self._root).nbytes

    def len_chars(self) -> int:
        return self._node(self._root).nchars

    def len_lines(self) -> int:
        """Number of lines. An empty rope has one line."""
        return self._node(self._root).nbreaks + 1

    def _check_byte(self, byte: int) -> None:
        if byte < 0 or byte > self.len_bytes():
            raise ByteIndexOutOfBounds(byte, self.len_bytes())

    def line_to_byte(self, line: int) -> int:
        """Byte offset where *line* starts. ``len_lines()`` maps to the end."""
        if line < 0 or line > self.len_lines():
            raise RowIndexOutOfBounds(line, self.len_lines())
        if line == 0:
            return 0
        if line == self.len_lines():
            return self.len_bytes()

        k = line
        acc = 0
        node = self._node(self._root)
        while node.children is not None:
            for child in node.children:
                c = self._node(child)
                if k <= c.nbreaks:
                    node = c
                    break
                k -= c.nbreaks
                acc += c.nbytes
        for n, m in enumerate(_BREAK_RE.finditer(node.text), 1):
            if n == k:
                return acc + byte_len(node.text[: m.end()])
        raise AssertionError("line break count out of sync")

    def byte_to_line(self, byte: int) -> int:
        """Line containing *byte*. A byte inside ``\\r\\n`` stays on its line."""
        self._check_byte(byte)
        lines = 0
        node = self._node(self._root)
        while node.children is not None:
            last = len(node.children) - 1
            for i, child in enumerate(node.children):
                c = self._node(child)
                if byte < c.nbytes or i == last:
                    node = c
                    break
                byte -= c.nbytes
                lines += c.nbreaks
        data = node.text.encode("utf-8")
        prefix = data[:byte]
        lines += prefix.count(b"\n") + prefix.count(b"\r") - prefix.count(b"\r\n")
        if prefix.endswith(b"\r") and data[byte : byte + 1] == b"\n":
            lines -= 1
        return lines

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def _slice_bytes(self, start: int, end: int) -> bytes:
        if start >= end:
            return b""
        parts: list[bytes] = []
        stack = [(self._root, 0)]
        while stack:
            idx, offset = stack.pop()
            node = self._node(idx)
            if offset >= end or offset + node.nbytes <= start:
                continue
            if node.children is None:
                data = node.text.encode("utf-8")
                parts.append(data[max(start - offset, 0) : end - offset])
                continue
            pending = []
            for child in node.children:
                pending.append((child, offset))
                offset += self._node(child).nbytes
            stack.extend(reversed(pending))
        return b"".join(parts)

    def slice(self, start: int, end: int) -> str:
        """Text between two byte offsets."""
        if start > end:
            raise InvalidRange(f"byte range {start}..{end} is reversed")
        self._check_byte(start)
        self._check_byte(end)
        try:
            return self._slice_bytes(start, end).decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidRange(f"byte range {start}..{end} splits a char") from e

    def line(self, line: int) -> str:
        """Text of *line* including its line break."""
        if line < 0 or line >= self.len_lines():
            raise RowIndexOutOfBounds(line, self.len_lines())
        return self.slice(self.line_to_byte(line), self.line_to_byte(line + 1))

    def chunks(self) -> Iterator[str]:
        stack = [self._root]
        while stack:
            node = self._node(stack.pop())
            if node.children is None:
                if node.text:
                    yield node.text
            else:
                stack.extend(reversed(node.children))

    def __str__(self) -> str:
        return "".join(self.chunks())

    def __len__(self) -> int:
        return self.len_chars()

    def depth(self) -> int:
        d = 1
        node = self._node(self._root)
        while node.children:
            node = self._node(node.children[0])
            d += 1
        return d

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def insert(self, byte: int, text: str) -> None:
        """Insert *text* at a byte offset."""
        self._check_byte(byte)
        if not text:
            return
        self._raw_insert(byte, text)
        self._fix_seam(byte)
        self._fix_seam(byte + byte_len(text))

    def remove(self, start: int, end: int) -> None:
        """Remove the bytes ``start..end``."""
        if start > end:
            raise InvalidRange(f"byte range {start}..{end} is reversed")
        self._check_byte(start)
        self._check_byte(end)
        if start == end:
            return
        self._raw_remove(start, end)
        self._fix_seam(start)

    def _raw_insert(self, byte: int, text: str) -> None:
        ids = self._insert_at(self._root, byte, text)
        while len(ids) > 1:
            ids = self._group(ids)
        self._root = ids[0]

    def _insert_at(self, idx: int, byte: int, text: str) -> list[int]:
        node = self._node(idx)
        if node.children is None:
            at = _char_offset(node.text, byte)
            new_text = node.text[:at] + text + node.text[at:]
            chunks = self._split_text(new_text)
            self._set_leaf(idx, chunks[0])
            return [idx] + [self._alloc_leaf(chunk) for chunk in chunks[1:]]

        last = len(node.children) - 1
        for i, child in enumerate(node.children):
            c = self._node(child)
            if byte <= c.nbytes or i == last:
                node.children[i : i + 1] = self._insert_at(child, byte, text)
                break
            byte -= c.nbytes
        return self._finish(idx)

    def _finish(self, idx: int) -> list[int]:
        """Refresh metrics of *idx*, splitting it when it has too many children."""
        node = self._node(idx)
        assert node.children is not None
        if len(node.children) <= self._max_children:
            self._update(idx)
            return [idx]
        children = node.children
        n_groups = -(-len(children) // self._max_children)
        size = -(-len(children) // n_groups)
        node.children = children[:size]
        self._update(idx)
        ids = [idx]
        for i in range(size, len(children), size):
            new = self._alloc(_Node(children=children[i : i + size]))
            self._update(new)
            ids.append(new)
        return ids

    def _raw_remove(self, start: int, end: int) -> None:
        self._remove_at(self._root, start, end)
        root = self._node(self._root)
        while root.children is not None and len(root.children) == 1:
            old = self._root
            self._root = root.children[0]
            root.children = []
            self._release(old)
            root = self._node(self._root)
        if root.children is not None and not root.children:
            self._release(self._root)
            self._root = self._alloc_leaf("")

    def _remove_at(self, idx: int, start: int, end: int) -> None:
        node = self._node(idx)
        if node.children is None:
            a = _char_offset(node.text, start)
            b = _char_offset(node.text, end)
            self._set_leaf(idx, node.text[:a] + node.text[b:])
            return

        keep: list[int] = []
        offset = 0
        for child in node.children:
            c = self._node(child)
            cs, ce = offset, offset + c.nbytes
            offset = ce
            if ce <= start or cs >= end:
                keep.append(child)
            elif start <= cs and ce <= end:
                self._release(child)
            else:
                self._remove_at(child, max(start, cs) - cs, min(end, ce) - cs)
                keep.append(child)
        node.children = self._compact(keep)
        self._update(idx)

    def _compact(self, children: list[int]) -> list[int]:
        """Drop empty children and merge neighbouring small leaves."""
        out: list[int] = []
        for child in children:
            c = self._node(child)
            if c.nbytes == 0:
                self._release(child)
                continue
            if out and c.children is None:
                prev = self._node(out[-1])
                if prev.children is None and prev.nchars + c.nchars <= self._leaf_size:
                    self._set_leaf(out[-1], prev.text + c.text)
                    self._release(child)
                    continue
            out.append(child)
        return out

    def _fix_seam(self, byte: int) -> None:
        """Pull a ``\\n`` into the leaf of a preceding ``\\r``."""
        if 0 < byte < self.len_bytes() and self._slice_bytes(byte - 1, byte + 1) == b"\r\n":
            self._raw_remove(byte, byte + 1)
            self._raw_insert(byte, "\n")
