"""Pick letters: short mnemonics for jumping straight to an element.

Letters are tracked per *set* (for example one per tab page) so the same
element can carry different letters in different contexts. Within a set no
two live elements ever share a letter, and an element keeps its letter for
as long as it lives.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterator, Sequence
from dataclasses import dataclass

from pi.bufferline.types import Element, ElementId

logger = logging.getLogger(__name__)

DEFAULT_ALPHABET = "asdfjkl;ghnmxcvbziowerutyqpASDFJKLGHNMXCVBZIOWERUTYQP"

SetKey = Hashable


@dataclass(frozen=True)
class PickPolicy:
    """Where candidate letters come from.

    With ``prefer_name`` the first ``name_letters`` characters of the
    element name are tried (ASCII letters and digits only) before falling
    back to ``alphabet``.
    """

    alphabet: str = DEFAULT_ALPHABET
    name_letters: int = 1
    prefer_name: bool = True

    def candidates(self, element: Element) -> Iterator[str]:
        seen: set[str] = set()
        if self.prefer_name:
            for ch in element.name[: self.name_letters]:
                if ch.isascii() and ch.isalnum() and ch not in seen:
                    seen.add(ch)
                    yield ch
        for ch in self.alphabet:
            if ch not in seen:
                seen.add(ch)
                yield ch


class PickTable:
    """Two-way letter binding for one set."""

    def __init__(self) -> None:
        self._letters: dict[ElementId, str] = {}
        self._elements: dict[str, ElementId] = {}

    def bind(self, element_id: ElementId, letter: str) -> None:
        owner = self._elements.get(letter)
        if owner is not None and owner != element_id:
            raise ValueError(f"Letter {letter!r} already bound to element {owner}")
        self.unbind(element_id)
        self._letters[element_id] = letter
        self._elements[letter] = element_id

    def unbind(self, element_id: ElementId) -> str | None:
        letter = self._letters.pop(element_id, None)
        if letter is not None:
            del self._elements[letter]
        return letter

    def letter_for(self, element_id: ElementId) -> str | None:
        return self._letters.get(element_id)

    def element_for(self, letter: str) -> ElementId | None:
        return self._elements.get(letter)

    def is_free(self, letter: str) -> bool:
        return letter not in self._elements

    def prune(self, live_ids: set[ElementId]) -> int:
        stale = [eid for eid in self._letters if eid not in live_ids]
        for element_id in stale:
            self.unbind(element_id)
        return len(stale)

    def items(self) -> list[tuple[ElementId, str]]:
        return list(self._letters.items())

    def __len__(self) -> int:
        return len(self._letters)


class PickAssigner:
    """Hands out pick letters per set, keeping existing ones stable."""

    def __init__(self, policy: PickPolicy | None = None) -> None:
        self.policy = policy or PickPolicy()
        self._sets: dict[SetKey, PickTable] = {}

    def assign(
        self, elements: Sequence[Element], set_key: SetKey = "default"
    ) -> dict[ElementId, str]:
        """Give every element in *elements* a letter if one is available.

        Entries for elements not in *elements* are dropped first. Elements
        that already hold a letter keep it; the rest take the first free
        candidate in element order. When the candidates run out the element
        simply gets no letter.
        """
        table = self._sets.setdefault(set_key, PickTable())
        pruned = table.prune({element.id for element in elements})
        if pruned:
            logger.debug("Pruned %d stale pick letters from set %r", pruned, set_key)

        for element in elements:
            if table.letter_for(element.id) is not None:
                continue
            for letter in self.policy.candidates(element):
                if table.is_free(letter):
                    table.bind(element.id, letter)
                    break
            else:
                logger.debug("No pick letter left for %s in set %r", element.name, set_key)

        result: dict[ElementId, str] = {}
        for element in elements:
            letter = table.letter_for(element.id)
            if letter is not None:
                result[element.id] = letter
        return result

    def letter_for(self, element_id: ElementId, set_key: SetKey = "default") -> str | None:
        table = self._sets.get(set_key)
        return table.letter_for(element_id) if table else None

    def element_for(self, letter: str, set_key: SetKey = "default") -> ElementId | None:
        table = self._sets.get(set_key)
        return table.element_for(letter) if table else None

    def release(self, element_id: ElementId, set_key: SetKey | None = None) -> None:
        """Free the letter of a destroyed element, in one set or in all."""
        if set_key is None:
            for table in self._sets.values():
                table.unbind(element_id)
        elif set_key in self._sets:
            self._sets[set_key].unbind(element_id)

    def clear(self, set_key: SetKey | None = None) -> None:
        if set_key is None:
            self._sets.clear()
        else:
            self._sets.pop(set_key, None)

    def sets(self) -> list[SetKey]:
        return list(self._sets)
