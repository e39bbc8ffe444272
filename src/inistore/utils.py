from collections.abc import MutableMapping
from string import ascii_lowercase, ascii_uppercase
from typing import Iterator, Mapping

_ASCII_FOLD = str.maketrans(ascii_uppercase, ascii_lowercase)


def fold(key: str) -> str:
    """Normalize a key for case-insensitive comparison (ASCII letters only)."""
    return key.translate(_ASCII_FOLD)


class CaseInsensitiveDict[_VT](MutableMapping[str, _VT]):
    """Dict with case-insensitive string keys.

    One physical entry exists per folded key. The original case of a key is the one
    it was first inserted with; overwriting with a differently cased key keeps it.
    Iteration follows insertion order.
    """

    def __init__(self, *args: Mapping[str, _VT]) -> None:
        # folded key -> (original key, value)
        self._data: dict[str, tuple[str, _VT]] = {}
        for arg in args:
            self.update(arg)

    def __setitem__(self, key: str, value: _VT) -> None:
        if not isinstance(key, str):
            raise TypeError(f"Keys must be strings, not {type(key).__name__}.")
        folded = fold(key)
        original = self._data[folded][0] if folded in self._data else key
        self._data[folded] = (original, value)

    def __getitem__(self, key: str) -> _VT:
        return self._data[self._fold(key)][1]

    def __delitem__(self, key: str) -> None:
        del self._data[self._fold(key)]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and fold(key) in self._data

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._data.values())

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        inner = ", ".join(f"{k!r}: {v!r}" for k, v in self._data.values())
        return f"{self.__class__.__name__}({{{inner}}})"

    def original_key(self, key: str) -> str:
        """Get the key with the case it was first inserted with.

        Raises:
            KeyError: If key doesn't exist.
        """
        return self._data[self._fold(key)][0]

    def sorted_items(self) -> list[tuple[str, _VT]]:
        """Items sorted case-insensitively by key."""
        return [self._data[folded] for folded in sorted(self._data)]

    def _fold(self, key: str) -> str:
        if not isinstance(key, str):
            raise KeyError(key)
        return fold(key)
