"""
Historique undo/redo — pile de commandes générique sur des instantanés immuables.

    past ← [s0, s1]   present = s2   future → [s3]

commit(s) : present → past, present = s, future vidé.
undo()    : sommet de past → present, ancien present → future. None si past vide.
redo()    : miroir de undo sur future/past.

`max_depth` (optionnel) borne la taille de past en supprimant les plus anciens.
"""
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class History(Generic[T]):

    def __init__(self, initial: T, max_depth: Optional[int] = None):
        if max_depth is not None and max_depth < 1:
            raise ValueError("max_depth doit être ≥ 1")
        self._past: List[T] = []
        self._present: T = initial
        self._future: List[T] = []
        self.max_depth = max_depth

    @property
    def present(self) -> T:
        return self._present

    @property
    def can_undo(self) -> bool:
        return bool(self._past)

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    @property
    def depth(self) -> int:
        return len(self._past)

    def commit(self, state: T) -> T:
        self._past.append(self._present)
        if self.max_depth is not None and len(self._past) > self.max_depth:
            del self._past[: len(self._past) - self.max_depth]
        self._present = state
        self._future.clear()
        return state

    def undo(self) -> Optional[T]:
        if not self._past:
            return None
        self._future.append(self._present)
        self._present = self._past.pop()
        return self._present

    def redo(self) -> Optional[T]:
        if not self._future:
            return None
        self._past.append(self._present)
        self._present = self._future.pop()
        return self._present

    def reset(self, state: T) -> None:
        """Nouvelle session sur `state` (historique vidé)."""
        self._past.clear()
        self._future.clear()
        self._present = state
