from collections import deque
from typing import Deque, List, Set

from symbuild.spec import BuildIndexProtocol, LinkReason, Resolution


class DependencyResolver:
    """
    Computes the link closure of entry-point object files.

    The resolver only reads the index; resolving the same entry point twice
    yields the same membership.
    """

    def __init__(self, index: BuildIndexProtocol):
        self.index = index

    def resolve(self, entry_point: str) -> Resolution:
        """
        Breadth-first walk of the undefined-symbol -> defining-file relation.

        Symbols without a known definer are left to the external linker (they
        are assumed to come from system libraries) and never fail here. Each
        file is visited at most once, so cyclic references terminate. The
        entry point is seeded as visited and therefore never appears in the
        returned dependencies.
        """
        resolution = Resolution(entry_point=entry_point)
        visited: Set[str] = {entry_point}
        unresolved: Set[str] = set()
        queue: Deque[str] = deque([entry_point])

        while queue:
            current = queue.popleft()
            for symbol in self.index.undefined_of(current):
                definer = self.index.definer_of(symbol)
                if definer is None:
                    if symbol not in unresolved:
                        unresolved.add(symbol)
                        resolution.unresolved.append(symbol)
                    continue
                if definer in visited:
                    continue

                visited.add(definer)
                resolution.dependencies.append(definer)
                resolution.reasons[definer] = LinkReason(
                    requested_by=current, symbol=symbol
                )
                # Leaf files have nothing further to pull in.
                if self.index.undefined_of(definer):
                    queue.append(definer)

        return resolution

    def resolve_all(self, entry_points: List[str]) -> List[Resolution]:
        # Entry points never share state, even within one package.
        return [self.resolve(entry_point) for entry_point in entry_points]
