"""Pick one artifact out of the files an index lists for a project version."""
from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from packaging.tags import Tag, sys_tags

from .errors import InvalidArtifactName, NotFound
from .records import ArtifactKind, ArtifactRecord
from .tags import CompatibilityTag
from .wheel import ArtifactName

SDIST_SELECTOR = "sdist"


def _specificity(tag: CompatibilityTag) -> int:
    """Rank a tag; the larger the number the more widely installable the wheel."""
    if tag.is_universal():
        return 4
    if tag.is_pure():
        return 3
    if tag.is_wildcard_platform():
        return 2
    if tag.is_wildcard_abi():
        return 1
    return 0


class DistributionSelector:
    """Selection strategies over the artifact records of one project version.

    Records whose filename is not a valid wheel name are left out of every
    wheel selection; one corrupt filename never hides a valid match. The
    records are only read.
    """

    def __init__(self, records: Sequence[ArtifactRecord]):
        self.records = tuple(records)

    def _wheels(self) -> Iterator[Tuple[ArtifactRecord, ArtifactName]]:
        for record in self.records:
            if record.kind is not ArtifactKind.BUILT_ARTIFACT:
                continue
            try:
                name = ArtifactName.parse(record.filename)
            except InvalidArtifactName:
                continue
            yield record, name

    def select_source(self) -> Optional[ArtifactRecord]:
        """First source archive, if any."""
        for record in self.records:
            if record.kind is ArtifactKind.SOURCE_ARCHIVE:
                return record
        return None

    def select_exact(self, requested: CompatibilityTag) -> Optional[ArtifactRecord]:
        """The wheel built for exactly ``requested`` with the greatest build tag.

        Wheels without a build tag compare as ``BuildMarker.MINIMUM``. Among
        equal build tags the one listed last wins.
        """
        chosen = None
        chosen_key = None
        for record, name in self._wheels():
            if name.compatibility_tag != requested:
                continue
            if chosen_key is None or name.build_key >= chosen_key:
                chosen, chosen_key = record, name.build_key
        return chosen

    def select_best(self) -> Optional[ArtifactRecord]:
        """The most widely installable wheel, ignoring build tags.

        Universal wheels beat pure wheels, which beat any-platform wheels,
        which beat any-ABI wheels. Everything else ranks equal; among equally
        ranked wheels the first one listed is kept.
        """
        chosen = None
        chosen_rank = -1
        for record, name in self._wheels():
            rank = _specificity(name.compatibility_tag)
            if rank > chosen_rank:
                chosen, chosen_rank = record, rank
        return chosen

    def select_compatible(
        self, supported: Optional[Iterable[Tag]] = None
    ) -> Optional[ArtifactRecord]:
        """The wheel installable on an environment, preferring its best tags.

        Args:
            supported: Tags the environment accepts, most preferred first.
                Defaults to the running interpreter's ``packaging.tags.sys_tags()``.

        Returns:
            The wheel whose best matching tag comes earliest in ``supported``;
            ties go to the greater build tag, then to the first listed. None
            if no wheel is installable.
        """
        priorities: Dict[Tag, int] = {}
        for index, tag in enumerate(sys_tags() if supported is None else supported):
            priorities.setdefault(tag, index)

        chosen = None
        chosen_key = None
        for record, name in self._wheels():
            matches = [priorities[t] for t in name.compatibility_tag.expand() if t in priorities]
            if not matches:
                continue
            key = (-min(matches), name.build_key)
            if chosen_key is None or key > chosen_key:
                chosen, chosen_key = record, key
        return chosen

    def select(self, selector: Optional[str] = None) -> Optional[ArtifactRecord]:
        """Dispatch on a user selector: ``"sdist"``, a compatibility tag, or nothing.

        Raises:
            InvalidCompatibilityTag: If ``selector`` is neither "sdist" nor a tag.
        """
        if selector is None:
            return self.select_best()
        if selector == SDIST_SELECTOR:
            return self.select_source()
        return self.select_exact(CompatibilityTag.from_string(selector))

    def summarize(self) -> str:
        """Describe the kinds of artifact on offer, e.g. "sdist and pure wheel"."""
        sdist = universal = pure = platform = 0
        for record in self.records:
            if record.kind is ArtifactKind.SOURCE_ARCHIVE:
                sdist += 1
        for _, name in self._wheels():
            tag = name.compatibility_tag
            if tag.is_universal():
                universal += 1
            elif tag.is_pure():
                pure += 1
            else:
                platform += 1

        parts: List[str] = []
        if sdist:
            parts.append("sdist")
        if universal:
            parts.append("universal wheel")
        if pure:
            parts.append("pure wheels" if pure > 1 else "pure wheel")
        if platform:
            parts.append("platform-specific wheels" if platform > 1 else "platform-specific wheel")
        return " and ".join(parts)


def require(record: Optional[ArtifactRecord], what: str) -> ArtifactRecord:
    """Return ``record`` or raise :class:`NotFound` naming ``what`` was looked for."""
    if record is None:
        raise NotFound(f"no distribution matches {what}")
    return record
