"""
Competitor Map

Static lookup of services known to compete with each other, keyed by
canonical service name (see names.canonicalize).

INVARIANT: the map is symmetric. If A lists B then B lists A. The overlap
classifier only looks up one direction per ordered pair, so an asymmetric
map would make classification depend on argument order. Construction
fails loudly when the invariant is broken.
"""

from types import MappingProxyType
from typing import Iterable, Mapping, Optional


class CompetitorMapError(ValueError):
    """The competitor map violates its symmetry invariant."""
    pass


# Each vertical is fully interconnected: every member competes with every other.
COMPETITOR_VERTICALS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "streaming": (
        "netflix", "prime_video", "disney_plus", "apple_tv_plus",
        "hulu", "hbo_max", "paramount_plus",
    ),
    "music": (
        "spotify", "apple_music", "amazon_music", "youtube_music",
        "tidal", "pandora",
    ),
    "cloud_storage": (
        "google_drive", "icloud", "dropbox", "onedrive", "box",
    ),
    "productivity_suites": (
        "microsoft_365", "google_workspace", "apple_iwork",
    ),
    "password_managers": (
        "lastpass", "1password", "bitwarden", "dashlane", "keeper",
    ),
    "vpn": (
        "nordvpn", "expressvpn", "surfshark", "cyberghost", "pia", "protonvpn",
    ),
    "email": (
        "gmail", "outlook", "yahoo_mail", "protonmail",
    ),
    "video_conferencing": (
        "zoom", "teams", "google_meet", "webex", "gotomeeting",
    ),
})


class CompetitorMap:
    """
    Immutable, symmetric competitor lookup.

    Usage:
        competitors = CompetitorMap.from_verticals(COMPETITOR_VERTICALS)
        competitors.are_competitors("netflix", "hulu")  # True
    """

    def __init__(
        self,
        entries: Mapping[str, Iterable[str]],
        verticals: Optional[Mapping[str, str]] = None,
    ):
        """
        Args:
            entries: canonical name -> canonical names of its competitors.
            verticals: optional canonical name -> vertical label.

        Raises:
            CompetitorMapError: If any entry is not mirrored.
        """
        frozen = {name: frozenset(others) for name, others in entries.items()}
        self._validate_symmetry(frozen)
        self._entries: Mapping[str, frozenset[str]] = MappingProxyType(frozen)
        self._verticals: Mapping[str, str] = MappingProxyType(dict(verticals or {}))

    @classmethod
    def from_verticals(
        cls,
        verticals: Mapping[str, Iterable[str]],
    ) -> "CompetitorMap":
        """Build a map where every member of a vertical competes with the rest."""
        entries: dict[str, set[str]] = {}
        labels: dict[str, str] = {}
        for label, members in verticals.items():
            members = tuple(members)
            for name in members:
                entries.setdefault(name, set()).update(
                    other for other in members if other != name
                )
                labels[name] = label
        return cls(entries, labels)

    @staticmethod
    def _validate_symmetry(entries: Mapping[str, frozenset[str]]) -> None:
        missing = [
            (name, other)
            for name, others in entries.items()
            for other in others
            if name not in entries.get(other, frozenset())
        ]
        if missing:
            pairs = ", ".join(f"{a} -> {b}" for a, b in sorted(missing))
            raise CompetitorMapError(f"Competitor map is not symmetric: {pairs}")

    def competitors_of(self, canonical_name: str) -> frozenset[str]:
        """Known competitors of a service, empty if the service is unknown."""
        return self._entries.get(canonical_name, frozenset())

    def are_competitors(self, first: str, second: str) -> bool:
        """One-directional lookup: is ``second`` listed under ``first``?"""
        return second in self.competitors_of(first)

    def vertical_of(self, canonical_name: str) -> Optional[str]:
        return self._verticals.get(canonical_name)

    def __contains__(self, canonical_name: object) -> bool:
        return canonical_name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"CompetitorMap(services={len(self)}, verticals={len(set(self._verticals.values()))})"


DEFAULT_COMPETITOR_MAP = CompetitorMap.from_verticals(COMPETITOR_VERTICALS)
