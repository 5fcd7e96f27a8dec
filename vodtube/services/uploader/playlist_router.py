"""Route uploaded videos into playlists by chapter category."""

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from vodtube.core.logging import get_logger
from vodtube.services.uploader.matcher import category_matches

if TYPE_CHECKING:
    from vodtube.models.vod import Chapter
    from vodtube.models.youtube_config import PlaylistMapping

logger = get_logger(__name__)


def extract_categories(chapters: Iterable["Chapter"]) -> list[str]:
    """Collect distinct chapter categories in chapter order.

    Empty categories are skipped; repeated ones keep their first position.
    Comparison is exact (case-sensitive).
    """
    seen: set[str] = set()
    categories: list[str] = []
    for chapter in chapters:
        if chapter.type and chapter.type not in seen:
            seen.add(chapter.type)
            categories.append(chapter.type)
    return categories


def dedupe_playlist_ids(playlist_ids: Iterable[str]) -> list[str]:
    """Drop repeated playlist IDs, keeping the first occurrence."""
    return list(dict.fromkeys(playlist_ids))


class PlaylistRouter:
    """Select playlists for a video from ordered category mappings.

    Mappings are evaluated in the order given; the relationship
    `YouTubeConfig.playlist_mappings` already yields them by priority,
    highest first. Each mapping contributes its playlist at most once, on its
    first matching category. Two mappings pointing at the same playlist both
    contribute it.

    Example:
        >>> router = PlaylistRouter(config.playlist_mappings)
        >>> router.route(["Minecraft", "Just Chatting"])
        ['PLminecraft', 'PLchatting']
    """

    def __init__(self, mappings: Sequence["PlaylistMapping"]) -> None:
        self.mappings = list(mappings)

    def route(self, categories: Sequence[str]) -> list[str]:
        """Return matching playlist IDs in mapping order.

        Args:
            categories: Distinct chapter categories in chapter order

        Returns:
            Playlist IDs, possibly with duplicates across mappings
        """
        playlist_ids: list[str] = []
        for mapping in self.mappings:
            for category in categories:
                if category_matches(mapping.game_category, category):
                    playlist_ids.append(mapping.playlist_id)
                    break

        logger.debug(
            "Routed playlists",
            categories=list(categories),
            mapping_count=len(self.mappings),
            playlist_ids=playlist_ids,
        )
        return playlist_ids

    def route_chapters(self, chapters: Iterable["Chapter"]) -> list[str]:
        """Return matching playlist IDs for a video's chapters."""
        return self.route(extract_categories(chapters))


__all__ = [
    "PlaylistRouter",
    "dedupe_playlist_ids",
    "extract_categories",
]
