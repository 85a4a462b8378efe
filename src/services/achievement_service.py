"""Achievements data source for the Achievements page."""

import logging
import uuid
from typing import Any, Optional

from src.config import AppConfig, get_config
from src.models import Achievement
from src.services.document_store import DocumentStore

logger = logging.getLogger(__name__)


class AchievementService:
    """Loads achievements and exposes them with a loading flag.

    ``loading`` stays true until the first successful ``load()``; consumers
    show a loading indicator until then.
    """

    def __init__(self, config: Optional[AppConfig] = None):
        config = config or get_config()
        container = config.cosmosdb.achievements_container if config.cosmosdb else "achievements"
        self._store = DocumentStore("achievements", container, config)
        self._achievements: list[Achievement] = []
        self._loading = True

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def achievements(self) -> list[Achievement]:
        return list(self._achievements)

    async def load(self) -> list[Achievement]:
        """Fetch all achievements, most recent year first."""
        documents = await self._store.list()
        achievements = [_from_document(document) for document in documents]
        achievements.sort(key=_year_sort_key, reverse=True)

        self._achievements = achievements
        self._loading = False
        logger.info(f"Loaded {len(achievements)} achievements")
        return self.achievements

    async def add_achievement(
        self,
        title: str,
        year: str,
        description: str,
        image_url: Optional[str] = None,
        certificate_url: Optional[str] = None,
    ) -> Achievement:
        achievement = Achievement(
            id=str(uuid.uuid4()),
            title=title,
            year=year,
            description=description,
            image_url=image_url,
            certificate_url=certificate_url,
        )
        document = {
            "title": title,
            "year": year,
            "description": description,
            "imageUrl": image_url,
            "certificateUrl": certificate_url,
        }
        # Optional links are omitted rather than stored as null
        await self._store.insert(
            achievement.id,
            {key: value for key, value in document.items() if value is not None},
        )
        if not self._loading:
            self._achievements.append(achievement)
            self._achievements.sort(key=_year_sort_key, reverse=True)
        return achievement

    async def close(self) -> None:
        await self._store.close()

    async def __aenter__(self) -> "AchievementService":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        await self.close()
        return False


def _from_document(document: dict[str, Any]) -> Achievement:
    return Achievement(
        id=document["id"],
        title=document.get("title", ""),
        year=str(document.get("year", "")),
        description=document.get("description", ""),
        image_url=document.get("imageUrl") or None,
        certificate_url=document.get("certificateUrl") or None,
    )


def _year_sort_key(achievement: Achievement) -> tuple[int, str]:
    try:
        return (int(achievement.year), achievement.title)
    except ValueError:
        return (0, achievement.title)
