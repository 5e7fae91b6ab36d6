import logging

from fastapi import Request

from match_api.core.config import Settings, get_settings
from match_api.models.match import Match

logger = logging.getLogger(__name__)

MATCH_NOT_FOUND = "Match not found"


class MatchService:
    """Serves the static match record, or nothing in the ``not_found`` variant."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    async def get_match(self, match_id: str) -> Match | None:
        if self.settings.match_variant == "not_found":
            logger.debug("Match lookup disabled", extra={"match_id": match_id})
            return None
        return Match(home_team="Barcelona", away_team="Real Madrid", championship="UEFA")


def get_match_service(request: Request) -> MatchService:
    return MatchService(settings=request.app.state.settings)
