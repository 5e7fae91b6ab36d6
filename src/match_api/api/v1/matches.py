from fastapi import APIRouter, Depends, Path, Request, status
from fastapi.responses import JSONResponse
from opentelemetry.trace import Tracer

from match_api.models.common import MessageError
from match_api.models.match import Match
from match_api.services.matches import MATCH_NOT_FOUND, MatchService, get_match_service

router = APIRouter(prefix="/api", tags=["matches"])


def get_tracer(request: Request) -> Tracer:
    return request.app.state.tracer


@router.get(
    "/matches/{id}",
    response_model=Match,
    responses={status.HTTP_404_NOT_FOUND: {"model": MessageError}},
)
async def get_match(
    id: str = Path(..., description="Match identifier"),
    service: MatchService = Depends(get_match_service),
    tracer: Tracer = Depends(get_tracer),
) -> Match | JSONResponse:
    with tracer.start_as_current_span("getMatch", attributes={"id": id}):
        match = await service.get_match(id)

    if match is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=MessageError(message=MATCH_NOT_FOUND).model_dump(),
        )
    return match
