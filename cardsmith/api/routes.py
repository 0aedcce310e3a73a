"""POST /flashcards and POST /notes endpoint handlers."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from sse_starlette.sse import EventSourceResponse

from cardsmith.api.schemas import FlashcardRequest, FlashcardResult, NoteRequest, NoteResponse
from cardsmith.api.service import add_reviewed_notes, stream_flashcards
from cardsmith.auth.dependencies import require_api_key
from cardsmith.errors import CardsmithError, InvalidURLError
from cardsmith.pipeline import FlashcardPipeline
from cardsmith.scrape import validate_url

router = APIRouter(dependencies=[Depends(require_api_key)])


def _get_pipeline(request: Request) -> FlashcardPipeline:
    return request.app.state.pipeline


@router.post("/flashcards", response_model=None)
async def create_flashcards(
    body: FlashcardRequest,
    pipeline: FlashcardPipeline = Depends(_get_pipeline),
) -> FlashcardResult | EventSourceResponse:
    if not validate_url(body.url):
        raise HTTPException(status_code=422, detail="url must be an absolute http(s) URL")

    if body.mode == "stream":
        return EventSourceResponse(stream_flashcards(pipeline, body))

    try:
        return await pipeline.run(
            url=body.url,
            deck=body.deck,
            tags=body.tags,
            insert=body.insert,
        )
    except InvalidURLError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except CardsmithError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc


@router.post("/notes", response_model=NoteResponse)
async def create_notes(
    body: NoteRequest,
    pipeline: FlashcardPipeline = Depends(_get_pipeline),
) -> NoteResponse:
    return await add_reviewed_notes(pipeline.anki, body)
