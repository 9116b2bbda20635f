from fastapi import APIRouter, Depends

from houseguide.classification.classifier import DOCUMENT_SCHEME, NOTE_SCHEME, classify
from houseguide.classification.schemas import (
    ClassificationResponse,
    ClassifyRequest,
    SegmentResponse,
    VoiceNoteRequest,
    VoiceNoteResponse,
)
from houseguide.classification.segments import categorize_voice_note
from houseguide.providers.base import ClassificationProvider
from houseguide.providers.registry import get_classification_provider

router = APIRouter(prefix="/classify", tags=["classification"])


@router.post("/note", response_model=ClassificationResponse)
async def classify_note(
    data: ClassifyRequest,
    provider: ClassificationProvider | None = Depends(get_classification_provider),
):
    result = await classify(data.text, scheme=NOTE_SCHEME, provider=provider)
    return ClassificationResponse.from_result(result)


@router.post("/document", response_model=ClassificationResponse)
async def classify_document(
    data: ClassifyRequest,
    provider: ClassificationProvider | None = Depends(get_classification_provider),
):
    result = await classify(data.text, scheme=DOCUMENT_SCHEME, provider=provider)
    return ClassificationResponse.from_result(result)


@router.post("/voice", response_model=VoiceNoteResponse)
async def classify_voice_note(
    data: VoiceNoteRequest,
    provider: ClassificationProvider | None = Depends(get_classification_provider),
):
    outcome = await categorize_voice_note(data.transcript, provider=provider)
    return VoiceNoteResponse(
        segments=[SegmentResponse.from_segment(s) for s in outcome["segments"]],
        full_transcript=outcome["full_transcript"],
        summary=outcome["summary"],
        resident_id=data.resident_id,
    )
