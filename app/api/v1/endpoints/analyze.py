from fastapi import APIRouter

from app.core.exceptions import CiphertextTooLongError
from app.dependencies import OrchestratorDep, SettingsDep
from app.models.schemas import AnalyzeRequest, AnalyzeResponse, ErrorResponse

router = APIRouter()


@router.post(
    "",
    response_model=AnalyzeResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
    },
    summary="Analyze letter frequencies",
    description=(
        "Count every letter of the text (case-insensitive, non-letters ignored) "
        "and report proportions, index of coincidence and entropy."
    ),
)
async def analyze_text(
    request: AnalyzeRequest,
    settings: SettingsDep,
    orchestrator: OrchestratorDep,
) -> AnalyzeResponse:
    """
    Analyze the letter distribution of a text.

    Proportions are null when the text holds no letters.
    """
    if len(request.text) > settings.max_ciphertext_length:
        raise CiphertextTooLongError(len(request.text), settings.max_ciphertext_length)

    table = orchestrator.analyze(request.text)
    statistics = orchestrator.counter.profile(request.text)

    return AnalyzeResponse(
        counts=table.as_dict(),
        proportions=table.proportions_dict() if table.total else None,
        total_letters=table.total,
        statistics=statistics,
    )
