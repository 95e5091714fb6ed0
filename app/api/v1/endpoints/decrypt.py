from fastapi import APIRouter

from app.core.exceptions import CiphertextTooLongError
from app.dependencies import OrchestratorDep, SettingsDep
from app.models.schemas import DecryptRequest, DecryptResponse, ErrorResponse

router = APIRouter()


@router.post(
    "",
    response_model=DecryptResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
    },
    summary="Decrypt ciphertext",
    description="Decrypt a Caesar ciphertext with a known shift.",
)
async def decrypt_ciphertext(
    request: DecryptRequest,
    settings: SettingsDep,
    orchestrator: OrchestratorDep,
) -> DecryptResponse:
    """Decrypt with a known shift, keeping case and punctuation."""
    if len(request.ciphertext) > settings.max_ciphertext_length:
        raise CiphertextTooLongError(len(request.ciphertext), settings.max_ciphertext_length)

    engine = orchestrator.engine
    plaintext = engine.decrypt(request.ciphertext, request.key)

    return DecryptResponse(
        plaintext=plaintext,
        key_used=request.key,
        explanation=engine.explain(request.ciphertext, plaintext, request.key),
    )
