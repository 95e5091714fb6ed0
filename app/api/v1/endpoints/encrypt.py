from fastapi import APIRouter

from app.core.exceptions import CiphertextTooLongError
from app.dependencies import OrchestratorDep, SettingsDep
from app.models.schemas import EncryptRequest, EncryptResponse, ErrorResponse

router = APIRouter()


@router.post(
    "",
    response_model=EncryptResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
    },
    summary="Encrypt plaintext",
    description="Encrypt plaintext with a Caesar shift. Educational tool for generating test ciphertexts.",
)
async def encrypt_plaintext(
    request: EncryptRequest,
    settings: SettingsDep,
    orchestrator: OrchestratorDep,
) -> EncryptResponse:
    """
    Encrypt plaintext with a Caesar shift.

    A random shift between 1 and 25 is used when no key is given.
    """
    if len(request.plaintext) > settings.max_ciphertext_length:
        raise CiphertextTooLongError(len(request.plaintext), settings.max_ciphertext_length)

    engine = orchestrator.engine
    key = request.key
    if key is None:
        key = engine.generate_random_key()

    return EncryptResponse(
        ciphertext=engine.encrypt(request.plaintext, key),
        key_used=key,
    )
