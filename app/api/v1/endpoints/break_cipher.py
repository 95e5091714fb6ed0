import hashlib
import logging

from fastapi import APIRouter

from app.core.exceptions import CiphertextTooLongError
from app.dependencies import DbSessionDep, SettingsDep
from app.models.database import Analysis
from app.models.schemas import BreakRequest, BreakResponse, ErrorResponse
from app.services.analysis.reference import ENGLISH_REFERENCE, ReferenceDistribution
from app.services.explanation.generator import ExplanationGenerator
from app.services.pipeline.orchestrator import DecryptionOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=BreakResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input or reference"},
        422: {"model": ErrorResponse, "description": "Ciphertext has no letters"},
    },
    summary="Break a Caesar cipher",
    description=(
        "Recover the shift of a Caesar ciphertext by comparing its letter "
        "frequencies with a reference distribution under all 26 shifts."
    ),
)
async def break_ciphertext(
    request: BreakRequest,
    settings: SettingsDep,
    db: DbSessionDep,
) -> BreakResponse:
    """
    Break a Caesar ciphertext.

    The pipeline:
    1. Count letter frequencies
    2. Score all 26 shifts against the reference
    3. Select the best shift (smallest on ties) and decrypt
    4. Generate explanations and store the result
    """
    if len(request.ciphertext) > settings.max_ciphertext_length:
        raise CiphertextTooLongError(len(request.ciphertext), settings.max_ciphertext_length)

    reference = ENGLISH_REFERENCE
    if request.reference is not None:
        reference = ReferenceDistribution(
            request.reference,
            tolerance=settings.reference_tolerance,
        )

    orchestrator = DecryptionOrchestrator.from_settings(
        settings,
        method=request.method,
        candidate_limit=request.candidate_limit,
    )
    result = orchestrator.orchestrate(request.ciphertext, reference)

    statistics = orchestrator.counter.profile(request.ciphertext)
    explanations = ExplanationGenerator().generate(
        statistics=statistics,
        result=result,
        reference_name=reference.name,
    )

    analysis = Analysis(
        ciphertext_hash=hashlib.sha256(request.ciphertext.encode()).hexdigest(),
        ciphertext=request.ciphertext,
        key=result.key,
        score=result.score,
        method=result.method.value,
        ambiguous=result.ambiguous,
        near_ties=result.near_ties,
        reference_name=reference.name,
        plaintext=result.plaintext,
        counts=result.observed.as_dict(),
        explanations=explanations,
    )
    db.add(analysis)
    await db.commit()
    logger.info("Stored analysis %s with key %d", analysis.id, result.key)

    return BreakResponse(
        key=result.key,
        plaintext=result.plaintext,
        score=result.score,
        method=result.method,
        ambiguous=result.ambiguous,
        near_ties=result.near_ties,
        scores=result.scores,
        candidates=result.candidates,
        explanations=explanations,
        analysis_id=analysis.id,
    )
