from fastapi import APIRouter

from app.models.schemas import ReferenceResponse
from app.services.analysis.reference import ENGLISH_REFERENCE

router = APIRouter()


@router.get(
    "",
    response_model=ReferenceResponse,
    summary="Default reference distribution",
    description="English letter proportions used when a request supplies no reference.",
)
async def get_reference() -> ReferenceResponse:
    return ReferenceResponse(
        name=ENGLISH_REFERENCE.name,
        frequencies=dict(ENGLISH_REFERENCE.as_dict()),
    )
