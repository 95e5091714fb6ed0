from fastapi import APIRouter

from app.api.v1.endpoints import analyze, break_cipher, decrypt, encrypt, history, reference

api_router = APIRouter()

api_router.include_router(
    analyze.router,
    prefix="/analyze",
    tags=["Analysis"],
)

api_router.include_router(
    break_cipher.router,
    prefix="/break",
    tags=["Cryptanalysis"],
)

api_router.include_router(
    decrypt.router,
    prefix="/decrypt",
    tags=["Decryption"],
)

api_router.include_router(
    encrypt.router,
    prefix="/encrypt",
    tags=["Encryption"],
)

api_router.include_router(
    reference.router,
    prefix="/reference",
    tags=["Reference"],
)

api_router.include_router(
    history.router,
    prefix="/history",
    tags=["History"],
)
