from fastapi import APIRouter

router = APIRouter(prefix="/app", tags=["health"])


@router.get("/health")
async def health() -> dict:
    return {"message": "API's are healthy"}
