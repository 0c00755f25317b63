from fastapi import APIRouter

from atsmatch.taxonomy import is_default_keyword_index_loaded

router = APIRouter()


@router.get("/health", summary="Health Check", description="Check the health status of the scoring service.")
async def health_check():
    return {"status": "healthy", "taxonomy_loaded": is_default_keyword_index_loaded()}
