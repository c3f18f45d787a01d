from fastapi import APIRouter, Depends

from ..settings import Settings, get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health(s: Settings = Depends(get_settings)):
	return {"status": "ok", "ai_scoring_configured": bool(s.openrouter_api_key)}
