from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
async def root():
    """Проверка, что API запущен"""
    return "✅ API is running!"


@router.get("/health")
async def health():
    return {"status": "ok"}
