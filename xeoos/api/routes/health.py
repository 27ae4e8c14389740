from __future__ import annotations

from fastapi import APIRouter

from xeoos.core.config import settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> dict:
    """Liveness check.

    Also reports which optional integrations are configured. Nothing is
    called over the network; an integration reported as ``false`` runs on
    its disabled stand-in.
    """

    return {
        "status": "ok",
        "integrations": {
            "realtime": bool(settings.realtime.api_key),
            "email": bool(settings.email.resend_api_key),
            "search": bool(settings.search.host),
            "translate": bool(settings.translate.worker_url),
            "captcha": settings.captcha.enabled,
            "redis": bool(settings.app.redis_url),
        },
    }
