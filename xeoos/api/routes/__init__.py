from __future__ import annotations

from xeoos.api.routes.feed import router as feed_router
from xeoos.api.routes.health import router as health_router
from xeoos.api.routes.messages import router as messages_router
from xeoos.api.routes.posts import router as posts_router
from xeoos.api.routes.tasks import router as tasks_router
from xeoos.api.routes.users import router as users_router

__all__ = [
    "feed_router",
    "health_router",
    "messages_router",
    "posts_router",
    "tasks_router",
    "users_router",
]
