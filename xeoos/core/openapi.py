"""OpenAPI metadata and customization utilities.

Provides a helper to enrich the generated OpenAPI schema with:
- Tags metadata
- Bearer JWT security scheme on every operation that needs a user

This keeps documentation concerns decoupled from the app factory.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

# Operations that accept anonymous callers
PUBLIC_PATHS = (
    "/health",
    "/api/user/create",
    "/api/user/verify",
    "/api/user/auth",
    "/api/user/check",
    "/api/user/password/reset",
    "/api/user/password/reset/send",
    "/api/user/password/reset/confirm",
    "/api/task/report",
    "/api/origin",
    "/api/search",
    "/api/topics",
    "/api/posts",
    "/api/posts/{post_id}",
    "/api/stats",
    "/api/leaderboard",
    "/api/users/{uid}",
    "/api/users/{uid}/replies",
)

TAGS = [
    {"name": "Users", "description": "Signup, login, profile and password reset."},
    {"name": "Posts", "description": "Posts, replies and likes."},
    {"name": "Tasks", "description": "Translation task status and worker callbacks."},
    {"name": "Messages", "description": "Notifications and realtime credentials."},
    {"name": "Feed", "description": "Localized read endpoints and search."},
    {"name": "Health", "description": "Liveness checks."},
]


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation to add tags and security.

    - Injects components.securitySchemes for Bearer JWT auth
    - Marks all operations as requiring it by default, then exempts the
      public paths by setting ``security: []``
    - Adds tags metadata if not present
    """

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema
        schema = original_openapi()

        components = schema.setdefault("components", {})
        security_schemes = components.setdefault("securitySchemes", {})
        security_schemes.setdefault(
            "BearerAuth",
            {
                "type": "http",
                "scheme": "bearer",
                "bearerFormat": "JWT",
                "description": "JWT returned by POST /api/user/auth.",
            },
        )
        schema.setdefault("security", [{"BearerAuth": []}])

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        for tag in TAGS:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        for path, methods in schema.get("paths", {}).items():
            if path in PUBLIC_PATHS:
                for method_obj in methods.values():
                    if isinstance(method_obj, dict):
                        method_obj["security"] = []

        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
