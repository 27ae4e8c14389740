from __future__ import annotations

from fastapi import APIRouter, Query, Request
from fastapi.concurrency import run_in_threadpool

from xeoos.api.deps import Users, use_locale
from xeoos.core.auth import CurrentUser
from xeoos.core.rate_limit import RateLimit, client_ip
from xeoos.schemas.common import PageBody
from xeoos.schemas.users import (
    LoginRequest,
    ProfileUpdateRequest,
    ResetConfirmRequest,
    ResetSendRequest,
    SignupRequest,
    VerifyRequest,
)

router = APIRouter(prefix="/user", tags=["Users"])


@router.post("/create")
async def create_user(body: SignupRequest, request: Request, users: Users, ticket: RateLimit) -> dict:
    """Sign up and receive a verification code by email."""

    locale = use_locale(body.lang)
    result = await users.create(
        username=body.username,
        password=body.password,
        email=body.email,
        turnstile_token=body.turnstile_token,
        locale=locale,
        remote_ip=client_ip(request),
    )
    await ticket.record()
    return result


@router.post("/verify")
async def verify_email(body: VerifyRequest, users: Users, ticket: RateLimit) -> dict:
    """Confirm an email address with the code that was mailed at signup.

    Every attempt is charged to the rate limit, wrong codes included.
    """

    use_locale(body.lang)
    try:
        return await run_in_threadpool(users.verify_email, body.email, body.code)
    finally:
        await ticket.record()


@router.post("/auth")
async def login(body: LoginRequest, users: Users, ticket: RateLimit) -> dict:
    """Password login, or refresh when ``token`` is given.

    Returns:
        dict: ``{ok, user, jwt}`` where ``user`` holds the packed claims.
    """

    use_locale(body.lang)
    if body.token:
        return await run_in_threadpool(users.refresh, body.token, body.expired_time)

    result = await users.login(body.email, body.password, body.expired_time)
    await ticket.record()
    return result


@router.get("/check")
async def check_username(users: Users, username: str | None = Query(default=None)) -> dict:
    return await run_in_threadpool(users.username_available, username)


@router.post("/update")
async def update_profile(body: ProfileUpdateRequest, ticket: RateLimit, user: CurrentUser, users: Users) -> dict:
    use_locale(body.lang)
    result = await run_in_threadpool(
        users.update_profile,
        user["uid"],
        {
            "nickname": body.nickname,
            "bio": body.bio,
            "birth": body.birth,
            "country": body.country,
            "timearea": body.timearea,
            "gender": body.gender,
            "profile_emoji": body.profile_emoji,
            "email_notice_lang": body.email_notice_lang,
        },
        avatar=body.avatar.model_dump() if body.avatar else None,
    )
    await ticket.record()
    return result


@router.post("/drafts")
async def list_drafts(body: PageBody, ticket: RateLimit, user: CurrentUser, users: Users) -> dict:
    locale = use_locale(body.lang)
    result = await run_in_threadpool(users.drafts, user["uid"], body.page, locale)
    await ticket.record()
    return result


@router.post("/password/reset/send")
async def send_reset_code(body: ResetSendRequest, request: Request, users: Users, ticket: RateLimit) -> dict:
    locale = use_locale(body.lang)
    result = await users.send_reset_code(body.email, body.turnstile_token, locale, client_ip(request))
    await ticket.record()
    return result


@router.post("/password/reset/confirm")
async def confirm_reset(body: ResetConfirmRequest, request: Request, users: Users, ticket: RateLimit) -> dict:
    use_locale(body.lang)
    try:
        return await users.confirm_reset(
            body.email, body.password, body.code, body.turnstile_token, client_ip(request)
        )
    finally:
        await ticket.record()


@router.post("/password/reset")
async def reset_password(body: ResetConfirmRequest, request: Request, users: Users, ticket: RateLimit) -> dict:
    """Combined reset endpoint kept for older clients.

    With ``password`` and ``code`` it confirms the reset; otherwise it sends
    a new code.
    """

    locale = use_locale(body.lang)
    try:
        return await users.reset_password(
            email=body.email,
            password=body.password,
            code=body.code,
            turnstile_token=body.turnstile_token,
            locale=locale,
            remote_ip=client_ip(request),
        )
    finally:
        await ticket.record()
