# the edge verifies the session and forwards X-User-Id
# here we only normalise it into request.state.identity
# no lookups, no rejection: routes decide what they require

from fastapi import Request

USER_ID_HEADER = "X-User-Id"


async def auth_middleware(request: Request, call_next):
    user_id = (request.headers.get(USER_ID_HEADER) or "").strip()

    request.state.identity = {"user_id": user_id} if user_id else None

    return await call_next(request)
