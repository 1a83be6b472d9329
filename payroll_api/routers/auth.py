from typing import List

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

import os
from payroll_api.core.authorization import Role
from payroll_api.services.auth_service import create_access_token

router = APIRouter(prefix="/auth", tags=["auth"])


class TokenRequest(BaseModel):
    user_id: str
    roles: List[Role] = Field(default_factory=lambda: [Role.EMPLOYEE])


@router.post("/token")
def issue_token(payload: TokenRequest):
    env = os.getenv("ENV", "dev").lower()
    if env not in {"dev", "local", "test"}:
        raise HTTPException(status_code=404, detail="Not Found")
    try:
        token = create_access_token(user_id=str(payload.user_id), roles=[r.value for r in payload.roles])
    except Exception as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return {
        "access_token": token,
        "token_type": "bearer",
    }
