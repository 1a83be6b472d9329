from enum import Enum
from typing import List, Tuple

from fastapi import Depends, HTTPException, Request

from payroll_api.deps.auth import require_auth


class Role(Enum):
    ADMINISTRATOR = "ADMINISTRATOR"
    HR_MANAGER = "HR_MANAGER"
    PAYROLL_OFFICER = "PAYROLL_OFFICER"
    EMPLOYEE = "EMPLOYEE"


ANY_ROLE = tuple(Role)
PEOPLE_MANAGERS = (Role.ADMINISTRATOR, Role.HR_MANAGER)
PAYROLL_MANAGERS = (Role.ADMINISTRATOR, Role.HR_MANAGER, Role.PAYROLL_OFFICER)


def require_role(*allowed: Role):
    """Dependency that admits callers holding at least one of the given roles."""

    def dependency(request: Request, auth: Tuple[str, List[str]] = Depends(require_auth)):
        _user_id, claim_roles = auth

        user_roles = set()
        for claim_role in claim_roles:
            try:
                user_roles.add(Role(claim_role))
            except ValueError:
                # Unknown roles grant nothing.
                continue

        if not user_roles:
            raise HTTPException(status_code=403, detail="Invalid role claim")

        if not user_roles.intersection(allowed):
            raise HTTPException(status_code=403, detail="Insufficient role")

        request.state.roles = sorted(r.value for r in user_roles)
        return user_roles

    return dependency
