from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db.base import get_session
from app.core.db.schemas.auth import User
from app.modules.auth import current_active_user


CurrentUser = Annotated[User, Depends(current_active_user)]
Session = Annotated[AsyncSession, Depends(get_session)]
