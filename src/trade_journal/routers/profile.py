"""Profile routes."""
from fastapi import APIRouter

from trade_journal.deps import CurrentUser, ViewsDep
from trade_journal.schemas import ProfilePage

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfilePage)
async def get_profile(user: CurrentUser, views: ViewsDep) -> ProfilePage:
    """Trading statistics for the signed-in user."""
    view = await views.profile(user.username)
    return view.snapshot()
