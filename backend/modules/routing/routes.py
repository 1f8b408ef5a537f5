"""
Route table API endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_dispatcher
from api.models.navigation import RouteListItem, RouteListResponse

from .service import RouteDispatcher

router = APIRouter()


@router.get("", response_model=RouteListResponse)
async def list_routes(
    dispatcher: RouteDispatcher = Depends(get_dispatcher),
) -> RouteListResponse:
    """
    List the route table in match order.
    """
    items = [
        RouteListItem(
            name=descriptor.name,
            pattern=descriptor.pattern.template,
            tier=descriptor.pattern.tier.name.lower(),
            page=descriptor.page,
            auth_page=descriptor.auth_page,
            gates=[r.kind.value for r in descriptor.requirements],
        )
        for descriptor in dispatcher.table.ordered
    ]
    return RouteListResponse(routes=items, total=len(items))
