from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from src.application.use_cases.venues.venue_operations import VenueService
from src.presentation.api.dependencies import (PagingParams,
                                               get_paging_params,
                                               get_venue_service)
from src.presentation.api.v1.schemas.common import PageResponse
from src.presentation.api.v1.schemas.venue import (VenueCreate,
                                                   VenueResponse,
                                                   VenueUpdate)

router = APIRouter()

Service = Annotated[VenueService, Depends(get_venue_service)]
Paging = Annotated[PagingParams, Depends(get_paging_params)]


def _to_response(venues) -> list[VenueResponse]:
    return [VenueResponse.from_entity(venue) for venue in venues]


@router.post("", response_model=VenueResponse, status_code=status.HTTP_201_CREATED)
async def create_venue(data: VenueCreate, service: Service) -> VenueResponse:
    """Create a new venue. Names are unique regardless of case."""
    venue = await service.create(data.to_draft())
    return VenueResponse.from_entity(venue)


@router.get("", response_model=list[VenueResponse])
async def list_venues(service: Service) -> list[VenueResponse]:
    """List all venues"""
    return _to_response(await service.list_all())


@router.get("/city/{city}", response_model=list[VenueResponse])
async def list_venues_by_city(city: str, service: Service) -> list[VenueResponse]:
    """Venues in a city, matched case-insensitively"""
    return _to_response(await service.list_by_city(city))


@router.get("/available", response_model=list[VenueResponse])
async def list_available_venues(service: Service) -> list[VenueResponse]:
    return _to_response(await service.list_available())


@router.get("/capacity/{min_capacity}", response_model=list[VenueResponse])
async def list_venues_by_capacity(min_capacity: int, service: Service) -> list[VenueResponse]:
    """Venues whose max capacity is at least minCapacity"""
    return _to_response(await service.list_by_min_capacity(min_capacity))


@router.get("/paginated", response_model=PageResponse[VenueResponse])
async def paginate_venues(
    service: Service,
    paging: Paging,
    sort_by: Annotated[str, Query(alias="sortBy")] = "id",
) -> PageResponse[VenueResponse]:
    page = await service.paginate(paging.page, paging.size, sort_by, paging.direction)
    return PageResponse[VenueResponse].from_page(page, VenueResponse.from_entity)


@router.get("/search", response_model=PageResponse[VenueResponse])
async def search_venues(
    service: Service,
    paging: Paging,
    city: str | None = None,
    country: str | None = None,
    type: str | None = None,
    available: bool | None = None,
    min_capacity: Annotated[int | None, Query(alias="minCapacity")] = None,
    sort_by: Annotated[str, Query(alias="sortBy")] = "name",
) -> PageResponse[VenueResponse]:
    """Page through venues matching every filter supplied; text filters ignore case"""
    page = await service.search(
        city=city,
        country=country,
        type=type,
        available=available,
        min_capacity=min_capacity,
        page=paging.page,
        size=paging.size,
        sort_by=sort_by,
        direction=paging.direction,
    )
    return PageResponse[VenueResponse].from_page(page, VenueResponse.from_entity)


@router.get("/{venue_id}", response_model=VenueResponse)
async def get_venue(venue_id: int, service: Service) -> VenueResponse:
    return VenueResponse.from_entity(await service.get(venue_id))


@router.get("/{venue_id}/events/count", response_model=int)
async def count_venue_events(venue_id: int, service: Service) -> int:
    """Number of events held at the venue"""
    return await service.count_events(venue_id)


@router.put("/{venue_id}", response_model=VenueResponse)
async def update_venue(venue_id: int, data: VenueUpdate, service: Service) -> VenueResponse:
    """
    Update a venue.

    Only the fields present in the body are changed; a null field is
    treated as absent.
    """
    venue = await service.update(venue_id, data.to_patch())
    return VenueResponse.from_entity(venue)


@router.patch("/{venue_id}/available", response_model=VenueResponse)
async def mark_venue_available(venue_id: int, service: Service) -> VenueResponse:
    return VenueResponse.from_entity(await service.mark_available(venue_id))


@router.patch("/{venue_id}/unavailable", response_model=VenueResponse)
async def mark_venue_unavailable(venue_id: int, service: Service) -> VenueResponse:
    return VenueResponse.from_entity(await service.mark_unavailable(venue_id))


@router.delete("/{venue_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_venue(venue_id: int, service: Service) -> Response:
    """
    Delete a venue.

    Rejected with 400 while any event still references the venue.
    """
    await service.delete(venue_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
