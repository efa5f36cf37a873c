from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from src.application.use_cases.events.event_operations import EventService
from src.presentation.api.dependencies import (PagingParams,
                                               get_event_service,
                                               get_paging_params)
from src.presentation.api.v1.schemas.common import PageResponse
from src.presentation.api.v1.schemas.event import (EventCreate,
                                                   EventResponse,
                                                   EventUpdate)

router = APIRouter()

Service = Annotated[EventService, Depends(get_event_service)]
Paging = Annotated[PagingParams, Depends(get_paging_params)]


def _to_response(events) -> list[EventResponse]:
    return [EventResponse.from_entity(event) for event in events]


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(data: EventCreate, service: Service) -> EventResponse:
    """
    Create a new event.

    The name must be unique (case-insensitive), the date strictly in the
    future, and venueId, when given, must reference an existing venue.
    """
    event = await service.create(data.to_draft())
    return EventResponse.from_entity(event)


@router.get("", response_model=list[EventResponse])
async def list_events(service: Service) -> list[EventResponse]:
    """List all events"""
    return _to_response(await service.list_all())


# Static paths are declared before /{event_id} so they are not read as ids


@router.get("/venue/{venue_id}", response_model=list[EventResponse])
async def list_events_by_venue(venue_id: int, service: Service) -> list[EventResponse]:
    """Events held at a venue (404 if the venue does not exist)"""
    return _to_response(await service.list_by_venue(venue_id))


@router.get("/active", response_model=list[EventResponse])
async def list_active_events(service: Service) -> list[EventResponse]:
    return _to_response(await service.list_active())


@router.get("/upcoming", response_model=list[EventResponse])
async def list_upcoming_events(service: Service) -> list[EventResponse]:
    """Events dated strictly after now"""
    return _to_response(await service.list_upcoming())


@router.get("/date-range", response_model=list[EventResponse])
async def list_events_between(
    service: Service,
    start_date: Annotated[datetime, Query(alias="startDate")],
    end_date: Annotated[datetime, Query(alias="endDate")],
) -> list[EventResponse]:
    """Events whose date falls within [startDate, endDate]"""
    return _to_response(await service.list_between(start_date, end_date))


@router.get("/paginated", response_model=PageResponse[EventResponse])
async def paginate_events(
    service: Service,
    paging: Paging,
    sort_by: Annotated[str, Query(alias="sortBy")] = "id",
) -> PageResponse[EventResponse]:
    page = await service.paginate(paging.page, paging.size, sort_by, paging.direction)
    return PageResponse[EventResponse].from_page(page, EventResponse.from_entity)


@router.get("/paginated/active", response_model=PageResponse[EventResponse])
async def paginate_active_events(
    service: Service,
    paging: Paging,
    sort_by: Annotated[str, Query(alias="sortBy")] = "name",
) -> PageResponse[EventResponse]:
    page = await service.paginate_active(paging.page, paging.size, sort_by, paging.direction)
    return PageResponse[EventResponse].from_page(page, EventResponse.from_entity)


@router.get("/paginated/upcoming", response_model=PageResponse[EventResponse])
async def paginate_upcoming_events(
    service: Service,
    paging: Paging,
    sort_by: Annotated[str, Query(alias="sortBy")] = "eventDate",
) -> PageResponse[EventResponse]:
    page = await service.paginate_upcoming(paging.page, paging.size, sort_by, paging.direction)
    return PageResponse[EventResponse].from_page(page, EventResponse.from_entity)


@router.get("/search", response_model=PageResponse[EventResponse])
async def search_events(
    service: Service,
    paging: Paging,
    venue_id: Annotated[int | None, Query(alias="venueId")] = None,
    active: bool | None = None,
    start_date: Annotated[datetime | None, Query(alias="startDate")] = None,
    sort_by: Annotated[str, Query(alias="sortBy")] = "eventDate",
) -> PageResponse[EventResponse]:
    """
    Page through events matching every filter supplied.

    startDate is an inclusive lower bound on the event date.
    """
    page = await service.search(
        venue_id=venue_id,
        active=active,
        start_date=start_date,
        page=paging.page,
        size=paging.size,
        sort_by=sort_by,
        direction=paging.direction,
    )
    return PageResponse[EventResponse].from_page(page, EventResponse.from_entity)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(event_id: int, service: Service) -> EventResponse:
    return EventResponse.from_entity(await service.get(event_id))


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(event_id: int, data: EventUpdate, service: Service) -> EventResponse:
    """
    Update an event.

    Only the fields present in the body are changed; a null field is
    treated as absent.
    """
    event = await service.update(event_id, data.to_patch())
    return EventResponse.from_entity(event)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(event_id: int, service: Service) -> Response:
    await service.delete(event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
