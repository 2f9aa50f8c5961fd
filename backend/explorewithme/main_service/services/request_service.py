"""
Participation request service.

CONCURRENCY STRATEGY: Pessimistic row lock on the event
========================================================

Problem:
  Two participation confirmations for the last free place run at once.
  Both count CONFIRMED requests, both see capacity, both confirm.
  Result: participant limit exceeded.

Solution:
  Every operation that checks capacity first locks the event row with
  SELECT ... FOR UPDATE inside the request transaction (see get_db). A second
  transaction touching the same event waits until the first commits, then
  counts again. Contention is per event, and capacity checks are short, so
  serializing them costs little.
"""

from typing import Iterable

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from explorewithme.core.dates import now
from explorewithme.core.exceptions import BusinessRuleViolationError, InvalidArgumentError, NotFoundError
from explorewithme.core.logging import get_logger
from explorewithme.core.metrics import record_participation_request
from explorewithme.main_service.models import Event, EventState, ParticipationRequest, RequestStatus, User
from explorewithme.main_service.schemas import (
    EventRequestStatusUpdateRequest, EventRequestStatusUpdateResult, ParticipationRequestDto,
)

logger = get_logger(__name__)


async def count_confirmed(db: AsyncSession, event_ids: Iterable[int]) -> dict[int, int]:
    """CONFIRMED request counts keyed by event id; absent ids count 0."""
    ids = list(event_ids)
    if not ids:
        return {}

    result = await db.execute(
        select(ParticipationRequest.event_id, func.count(ParticipationRequest.id))
        .where(
            ParticipationRequest.event_id.in_(ids),
            ParticipationRequest.status == RequestStatus.CONFIRMED,
        )
        .group_by(ParticipationRequest.event_id)
    )
    counts = {event_id: 0 for event_id in ids}
    counts.update({event_id: count for event_id, count in result.all()})
    return counts


async def _count_confirmed_for(db: AsyncSession, event_id: int) -> int:
    counts = await count_confirmed(db, [event_id])
    return counts[event_id]


async def _lock_event(db: AsyncSession, event_id: int) -> Event:
    """Take the row lock on the event, then load it fully."""
    await db.execute(select(Event.id).where(Event.id == event_id).with_for_update())
    event = await db.get(Event, event_id)
    if not event:
        raise NotFoundError("Event", event_id)
    return event


async def create_request(db: AsyncSession, user_id: int, event_id: int) -> ParticipationRequestDto:
    """
    Create a participation request.

    The request is CONFIRMED at once when the event does not moderate requests
    or has no participant limit; otherwise it waits as PENDING.
    """
    if not await db.get(User, user_id):
        raise NotFoundError("User", user_id)

    event = await _lock_event(db, event_id)

    duplicate = await db.execute(
        select(ParticipationRequest.id).where(
            ParticipationRequest.event_id == event_id,
            ParticipationRequest.requester_id == user_id,
            ParticipationRequest.status != RequestStatus.CANCELED,
        )
    )
    if duplicate.first():
        raise BusinessRuleViolationError(
            f"User id={user_id} already has a request for event id={event_id}"
        )

    if event.initiator_id == user_id:
        raise BusinessRuleViolationError("The initiator cannot request participation in their own event")

    if event.state != EventState.PUBLISHED:
        raise BusinessRuleViolationError(
            f"Cannot participate in an unpublished event. Current state: {event.state.value}"
        )

    if event.participant_limit > 0:
        confirmed = await _count_confirmed_for(db, event_id)
        if confirmed >= event.participant_limit:
            logger.warning(
                "participation_refused_limit_reached",
                event_id=event_id,
                limit=event.participant_limit,
            )
            raise BusinessRuleViolationError("The participant limit has been reached")

    if not event.request_moderation or event.participant_limit == 0:
        status = RequestStatus.CONFIRMED
    else:
        status = RequestStatus.PENDING

    request = ParticipationRequest(
        requester_id=user_id,
        event_id=event_id,
        status=status,
        created=now(),
    )
    db.add(request)
    await db.flush()

    record_participation_request(status.value)
    logger.info(
        "participation_request_created",
        request_id=request.id,
        user_id=user_id,
        event_id=event_id,
        status=status.value,
    )
    return ParticipationRequestDto.model_validate(request)


async def get_requests(db: AsyncSession, user_id: int) -> list[ParticipationRequestDto]:
    """All requests made by a user, oldest first."""
    if not await db.get(User, user_id):
        raise NotFoundError("User", user_id)

    result = await db.execute(
        select(ParticipationRequest)
        .where(ParticipationRequest.requester_id == user_id)
        .order_by(ParticipationRequest.id.asc())
    )
    return [ParticipationRequestDto.model_validate(r) for r in result.scalars().all()]


async def cancel_request(db: AsyncSession, user_id: int, request_id: int) -> ParticipationRequestDto:
    result = await db.execute(
        select(ParticipationRequest).where(
            ParticipationRequest.id == request_id,
            ParticipationRequest.requester_id == user_id,
        )
    )
    request = result.scalar_one_or_none()
    if not request:
        raise NotFoundError(
            "ParticipationRequest", request_id,
            f"Request with id={request_id} of user id={user_id} was not found",
        )

    request.status = RequestStatus.CANCELED
    await db.flush()

    record_participation_request(RequestStatus.CANCELED.value)
    logger.info("participation_request_canceled", request_id=request_id, user_id=user_id)
    return ParticipationRequestDto.model_validate(request)


async def get_event_requests(db: AsyncSession, user_id: int, event_id: int) -> list[ParticipationRequestDto]:
    """Requests made for an event, as seen by its initiator."""
    event = await db.get(Event, event_id)
    if not event or event.initiator_id != user_id:
        raise NotFoundError(
            "Event", event_id, f"Event with id={event_id} and initiatorId={user_id} was not found"
        )

    result = await db.execute(
        select(ParticipationRequest)
        .where(ParticipationRequest.event_id == event_id)
        .order_by(ParticipationRequest.id.asc())
    )
    return [ParticipationRequestDto.model_validate(r) for r in result.scalars().all()]


async def update_requests_status(
    db: AsyncSession,
    user_id: int,
    event_id: int,
    update_request: EventRequestStatusUpdateRequest,
) -> EventRequestStatusUpdateResult:
    """
    Confirm or reject a batch of PENDING requests for the initiator's event.

    When the participant limit is reached part-way through a confirmation
    batch, the rest of the batch is rejected, and so is every other request
    still pending for the event.
    """
    target = update_request.status
    if target not in (RequestStatus.CONFIRMED, RequestStatus.REJECTED):
        raise InvalidArgumentError(
            f"Requests can only be CONFIRMED or REJECTED, got {target.value}", field="status"
        )

    event = await _lock_event(db, event_id)
    if event.initiator_id != user_id:
        raise NotFoundError(
            "Event", event_id, f"Event with id={event_id} and initiatorId={user_id} was not found"
        )

    request_ids = list(dict.fromkeys(update_request.request_ids))
    result = await db.execute(
        select(ParticipationRequest)
        .where(
            ParticipationRequest.id.in_(request_ids),
            ParticipationRequest.event_id == event_id,
        )
        .order_by(ParticipationRequest.id.asc())
    )
    requests = list(result.scalars().all())

    missing = sorted(set(request_ids) - {r.id for r in requests})
    if missing:
        raise NotFoundError(
            "ParticipationRequest", missing,
            f"Requests {missing} were not found for event id={event_id}",
        )

    not_pending = [r.id for r in requests if r.status != RequestStatus.PENDING]
    if not_pending:
        raise BusinessRuleViolationError(
            f"Request must have status PENDING; requests {not_pending} do not"
        )

    confirmed: list[ParticipationRequest] = []
    rejected: list[ParticipationRequest] = []

    if target == RequestStatus.REJECTED:
        rejected = requests
    elif event.participant_limit == 0:
        confirmed = requests
    else:
        confirmed_count = await _count_confirmed_for(db, event_id)
        if confirmed_count >= event.participant_limit:
            raise BusinessRuleViolationError("The participant limit has been reached")

        for request in requests:
            if confirmed_count < event.participant_limit:
                confirmed.append(request)
                confirmed_count += 1
            else:
                rejected.append(request)

    for request in confirmed:
        request.status = RequestStatus.CONFIRMED
    for request in rejected:
        request.status = RequestStatus.REJECTED
    await db.flush()

    if target == RequestStatus.CONFIRMED and event.participant_limit > 0:
        if await _count_confirmed_for(db, event_id) >= event.participant_limit:
            await db.execute(
                update(ParticipationRequest)
                .where(
                    ParticipationRequest.event_id == event_id,
                    ParticipationRequest.status == RequestStatus.PENDING,
                )
                .values(status=RequestStatus.REJECTED)
                .execution_options(synchronize_session="fetch")
            )

    for _ in confirmed:
        record_participation_request(RequestStatus.CONFIRMED.value)
    for _ in rejected:
        record_participation_request(RequestStatus.REJECTED.value)
    logger.info(
        "participation_requests_updated",
        event_id=event_id,
        confirmed=[r.id for r in confirmed],
        rejected=[r.id for r in rejected],
    )
    return EventRequestStatusUpdateResult(
        confirmed_requests=[ParticipationRequestDto.model_validate(r) for r in confirmed],
        rejected_requests=[ParticipationRequestDto.model_validate(r) for r in rejected],
    )
