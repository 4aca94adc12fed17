# routers/inquiries.py

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from typing import List

from dependencies.auth import get_storage, requires_role
from models.booking import BookingRead
from models.guest import GuestRead
from models.inquiry import (
    AssignRoomRequest,
    AssignRoomResponse,
    InquiryCreate,
    InquiryCreated,
    InquiryRead,
    InquiryTrackResponse,
    InquiryUpdate,
    TrackedBooking,
)
from models.room import RoomRead
from services import inquiries as inquiry_service
from storage.base import Storage
from storage.tables import User


router = APIRouter(
    prefix="/api/inquiries",
    tags=["Inquiries"],
)

staff = requires_role(["admin", "manager"])


# ============================================================
# PUBLIC (no auth)
# ============================================================
@router.post(
    "",
    response_model=InquiryCreated,
    status_code=201,
    summary="Submit inquiry",
    responses={403: {"description": "Submitter is banned"}},
)
def submit_inquiry(
    payload: InquiryCreate,
    storage: Storage = Depends(get_storage),
):
    try:
        inquiry = inquiry_service.submit_inquiry(storage, payload)
    except inquiry_service.InquiryBlocked:
        return JSONResponse(
            status_code=403,
            content={"detail": "Unable to process inquiry", "reason": "blocked"},
        )
    return inquiry


@router.get("/track/{token}", response_model=InquiryTrackResponse, summary="Track inquiry by token")
def track_inquiry(
    token: str,
    storage: Storage = Depends(get_storage),
):
    inquiry, booking = inquiry_service.track_inquiry(storage, token)
    return InquiryTrackResponse(
        id=inquiry.id,
        status=inquiry.status,
        booking=TrackedBooking.model_validate(booking) if booking else None,
    )


# ============================================================
# STAFF
# ============================================================
@router.get("", response_model=List[InquiryRead], summary="List inquiries")
def list_inquiries(
    current_user: User = Depends(staff),
    storage: Storage = Depends(get_storage),
):
    return storage.get_inquiries()


@router.put("/{inquiry_id}", response_model=InquiryRead, summary="Update inquiry status or notes")
def update_inquiry(
    inquiry_id: str,
    payload: InquiryUpdate,
    current_user: User = Depends(staff),
    storage: Storage = Depends(get_storage),
):
    return inquiry_service.update_inquiry(storage, current_user, inquiry_id, payload)


@router.post("/{inquiry_id}/assign-room", response_model=AssignRoomResponse, summary="Book a room for the inquirer")
def assign_room(
    inquiry_id: str,
    payload: AssignRoomRequest,
    current_user: User = Depends(staff),
    storage: Storage = Depends(get_storage),
):
    booking, guest, room, inquiry = inquiry_service.assign_room(storage, current_user, inquiry_id, payload)
    return AssignRoomResponse(
        booking=BookingRead.model_validate(booking),
        guest=GuestRead.model_validate(guest),
        room=RoomRead.model_validate(room),
        inquiry=InquiryRead.model_validate(inquiry),
    )
