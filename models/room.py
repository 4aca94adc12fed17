# models/room.py

from datetime import datetime
from typing import Optional
from pydantic import Field

from models.base import CamelModel, FOUR_DIGITS, LocalDateTime
from models.enums import CleaningStatus, LinenStatus, RoomStatus


class RoomRead(CamelModel):
    id: str
    property_id: str
    room_number: int
    status: RoomStatus
    door_code: Optional[str] = None
    code_expiry: Optional[datetime] = None
    master_code: Optional[str] = None
    cleaning_status: CleaningStatus
    linen_status: LinenStatus
    last_cleaned: Optional[datetime] = None
    last_linen_change: Optional[datetime] = None
    notes: Optional[str] = None


class RoomCreate(CamelModel):
    """Id defaults to '<property>-R<number>'."""
    id: Optional[str] = None
    property_id: str
    room_number: int = Field(ge=1)
    status: RoomStatus = RoomStatus.available
    cleaning_status: CleaningStatus = CleaningStatus.clean
    linen_status: LinenStatus = LinenStatus.fresh
    notes: Optional[str] = None


class RoomUpdate(CamelModel):
    status: Optional[RoomStatus] = None
    cleaning_status: Optional[CleaningStatus] = None
    linen_status: Optional[LinenStatus] = None
    door_code: Optional[str] = Field(default=None, pattern=FOUR_DIGITS)
    code_expiry: Optional[LocalDateTime] = None
    last_cleaned: Optional[LocalDateTime] = None
    last_linen_change: Optional[LocalDateTime] = None
    notes: Optional[str] = None


# -------------------------------------------------
# Door codes
# -------------------------------------------------
class GenerateCodeRequest(CamelModel):
    # Free text: anything other than daily/weekly gets the monthly lifetime
    duration: str = "monthly"


class GeneratedCodeResponse(CamelModel):
    door_code: str
    code_expiry: datetime
    room: RoomRead


class RoomMasterCodeUpdate(CamelModel):
    master_code: str = Field(pattern=FOUR_DIGITS)


class RoomMasterCodeResponse(CamelModel):
    room: RoomRead
    master_code: str
