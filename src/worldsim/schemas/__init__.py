from .commands import CommandRequest, CommandResponse
from .world import (
    AnalystRequest,
    AnalystResponse,
    CityRead,
    DefenseMultiplierResponse,
    DepositRead,
    PlayerCreate,
    PlayerRead,
    RelationRead,
    SessionRead,
    SessionSetupRequest,
    TickAdvanceRequest,
    TickAdvanceResponse,
    TickScheduleRequest,
    TickStatusResponse,
    TransitTaxResponse,
)

__all__ = [
    "AnalystRequest",
    "AnalystResponse",
    "CityRead",
    "CommandRequest",
    "CommandResponse",
    "DefenseMultiplierResponse",
    "DepositRead",
    "PlayerCreate",
    "PlayerRead",
    "RelationRead",
    "SessionRead",
    "SessionSetupRequest",
    "TickAdvanceRequest",
    "TickAdvanceResponse",
    "TickScheduleRequest",
    "TickStatusResponse",
    "TransitTaxResponse",
]
