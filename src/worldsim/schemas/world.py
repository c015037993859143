from pydantic import BaseModel, Field

from worldsim.domain.enums import DiplomaticStance, TrustTitle


class PlayerCreate(BaseModel):
    player_id: str = Field(..., min_length=1, description="Unique player identifier")
    display_name: str | None = Field(None, description="Name shown in the UI")


class PlayerRead(BaseModel):
    player_id: str = Field(..., description="Unique player identifier")
    display_name: str = Field(..., description="Name shown in the UI")
    is_human: bool = Field(..., description="False for automated players")
    trust_title: TrustTitle = Field(..., description="Reputation earned through agreements")


class DepositRead(BaseModel):
    resource: str
    richness: float
    is_discovered: bool


class CityRead(BaseModel):
    id: str
    name: str
    description: str
    terrain: str
    owner_player_id: str | None
    population: int
    public_order: float
    land_fertility: float
    bandit_risk: float
    defense_multiplier: float
    farming_multiplier: float
    mining_multiplier: float
    deposits: list[DepositRead] = Field(
        default_factory=list, description="Only deposits already discovered"
    )
    history_log: list[str] = Field(default_factory=list)


class RelationRead(BaseModel):
    source_player_id: str
    target_player_id: str
    stance: DiplomaticStance
    last_updated_turn: int | None = Field(None, description="None when never recorded")
    can_attack: bool


class SessionSetupRequest(BaseModel):
    human_count: int = Field(default=1, ge=0)
    bot_count: int = Field(default=3, ge=0)


class SessionRead(BaseModel):
    turn: int
    current_action: str
    players: list[PlayerRead]
    city_count: int


class AnalystRequest(BaseModel):
    max_discoveries: int = Field(default=1, ge=0)


class AnalystResponse(BaseModel):
    city_id: str
    discovered: int


class TransitTaxResponse(BaseModel):
    location_id: str
    unit_count: int
    income: int


class DefenseMultiplierResponse(BaseModel):
    terrain: str
    defense_multiplier: float


class TickAdvanceRequest(BaseModel):
    turns: int = Field(default=1, ge=1, le=100)


class TickAdvanceResponse(BaseModel):
    turn: int
    current_action: str
    rebellions: list[str]
    commands_executed: int
    commands_succeeded: int


class TickScheduleRequest(BaseModel):
    enabled: bool
    interval_seconds: float | None = Field(default=None, gt=0.0)
    debug_multiplier: float | None = Field(default=None, gt=0.0)


class TickStatusResponse(BaseModel):
    enabled: bool
    interval_seconds: float
    debug_multiplier: float
    effective_interval_seconds: float
