"""HTTP routes for the world simulation API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from worldsim.api.runtime import ApiState
from worldsim.domain.enums import CommandError, TerrainType
from worldsim.domain.models import CitySnapshot, PlayerProfile
from worldsim.schemas import (
    AnalystRequest,
    AnalystResponse,
    CityRead,
    CommandRequest,
    CommandResponse,
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
from worldsim.simulation import WorldSimulation

router = APIRouter()


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


def _player_read(simulation: WorldSimulation, profile: PlayerProfile) -> PlayerRead:
    return PlayerRead(
        player_id=profile.player_id,
        display_name=profile.display_name,
        is_human=profile.is_human,
        trust_title=simulation.get_trust_title(profile.player_id),
    )


def _session_read(simulation: WorldSimulation) -> SessionRead:
    return SessionRead(
        turn=simulation.turn,
        current_action=str(simulation.current_action),
        players=[_player_read(simulation, profile) for profile in simulation.players],
        city_count=len(simulation.cities()),
    )


def _city_read(city: CitySnapshot) -> CityRead:
    return CityRead(
        id=city.id,
        name=city.name,
        description=city.description,
        terrain=str(city.terrain),
        owner_player_id=city.owner_player_id,
        population=city.population,
        public_order=city.public_order,
        land_fertility=city.land_fertility,
        bandit_risk=city.bandit_risk,
        defense_multiplier=city.defense_multiplier,
        farming_multiplier=city.farming_multiplier,
        mining_multiplier=city.mining_multiplier,
        deposits=[
            DepositRead(
                resource=str(deposit.resource),
                richness=deposit.richness,
                is_discovered=deposit.is_discovered,
            )
            for deposit in city.discovered_deposits
        ],
        history_log=list(city.history_log),
    )


def _tick_status(state: ApiState) -> TickStatusResponse:
    return TickStatusResponse(
        enabled=state.ticks.enabled,
        interval_seconds=state.ticks.base_interval_seconds,
        debug_multiplier=state.ticks.debug_multiplier,
        effective_interval_seconds=state.ticks.interval_seconds,
    )


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    return {
        "status": "ok",
        "tick_interval_seconds": state.ticks.interval_seconds,
        "debug_tick_multiplier": state.ticks.debug_multiplier,
    }


@router.get("/session", response_model=SessionRead)
async def get_session(state: ApiStateDep) -> SessionRead:
    return await state.ticks.run(_session_read)


@router.post("/session/setup", response_model=SessionRead)
async def setup_session(request: SessionSetupRequest, state: ApiStateDep) -> SessionRead:
    def _setup(simulation: WorldSimulation) -> SessionRead:
        simulation.setup_prototype_multiplayer_session(request.human_count, request.bot_count)
        return _session_read(simulation)

    return await state.ticks.run(_setup)


@router.get("/players", response_model=list[PlayerRead])
async def list_players(state: ApiStateDep) -> list[PlayerRead]:
    return await state.ticks.run(
        lambda simulation: [_player_read(simulation, p) for p in simulation.players]
    )


@router.post("/players", response_model=PlayerRead, status_code=status.HTTP_201_CREATED)
async def register_player(request: PlayerCreate, state: ApiStateDep) -> PlayerRead:
    def _register(simulation: WorldSimulation) -> CommandError | PlayerRead:
        error = simulation.register_player(request.player_id, request.display_name, True)
        if error is not None:
            return error
        profile = simulation.get_player(request.player_id)
        if profile is None:  # pragma: no cover - registration just succeeded
            raise RuntimeError(f"player {request.player_id} missing after registration")
        return _player_read(simulation, profile)

    outcome = await state.ticks.run(_register)
    if isinstance(outcome, CommandError):
        code = (
            status.HTTP_400_BAD_REQUEST
            if outcome == CommandError.INVALID_PLAYER_ID
            else status.HTTP_409_CONFLICT
        )
        raise HTTPException(status_code=code, detail=str(outcome))
    return outcome


@router.get("/cities", response_model=list[CityRead])
async def list_cities(state: ApiStateDep) -> list[CityRead]:
    cities = await state.ticks.run(lambda simulation: simulation.cities())
    return [_city_read(city) for city in cities]


@router.get("/cities/{city_id}", response_model=CityRead)
async def get_city(city_id: str, state: ApiStateDep) -> CityRead:
    city = await state.ticks.run(lambda simulation: simulation.get_city(city_id))
    if city is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="city not found")
    return _city_read(city)


@router.post("/cities/{city_id}/analyst", response_model=AnalystResponse)
async def dispatch_analyst(
    city_id: str,
    request: AnalystRequest,
    state: ApiStateDep,
) -> AnalystResponse:
    def _dispatch(simulation: WorldSimulation) -> int | None:
        if simulation.get_city(city_id) is None:
            return None
        return simulation.dispatch_analyst(city_id, request.max_discoveries)

    discovered = await state.ticks.run(_dispatch)
    if discovered is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="city not found")
    return AnalystResponse(city_id=city_id, discovered=discovered)


@router.get("/relations/{source_id}/{target_id}", response_model=RelationRead)
async def get_relation(source_id: str, target_id: str, state: ApiStateDep) -> RelationRead:
    def _relation(simulation: WorldSimulation) -> RelationRead:
        relation = simulation.get_relation(source_id, target_id)
        return RelationRead(
            source_player_id=source_id,
            target_player_id=target_id,
            stance=simulation.get_stance(source_id, target_id),
            last_updated_turn=relation.last_updated_turn if relation is not None else None,
            can_attack=simulation.can_attack(source_id, target_id),
        )

    return await state.ticks.run(_relation)


@router.post("/commands", response_model=CommandResponse)
async def submit_command(
    request: CommandRequest,
    state: ApiStateDep,
) -> CommandResponse:
    command = request.to_command()
    result = await state.ticks.run(lambda simulation: simulation.submit_command(command))
    return CommandResponse(
        success=result.success,
        error=str(result.error) if result.error is not None else None,
        detail=result.detail,
    )


@router.get("/locations/{location_id}/transit-tax", response_model=TransitTaxResponse)
async def transit_tax(
    location_id: str,
    state: ApiStateDep,
    unit_count: Annotated[int, Query(ge=0)] = 0,
) -> TransitTaxResponse:
    income = await state.ticks.run(
        lambda simulation: simulation.calculate_transit_tax_income(location_id, unit_count)
    )
    return TransitTaxResponse(location_id=location_id, unit_count=unit_count, income=income)


@router.get("/terrain/{terrain}/defense", response_model=DefenseMultiplierResponse)
async def defense_multiplier(terrain: TerrainType, state: ApiStateDep) -> DefenseMultiplierResponse:
    value = await state.ticks.run(lambda simulation: simulation.get_defense_multiplier(terrain))
    return DefenseMultiplierResponse(terrain=str(terrain), defense_multiplier=value)


@router.post("/tick/advance", response_model=TickAdvanceResponse)
async def advance_tick(request: TickAdvanceRequest, state: ApiStateDep) -> TickAdvanceResponse:
    await state.ticks.advance_now(request.turns)

    def _report(simulation: WorldSimulation) -> TickAdvanceResponse:
        report = simulation.last_report
        results = report.results if report is not None else []
        return TickAdvanceResponse(
            turn=simulation.turn,
            current_action=str(simulation.current_action),
            rebellions=[str(city_id) for city_id in report.rebellions] if report else [],
            commands_executed=len(results),
            commands_succeeded=sum(1 for result in results if result.success),
        )

    return await state.ticks.run(_report)


@router.get("/tick/schedule", response_model=TickStatusResponse)
async def get_tick_schedule(state: ApiStateDep) -> TickStatusResponse:
    return _tick_status(state)


@router.post("/tick/schedule", response_model=TickStatusResponse)
async def update_tick_schedule(
    request: TickScheduleRequest,
    state: ApiStateDep,
) -> TickStatusResponse:
    if request.interval_seconds is not None:
        state.ticks.set_base_interval(request.interval_seconds)
    if request.debug_multiplier is not None:
        state.ticks.set_debug_multiplier(request.debug_multiplier)

    await state.ticks.set_enabled(request.enabled)
    return _tick_status(state)
