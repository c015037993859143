"""Player commands and the processor that validates and applies them."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import ClassVar, Protocol, cast

from worldsim.domain.cities import CityRegistry
from worldsim.domain.diplomacy import DiplomacyRelationGraph
from worldsim.domain.enums import (
    AgreementType,
    CommandError,
    DiplomaticStance,
    WeeklyActionType,
)
from worldsim.domain.models import PlayerID
from worldsim.domain.rules_config import DEFAULT_RULES, CommandRules

logger = logging.getLogger(__name__)


# --- Command variants -----------------------------------------------------------


@dataclass(frozen=True, slots=True)
class _StanceCommand:
    source_player_id: str
    target_player_id: str

    stance: ClassVar[DiplomaticStance]


@dataclass(frozen=True, slots=True)
class DeclareWar(_StanceCommand):
    stance: ClassVar[DiplomaticStance] = DiplomaticStance.WAR


@dataclass(frozen=True, slots=True)
class OfferPeace(_StanceCommand):
    stance: ClassVar[DiplomaticStance] = DiplomaticStance.PEACE


@dataclass(frozen=True, slots=True)
class OfferCeasefire(_StanceCommand):
    stance: ClassVar[DiplomaticStance] = DiplomaticStance.CEASEFIRE


@dataclass(frozen=True, slots=True)
class BreakCeasefire(_StanceCommand):
    stance: ClassVar[DiplomaticStance] = DiplomaticStance.WAR


@dataclass(frozen=True, slots=True)
class AttackCity:
    source_player_id: str
    city_id: str
    intensity: float = 1.0


@dataclass(frozen=True, slots=True)
class SignAgreement:
    source_player_id: str
    target_player_id: str
    agreement_type: AgreementType


@dataclass(frozen=True, slots=True)
class BreakAgreement:
    source_player_id: str
    target_player_id: str
    agreement_type: AgreementType


Command = (
    DeclareWar
    | OfferPeace
    | OfferCeasefire
    | BreakCeasefire
    | AttackCity
    | SignAgreement
    | BreakAgreement
)


# --- Execution ------------------------------------------------------------------


class TurnClock(Protocol):
    """Read access to the current turn and weekly phase."""

    @property
    def turn(self) -> int: ...

    @property
    def phase(self) -> WeeklyActionType: ...


@dataclass(slots=True)
class CommandResult:
    """Outcome of a command execution."""

    success: bool
    error: CommandError | None = None
    detail: str | None = None

    def __bool__(self) -> bool:
        return self.success


@dataclass(slots=True)
class CommandContext:
    """Shared context passed to every command handler."""

    cities: CityRegistry
    diplomacy: DiplomacyRelationGraph
    clock: TurnClock
    rules: CommandRules = DEFAULT_RULES.commands


CommandHandler = Callable[[CommandContext, Command], CommandResult]


class CommandProcessor:
    """Validates a single command and applies it when every precondition holds."""

    def __init__(self, context: CommandContext) -> None:
        self._context = context

    @property
    def context(self) -> CommandContext:
        return self._context

    def execute(self, command: Command | None) -> CommandResult:
        return execute_command(self._context, command)

    def execute_batch(self, commands: list[Command]) -> list[CommandResult]:
        """Execute commands in order; a failure never stops the rest of the batch."""

        return [self.execute(command) for command in commands]


def execute_command(context: CommandContext, command: Command | None) -> CommandResult:
    """Execute a command using the registered handler."""

    if command is None:
        return _failure(CommandError.UNKNOWN_COMMAND_KIND, "no command supplied")

    handler = _COMMAND_HANDLERS.get(type(command))
    if handler is None:
        detail = f"unsupported command type: {type(command).__name__}"
        logger.warning(detail)
        return _failure(CommandError.UNKNOWN_COMMAND_KIND, detail)

    result = handler(context, command)
    if not result.success:
        logger.debug(
            "%s rejected (%s): %s", type(command).__name__, result.error, result.detail
        )
    return result


# ---------------------------------------------------------------------------
# Registered command handlers


def _handle_stance(context: CommandContext, command: Command) -> CommandResult:
    command = cast(_StanceCommand, command)
    source, target = command.source_player_id, command.target_player_id

    error = context.diplomacy.check_stance_change(source, target)
    if error is not None:
        return _failure(error, f"cannot change stance between {source} and {target}")

    context.diplomacy.set_stance(source, target, command.stance, context.clock.turn)
    return CommandResult(True, detail=f"{source} and {target} now at {command.stance}")


def _handle_attack_city(context: CommandContext, command: Command) -> CommandResult:
    command = cast(AttackCity, command)
    city = context.cities.find(command.city_id)
    if city is None:
        return _failure(CommandError.NOT_FOUND, f"city {command.city_id} not found")

    owner = city.owner_player_id
    if owner == command.source_player_id:
        return _failure(CommandError.SELF_TARGETING, "cannot attack an owned city")
    if not context.diplomacy.can_attack(command.source_player_id, owner):
        return _failure(
            CommandError.NOT_AT_WAR,
            f"{command.source_player_id} is not at war with the owner of {city.id}",
        )
    if context.rules.attack_requires_war_phase and context.clock.phase != WeeklyActionType.WAR:
        return _failure(CommandError.INVALID_PHASE, "attacks are only allowed in the war phase")

    intensity = max(0.0, command.intensity)
    context.cities.apply_battle(city.id, intensity, attacker_id=command.source_player_id)
    return CommandResult(True, detail=f"{city.id} attacked with intensity {intensity:.1f}")


def _handle_sign_agreement(context: CommandContext, command: Command) -> CommandResult:
    command = cast(SignAgreement, command)
    if context.clock.phase != WeeklyActionType.DIPLOMACY:
        return _failure(
            CommandError.INVALID_PHASE, "agreements can only be signed in the diplomacy phase"
        )
    if not command.source_player_id or not command.source_player_id.strip():
        return _failure(CommandError.INVALID_PLAYER_ID, "agreement requires a source player")

    context.diplomacy.sign_agreement(
        PlayerID(command.source_player_id),
        PlayerID(command.target_player_id),
        command.agreement_type,
        context.clock.turn,
    )
    return CommandResult(True, detail=f"{command.agreement_type} agreement signed")


def _handle_break_agreement(context: CommandContext, command: Command) -> CommandResult:
    command = cast(BreakAgreement, command)
    broken = context.diplomacy.break_agreement(
        PlayerID(command.source_player_id),
        PlayerID(command.target_player_id),
        command.agreement_type,
    )
    if not broken:
        return _failure(CommandError.NOT_FOUND, "no unbroken matching agreement")
    return CommandResult(True, detail=f"{command.agreement_type} agreement broken")


_COMMAND_HANDLERS: dict[type, CommandHandler] = {
    DeclareWar: _handle_stance,
    OfferPeace: _handle_stance,
    OfferCeasefire: _handle_stance,
    BreakCeasefire: _handle_stance,
    AttackCity: _handle_attack_city,
    SignAgreement: _handle_sign_agreement,
    BreakAgreement: _handle_break_agreement,
}


def _failure(error: CommandError, detail: str) -> CommandResult:
    return CommandResult(False, error, detail)
