from typing import Any

import pytest
from pydantic import TypeAdapter, ValidationError

from worldsim.domain import commands as cmd
from worldsim.domain.enums import AgreementType
from worldsim.schemas import (
    CommandRequest,
    PlayerCreate,
    SessionSetupRequest,
    TickAdvanceRequest,
    TickScheduleRequest,
)

COMMANDS = TypeAdapter(CommandRequest)


@pytest.mark.parametrize(
    ("payload", "expected"),
    [
        (
            {"kind": "declare_war", "source_player_id": "a", "target_player_id": "b"},
            cmd.DeclareWar("a", "b"),
        ),
        (
            {"kind": "offer_peace", "source_player_id": "a", "target_player_id": "b"},
            cmd.OfferPeace("a", "b"),
        ),
        (
            {"kind": "offer_ceasefire", "source_player_id": "a", "target_player_id": "b"},
            cmd.OfferCeasefire("a", "b"),
        ),
        (
            {"kind": "break_ceasefire", "source_player_id": "a", "target_player_id": "b"},
            cmd.BreakCeasefire("a", "b"),
        ),
        (
            {"kind": "attack_city", "source_player_id": "a", "city_id": "city-x"},
            cmd.AttackCity("a", "city-x", 1.0),
        ),
        (
            {
                "kind": "sign_agreement",
                "source_player_id": "a",
                "target_player_id": "b",
                "agreement_type": "non_aggression",
            },
            cmd.SignAgreement("a", "b", AgreementType.NON_AGGRESSION),
        ),
        (
            {
                "kind": "break_agreement",
                "source_player_id": "a",
                "target_player_id": "b",
                "agreement_type": "trade",
            },
            cmd.BreakAgreement("a", "b", AgreementType.TRADE),
        ),
    ],
)
def test_command_request_maps_to_domain(payload: dict[str, Any], expected):
    request = COMMANDS.validate_python(payload)
    assert request.to_command() == expected


def test_command_request_rejects_unknown_kind():
    with pytest.raises(ValidationError):
        COMMANDS.validate_python({"kind": "march", "source_player_id": "a"})


def test_attack_intensity_must_be_non_negative():
    with pytest.raises(ValidationError):
        COMMANDS.validate_python(
            {"kind": "attack_city", "source_player_id": "a", "city_id": "c", "intensity": -1}
        )


def test_player_create_requires_id():
    with pytest.raises(ValidationError):
        PlayerCreate(player_id="")
    assert PlayerCreate(player_id="p").display_name is None


def test_defaults():
    assert SessionSetupRequest().model_dump() == {"human_count": 1, "bot_count": 3}
    assert TickAdvanceRequest().turns == 1
    schedule = TickScheduleRequest(enabled=False)
    assert schedule.interval_seconds is None
    assert schedule.debug_multiplier is None


def test_tick_advance_bounds():
    with pytest.raises(ValidationError):
        TickAdvanceRequest(turns=101)
