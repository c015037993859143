from typing import Annotated, Literal

from pydantic import BaseModel, Field

from worldsim.domain import commands as cmd
from worldsim.domain.enums import AgreementType


class _StanceCommandBase(BaseModel):
    source_player_id: str = Field(..., min_length=1, description="Player issuing the command")
    target_player_id: str = Field(..., min_length=1, description="Player the stance applies to")


class DeclareWarRequest(_StanceCommandBase):
    kind: Literal["declare_war"] = "declare_war"

    def to_command(self) -> cmd.Command:
        return cmd.DeclareWar(self.source_player_id, self.target_player_id)


class OfferPeaceRequest(_StanceCommandBase):
    kind: Literal["offer_peace"] = "offer_peace"

    def to_command(self) -> cmd.Command:
        return cmd.OfferPeace(self.source_player_id, self.target_player_id)


class OfferCeasefireRequest(_StanceCommandBase):
    kind: Literal["offer_ceasefire"] = "offer_ceasefire"

    def to_command(self) -> cmd.Command:
        return cmd.OfferCeasefire(self.source_player_id, self.target_player_id)


class BreakCeasefireRequest(_StanceCommandBase):
    kind: Literal["break_ceasefire"] = "break_ceasefire"

    def to_command(self) -> cmd.Command:
        return cmd.BreakCeasefire(self.source_player_id, self.target_player_id)


class AttackCityRequest(BaseModel):
    kind: Literal["attack_city"] = "attack_city"
    source_player_id: str = Field(..., min_length=1, description="Attacking player")
    city_id: str = Field(..., min_length=1, description="City under attack")
    intensity: float = Field(default=1.0, ge=0.0, description="Battle intensity")

    def to_command(self) -> cmd.Command:
        return cmd.AttackCity(self.source_player_id, self.city_id, self.intensity)


class SignAgreementRequest(BaseModel):
    kind: Literal["sign_agreement"] = "sign_agreement"
    source_player_id: str = Field(..., min_length=1, description="Signing player")
    target_player_id: str = Field(..., min_length=1, description="Counterparty")
    agreement_type: AgreementType

    def to_command(self) -> cmd.Command:
        return cmd.SignAgreement(self.source_player_id, self.target_player_id, self.agreement_type)


class BreakAgreementRequest(BaseModel):
    kind: Literal["break_agreement"] = "break_agreement"
    source_player_id: str = Field(..., min_length=1, description="Player breaking the pact")
    target_player_id: str = Field(..., min_length=1, description="Counterparty")
    agreement_type: AgreementType

    def to_command(self) -> cmd.Command:
        return cmd.BreakAgreement(
            self.source_player_id, self.target_player_id, self.agreement_type
        )


AnyCommandRequest = (
    DeclareWarRequest
    | OfferPeaceRequest
    | OfferCeasefireRequest
    | BreakCeasefireRequest
    | AttackCityRequest
    | SignAgreementRequest
    | BreakAgreementRequest
)

CommandRequest = Annotated[AnyCommandRequest, Field(discriminator="kind")]


class CommandResponse(BaseModel):
    success: bool = Field(..., description="Whether the command was applied")
    error: str | None = Field(None, description="Reason the command was rejected")
    detail: str | None = Field(None, description="Human readable outcome")
