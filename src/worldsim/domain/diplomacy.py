"""Diplomatic stances between players and their agreement ledgers."""

from __future__ import annotations

from dataclasses import replace

from worldsim.domain.enums import AgreementType, CommandError, DiplomaticStance, TrustTitle
from worldsim.domain.models import (
    DiplomacyAgreement,
    DiplomacyRelation,
    PlayerDiplomacyState,
    PlayerID,
)

RelationKey = tuple[PlayerID, PlayerID]


def _is_blank(player_id: str | None) -> bool:
    return player_id is None or not player_id.strip()


class DiplomacyRelationGraph:
    """Per-ordered-pair stance table kept symmetric by every write.

    The graph tracks which players are members so it can refuse stance
    changes involving unknown players without consulting the player registry.
    """

    def __init__(self) -> None:
        self._members: dict[PlayerID, None] = {}
        self._relations: dict[RelationKey, DiplomacyRelation] = {}
        self._states: dict[PlayerID, PlayerDiplomacyState] = {}

    # --- membership -------------------------------------------------------------

    def add_member(self, player_id: PlayerID, turn: int = 0) -> None:
        """Add a player and open Neutral relations both ways with every member."""

        for other in self._members:
            if other == player_id:
                continue
            self.get_or_create_relation(player_id, other, turn)
            self.get_or_create_relation(other, player_id, turn)
        self._members[player_id] = None

    def is_member(self, player_id: str | None) -> bool:
        return player_id is not None and PlayerID(player_id) in self._members

    # --- stances ----------------------------------------------------------------

    def get_or_create_relation(
        self,
        source: PlayerID,
        target: PlayerID,
        turn: int = 0,
    ) -> DiplomacyRelation:
        key = (source, target)
        relation = self._relations.get(key)
        if relation is None:
            relation = DiplomacyRelation(
                source_player_id=source,
                target_player_id=target,
                stance=DiplomaticStance.NEUTRAL,
                last_updated_turn=turn,
            )
            self._relations[key] = relation
        return relation

    def get_relation(self, source: str, target: str) -> DiplomacyRelation | None:
        """Return a copy of the stored relation, if any."""

        relation = self._relations.get((PlayerID(source), PlayerID(target)))
        return replace(relation) if relation is not None else None

    def relations(self) -> list[DiplomacyRelation]:
        return [replace(relation) for relation in self._relations.values()]

    def get_stance(self, source: str, target: str) -> DiplomaticStance:
        relation = self._relations.get((PlayerID(source), PlayerID(target)))
        return relation.stance if relation is not None else DiplomaticStance.NEUTRAL

    def check_stance_change(self, source: str | None, target: str | None) -> CommandError | None:
        """Return why a stance change between the pair would be refused, if it would."""

        if not self.is_member(source) or not self.is_member(target):
            return CommandError.NOT_FOUND
        if source == target:
            return CommandError.SELF_TARGETING
        return None

    def set_stance(
        self,
        source: str,
        target: str,
        stance: DiplomaticStance,
        turn: int,
    ) -> bool:
        """Set the stance in both directions; neither direction changes on failure."""

        if self.check_stance_change(source, target) is not None:
            return False

        forward = self.get_or_create_relation(PlayerID(source), PlayerID(target), turn)
        mirrored = self.get_or_create_relation(PlayerID(target), PlayerID(source), turn)
        for relation in (forward, mirrored):
            relation.stance = stance
            relation.last_updated_turn = turn
        return True

    def can_attack(self, source: str | None, target: str | None) -> bool:
        if _is_blank(source) or _is_blank(target) or source == target:
            return False
        return self.get_stance(source, target) == DiplomaticStance.WAR

    # --- agreements -------------------------------------------------------------

    def get_or_create_state(self, player_id: PlayerID) -> PlayerDiplomacyState:
        state = self._states.get(player_id)
        if state is None:
            state = PlayerDiplomacyState(player_id=player_id, trust_title=TrustTitle.NEUTRAL)
            self._states[player_id] = state
        return state

    def sign_agreement(
        self,
        source: PlayerID,
        target: PlayerID,
        agreement_type: AgreementType,
        turn: int,
    ) -> DiplomacyAgreement:
        state = self.get_or_create_state(source)
        agreement = DiplomacyAgreement(
            source_player_id=source,
            target_player_id=target,
            type=agreement_type,
            signed_turn=turn,
            is_broken=False,
        )
        state.agreements.append(agreement)
        state.mark_loyal_behavior()
        return agreement

    def break_agreement(
        self,
        source: PlayerID,
        target: PlayerID,
        agreement_type: AgreementType,
    ) -> bool:
        """Break the first unbroken matching agreement; False if there is none."""

        state = self._states.get(source)
        if state is None:
            return False

        agreement = next(
            (
                item
                for item in state.agreements
                if item.target_player_id == target
                and item.type == agreement_type
                and not item.is_broken
            ),
            None,
        )
        if agreement is None:
            return False

        agreement.is_broken = True
        state.mark_breach()
        return True

    def get_trust_title(self, player_id: str) -> TrustTitle:
        state = self._states.get(PlayerID(player_id))
        return state.trust_title if state is not None else TrustTitle.NEUTRAL

    def agreements_for(self, player_id: str) -> list[DiplomacyAgreement]:
        state = self._states.get(PlayerID(player_id))
        if state is None:
            return []
        return [replace(agreement) for agreement in state.agreements]

    def clear_relations(self) -> None:
        """Forget members and stances; agreement ledgers and trust titles persist."""

        self._members.clear()
        self._relations.clear()

    def clear(self) -> None:
        self.clear_relations()
        self._states.clear()
