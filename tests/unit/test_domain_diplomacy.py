"""Tests for diplomatic stances and agreement ledgers."""

from hypothesis import given
from hypothesis import strategies as st

from worldsim.domain.diplomacy import DiplomacyRelationGraph
from worldsim.domain.enums import AgreementType, CommandError, DiplomaticStance, TrustTitle
from worldsim.domain.models import PlayerID

HUMAN = PlayerID("player-human-1")
BOT = PlayerID("player-bot-1")
OTHER = PlayerID("player-bot-2")


def _graph(*members: PlayerID) -> DiplomacyRelationGraph:
    graph = DiplomacyRelationGraph()
    for member in members or (HUMAN, BOT):
        graph.add_member(member)
    return graph


class TestMembership:
    def test_new_member_gets_neutral_relations_both_ways(self):
        graph = _graph(HUMAN, BOT, OTHER)

        for source, target in [(HUMAN, BOT), (BOT, HUMAN), (OTHER, HUMAN), (BOT, OTHER)]:
            relation = graph.get_relation(source, target)
            assert relation is not None
            assert relation.stance == DiplomaticStance.NEUTRAL

        assert graph.get_relation(HUMAN, HUMAN) is None
        assert len(graph.relations()) == 6

    def test_unknown_pair_reads_neutral_without_creating(self):
        graph = _graph()

        assert graph.get_stance("player-x", "player-y") == DiplomaticStance.NEUTRAL
        assert graph.get_relation("player-x", "player-y") is None


class TestStances:
    def test_set_stance_is_symmetric(self):
        graph = _graph()

        assert graph.set_stance(HUMAN, BOT, DiplomaticStance.CEASEFIRE, turn=3) is True

        forward = graph.get_relation(HUMAN, BOT)
        mirrored = graph.get_relation(BOT, HUMAN)
        assert forward is not None and mirrored is not None
        assert forward.stance == mirrored.stance == DiplomaticStance.CEASEFIRE
        assert forward.last_updated_turn == mirrored.last_updated_turn == 3

    def test_unknown_player_is_refused(self):
        graph = _graph()

        assert graph.check_stance_change(HUMAN, "player-ghost") == CommandError.NOT_FOUND
        assert graph.check_stance_change(None, BOT) == CommandError.NOT_FOUND
        assert graph.set_stance(HUMAN, "player-ghost", DiplomaticStance.WAR, 0) is False
        assert graph.get_relation(HUMAN, "player-ghost") is None

    def test_self_targeting_is_refused(self):
        graph = _graph()

        assert graph.check_stance_change(HUMAN, HUMAN) == CommandError.SELF_TARGETING
        assert graph.set_stance(HUMAN, HUMAN, DiplomaticStance.WAR, 0) is False

    def test_returned_relation_is_a_copy(self):
        graph = _graph()

        relation = graph.get_relation(HUMAN, BOT)
        assert relation is not None
        relation.stance = DiplomaticStance.WAR

        assert graph.get_stance(HUMAN, BOT) == DiplomaticStance.NEUTRAL

    def test_can_attack_only_at_war(self):
        graph = _graph()
        assert graph.can_attack(HUMAN, BOT) is False

        graph.set_stance(BOT, HUMAN, DiplomaticStance.WAR, 1)

        assert graph.can_attack(HUMAN, BOT) is True
        assert graph.can_attack(BOT, HUMAN) is True
        assert graph.can_attack(HUMAN, HUMAN) is False
        assert graph.can_attack(HUMAN, None) is False
        assert graph.can_attack("  ", BOT) is False

    @given(
        changes=st.lists(
            st.tuples(
                st.sampled_from([HUMAN, BOT, OTHER]),
                st.sampled_from([HUMAN, BOT, OTHER]),
                st.sampled_from(list(DiplomaticStance)),
            ),
            max_size=20,
        )
    )
    def test_stances_remain_symmetric(self, changes):
        graph = _graph(HUMAN, BOT, OTHER)
        for turn, (source, target, stance) in enumerate(changes):
            graph.set_stance(source, target, stance, turn)

        for relation in graph.relations():
            assert relation.stance == graph.get_stance(
                relation.target_player_id, relation.source_player_id
            )


class TestAgreements:
    def test_signing_marks_loyal(self):
        graph = _graph()

        agreement = graph.sign_agreement(HUMAN, BOT, AgreementType.TRADE, turn=0)

        assert agreement.is_broken is False
        assert graph.get_trust_title(HUMAN) == TrustTitle.LOYAL
        assert graph.get_trust_title(BOT) == TrustTitle.NEUTRAL
        assert graph.agreements_for(HUMAN) == [agreement]

    def test_breaking_marks_unreliable_for_good(self):
        graph = _graph()
        graph.sign_agreement(HUMAN, BOT, AgreementType.TRADE, turn=0)

        assert graph.break_agreement(HUMAN, BOT, AgreementType.TRADE) is True
        assert graph.get_trust_title(HUMAN) == TrustTitle.UNRELIABLE

        graph.sign_agreement(HUMAN, BOT, AgreementType.NON_AGGRESSION, turn=1)
        assert graph.get_trust_title(HUMAN) == TrustTitle.UNRELIABLE

    def test_breaking_twice_fails(self):
        graph = _graph()
        graph.sign_agreement(HUMAN, BOT, AgreementType.TRADE, turn=0)

        assert graph.break_agreement(HUMAN, BOT, AgreementType.TRADE) is True
        assert graph.break_agreement(HUMAN, BOT, AgreementType.TRADE) is False

    def test_break_only_matches_type_and_target(self):
        graph = _graph(HUMAN, BOT, OTHER)
        graph.sign_agreement(HUMAN, BOT, AgreementType.TRADE, turn=0)

        assert graph.break_agreement(HUMAN, BOT, AgreementType.NON_AGGRESSION) is False
        assert graph.break_agreement(HUMAN, OTHER, AgreementType.TRADE) is False
        assert graph.break_agreement(BOT, HUMAN, AgreementType.TRADE) is False
        assert graph.get_trust_title(HUMAN) == TrustTitle.LOYAL

    def test_break_hits_first_unbroken_match(self):
        graph = _graph()
        graph.sign_agreement(HUMAN, BOT, AgreementType.TRADE, turn=0)
        graph.sign_agreement(HUMAN, BOT, AgreementType.TRADE, turn=1)

        graph.break_agreement(HUMAN, BOT, AgreementType.TRADE)

        assert [a.is_broken for a in graph.agreements_for(HUMAN)] == [True, False]

    def test_clear_relations_keeps_ledgers(self):
        graph = _graph()
        graph.sign_agreement(HUMAN, BOT, AgreementType.TRADE, turn=0)
        graph.break_agreement(HUMAN, BOT, AgreementType.TRADE)

        graph.clear_relations()

        assert graph.relations() == []
        assert graph.is_member(HUMAN) is False
        assert graph.get_trust_title(HUMAN) == TrustTitle.UNRELIABLE
        assert len(graph.agreements_for(HUMAN)) == 1

    def test_clear_forgets_everything(self):
        graph = _graph()
        graph.sign_agreement(HUMAN, BOT, AgreementType.TRADE, turn=0)

        graph.clear()

        assert graph.relations() == []
        assert graph.agreements_for(HUMAN) == []
        assert graph.is_member(HUMAN) is False
