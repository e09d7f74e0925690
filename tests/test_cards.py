import pytest

from arenalegends.cards import (
    SpellSpec,
    UnitSpec,
    card_cost,
    deployment_for,
    single_mode_response,
)

ALL_CARDS = range(12)
UNIT_CARDS = range(9)
SPELL_CARDS = range(9, 12)


def test_costs_are_within_elixir_bar():
    for card_id in ALL_CARDS:
        assert 1 <= card_cost(card_id) <= 10


def test_pekka_cost_pinned():
    assert card_cost(5) == 7


@pytest.mark.parametrize("card_id", [-1, 12, 99])
def test_unknown_card_cost_raises(card_id):
    with pytest.raises(ValueError):
        card_cost(card_id)


@pytest.mark.parametrize("card_id", [9, 10, 11, -1, 50])
def test_single_mode_has_no_response(card_id):
    assert single_mode_response(card_id) is None


def test_unit_deployments():
    giant = deployment_for(4)
    assert isinstance(giant, UnitSpec)
    assert giant.name == "Giant"
    assert giant.hp == 4091
    pekka = deployment_for(5)
    assert pekka.name == "P.E.K.K.A."
    assert pekka.hp == 3760
    assert deployment_for(7).name == "Hog Rider"


def test_every_unit_card_deploys_units_with_positive_stats():
    for card_id in UNIT_CARDS:
        spec = deployment_for(card_id)
        assert isinstance(spec, UnitSpec)
        assert spec.hp > 0 and spec.atk > 0 and spec.count >= 1


def test_group_cards_deploy_several_units():
    assert deployment_for(1).count == deployment_for(8).count
    assert deployment_for(1).count > deployment_for(0).count
    assert deployment_for(3).count > deployment_for(8).count


def test_spell_deployments():
    names = [deployment_for(card_id).name for card_id in SPELL_CARDS]
    assert names == ["Zap", "Poison", "Heal"]
    assert all(isinstance(deployment_for(card_id), SpellSpec) for card_id in SPELL_CARDS)
    assert deployment_for(11).atk_tower == 0


def test_unknown_deployment_is_none():
    assert deployment_for(42) is None