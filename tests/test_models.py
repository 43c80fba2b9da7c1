import copy
import json

import pytest

from calculations import calculate
from models import (NOT_COMPUTABLE, FermentableAddition, HopAddition, NotComputable,
                    Recipe, RecipeMetrics, is_computable)


def test_not_computable_is_a_falsy_singleton():
    assert NotComputable() is NOT_COMPUTABLE
    assert copy.deepcopy(NOT_COMPUTABLE) is NOT_COMPUTABLE
    assert not NOT_COMPUTABLE
    assert repr(NOT_COMPUTABLE) == 'NOT_COMPUTABLE'
    assert not is_computable(NOT_COMPUTABLE)
    assert is_computable(0.0)


def test_not_computable_refuses_arithmetic():
    with pytest.raises(TypeError):
        NOT_COMPUTABLE - 1
    with pytest.raises(TypeError):
        1.05 * NOT_COMPUTABLE


def test_fermentable_extract_points():
    assert FermentableAddition('Pale', 1, 37).extract_points() == pytest.approx(81.57094)


def test_ingredient_validity():
    assert FermentableAddition('Pale', 4.5, 37).is_valid()
    assert not FermentableAddition('Pale', 0, 37).is_valid()
    assert not FermentableAddition('Pale', 4.5, 0).is_valid()
    assert HopAddition('Cascade', 25, 0.06, 0).is_valid()
    assert not HopAddition('Cascade', 0, 0.06, 60).is_valid()
    assert not HopAddition('Cascade', 25, 0, 60).is_valid()
    assert not HopAddition('Cascade', 25, 0.06, -5).is_valid()


def test_ingredient_validity_rejects_non_numbers():
    assert not FermentableAddition('Pale', None, 37).is_valid()
    assert not FermentableAddition('Pale', '4.5', 37).is_valid()
    assert not FermentableAddition('Pale', float('nan'), 37).is_valid()
    assert not HopAddition('Cascade', 25, None, 60).is_valid()
    assert not HopAddition('Cascade', 25, 0.06, None).is_valid()


def test_hop_ibu_contribution():
    hop = HopAddition('Cascade', 25, 0.06, 60)
    assert hop.ibu_contribution(20, 0.25) == pytest.approx(1.875)
    assert hop.ibu_contribution(20, 0) == 0


def test_recipe_from_dict_defaults():
    recipe = Recipe.from_dict({'final_volume': 20})
    assert recipe.preboil_volume is None
    assert recipe.efficiency is None
    assert recipe.fermentables == []
    assert recipe.hops == []


def test_recipe_round_trip_gives_identical_metrics(pale_ale):
    restored = Recipe.from_dict(json.loads(json.dumps(pale_ale.to_dict())))

    assert restored.to_dict() == pale_ale.to_dict()
    assert calculate(restored) == calculate(pale_ale)
    assert json.dumps(calculate(restored).to_dict()) == json.dumps(calculate(pale_ale).to_dict())


def test_round_trip_keeps_unknown_values():
    recipe = Recipe(None, None, 0.7, 0.0)
    restored = Recipe.from_dict(json.loads(json.dumps(recipe.to_dict())))
    assert calculate(restored) == calculate(recipe)


def test_metrics_to_dict_uses_null_for_not_computable():
    metrics = RecipeMetrics(1.05, 1.037, 20.0, NOT_COMPUTABLE, NOT_COMPUTABLE)
    assert metrics.to_dict() == {
        'og': 1.05, 'boil_gravity': 1.037, 'ibu': 20.0, 'fg': None, 'abv': None
    }


def test_metrics_equality():
    a = RecipeMetrics(1.05, 1.05, 0, NOT_COMPUTABLE, NOT_COMPUTABLE)
    assert a == RecipeMetrics(1.05, 1.05, 0, NOT_COMPUTABLE, NOT_COMPUTABLE)
    assert a != RecipeMetrics(1.05, 1.05, 0, 1.01, NOT_COMPUTABLE)
