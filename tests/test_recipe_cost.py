import pytest

from cmv_app.models import Recipe, RecipeIngredient
from cmv_app.schemas.recipe import CmvStatus
from cmv_app.services.recipe_cost import calculate_recipe_cost, classify_cmv, cmv_percentage


def test_seed_recipe_cost(catalog):
    recipe = catalog.get_recipe("1")

    cost = calculate_recipe_cost(recipe, catalog.ingredient_index())

    # 0.2*69.90 + 0.05*4.50 + 0.01*25 + 0.015*45 + 0.005*2
    assert cost.total_cost == pytest.approx(15.14)
    assert cost.cmv_percentage == pytest.approx(15.14 / 59.90 * 100)
    assert cost.cmv_status == CmvStatus.GOOD
    assert cost.gross_margin == pytest.approx(59.90 - 15.14)
    assert cost.cost_per_serving == pytest.approx(15.14)
    assert cost.missing_ingredient_ids == []
    assert [line.ingredient_name for line in cost.lines][0] == "Filé Mignon"


def test_cost_is_invariant_under_permutation(catalog):
    recipe = catalog.get_recipe("1")
    reversed_recipe = recipe.model_copy(update={"ingredients": list(reversed(recipe.ingredients))})
    index = catalog.ingredient_index()

    assert calculate_recipe_cost(reversed_recipe, index).total_cost == pytest.approx(
        calculate_recipe_cost(recipe, index).total_cost
    )


def test_cost_follows_current_ingredient_costs(catalog):
    recipe = catalog.get_recipe("2")
    before = calculate_recipe_cost(recipe, catalog.ingredient_index()).total_cost

    rice = catalog.get_ingredient("1")
    catalog.replace_ingredient(rice.model_copy(update={"cost_per_unit": 7.50}))

    after = calculate_recipe_cost(recipe, catalog.ingredient_index()).total_cost
    assert after - before == pytest.approx(0.25 * 2.0)


def test_removed_ingredient_is_flagged_not_free(catalog):
    catalog.remove_ingredient("3")
    recipe = catalog.get_recipe("1")

    cost = calculate_recipe_cost(recipe, catalog.ingredient_index())

    assert cost.missing_ingredient_ids == ["3"]
    assert cost.total_cost == pytest.approx(15.14 - 13.98)
    removed = [line for line in cost.lines if line.removed]
    assert len(removed) == 1
    assert removed[0].ingredient_name == "removed item"
    assert removed[0].subtotal == 0


def test_zero_sale_price_is_not_computable(catalog):
    recipe = Recipe(name="Staff meal", sale_price=0, ingredients=[RecipeIngredient(ingredient_id="1", quantity=1)])

    cost = calculate_recipe_cost(recipe, catalog.ingredient_index())

    assert cost.cmv_percentage == 0
    assert cost.cmv_status is None
    assert cost.total_cost == pytest.approx(5.50)


def test_zero_yield_has_no_cost_per_serving(catalog):
    recipe = Recipe(name="Base", sale_price=10, yield_servings=0)

    assert calculate_recipe_cost(recipe, catalog.ingredient_index()).cost_per_serving is None


@pytest.mark.parametrize("percentage,expected", [
    (0, CmvStatus.GOOD),
    (28, CmvStatus.GOOD),
    (28.01, CmvStatus.WATCH),
    (35, CmvStatus.WATCH),
    (35.01, CmvStatus.CRITICAL),
    (120, CmvStatus.CRITICAL),
])
def test_classify_cmv(percentage, expected):
    assert classify_cmv(percentage) == expected


def test_classify_cmv_custom_thresholds():
    assert classify_cmv(30, good_threshold=30, critical_threshold=40) == CmvStatus.GOOD
    assert classify_cmv(41, good_threshold=30, critical_threshold=40) == CmvStatus.CRITICAL


def test_cmv_percentage_never_divides_by_zero():
    assert cmv_percentage(10, 0) == 0
    assert cmv_percentage(10, 40) == pytest.approx(25)
