"""Demo data loaded into a fresh catalog"""
from datetime import datetime

from cmv_app.models import Ingredient, Recipe, RecipeIngredient, Supplier, Unit


def seed_suppliers():
    return [
        Supplier(id="1", name="Cerealista Bom Grão", contact="(11) 9999-9999", category="Grãos", rating=4.5),
        Supplier(id="2", name="Casa de Carnes Premium", contact="(11) 8888-8888", category="Carnes", rating=5.0),
        Supplier(id="3", name="Hortifruti Fresco", contact="(11) 7777-7777", category="Hortifruti", rating=4.0),
    ]


def seed_ingredients():
    # Olive oil and salt have no supplier in the directory yet
    return [
        Ingredient(id="1", name="Arroz Agulhinha", unit=Unit.KG, cost_per_unit=5.50, current_stock=50, min_stock=20,
                   supplier_id="1", last_updated=datetime(2023, 10, 25)),
        Ingredient(id="2", name="Feijão Carioca", unit=Unit.KG, cost_per_unit=8.90, current_stock=30, min_stock=15,
                   supplier_id="1", last_updated=datetime(2023, 10, 25)),
        Ingredient(id="3", name="Filé Mignon", unit=Unit.KG, cost_per_unit=69.90, current_stock=12, min_stock=10,
                   supplier_id="2", last_updated=datetime(2023, 10, 26)),
        Ingredient(id="4", name="Cebola", unit=Unit.KG, cost_per_unit=4.50, current_stock=15, min_stock=5,
                   supplier_id="3", last_updated=datetime(2023, 10, 27)),
        Ingredient(id="5", name="Alho", unit=Unit.KG, cost_per_unit=25.00, current_stock=2, min_stock=1,
                   supplier_id="3", last_updated=datetime(2023, 10, 27)),
        Ingredient(id="6", name="Azeite de Oliva", unit=Unit.L, cost_per_unit=45.00, current_stock=5, min_stock=3,
                   supplier_id=None, last_updated=datetime(2023, 10, 20)),
        Ingredient(id="7", name="Batata Inglesa", unit=Unit.KG, cost_per_unit=3.90, current_stock=40, min_stock=20,
                   supplier_id="3", last_updated=datetime(2023, 10, 27)),
        Ingredient(id="8", name="Sal Refinado", unit=Unit.KG, cost_per_unit=2.00, current_stock=10, min_stock=2,
                   supplier_id=None, last_updated=datetime(2023, 10, 15)),
    ]


def seed_recipes():
    return [
        Recipe(
            id="1",
            name="Picadinho de Mignon",
            category="Prato Principal",
            preparation_time_minutes=45,
            yield_servings=1,
            sale_price=59.90,
            last_revision=datetime(2023, 10, 1),
            instructions="Cortar a carne em cubos. Refogar cebola e alho...",
            ingredients=[
                RecipeIngredient(ingredient_id="3", quantity=0.200),
                RecipeIngredient(ingredient_id="4", quantity=0.050),
                RecipeIngredient(ingredient_id="5", quantity=0.010),
                RecipeIngredient(ingredient_id="6", quantity=0.015),
                RecipeIngredient(ingredient_id="8", quantity=0.005),
            ],
        ),
        Recipe(
            id="2",
            name="Arroz Branco (Porção)",
            category="Guarnição",
            preparation_time_minutes=20,
            yield_servings=4,
            sale_price=12.00,
            last_revision=datetime(2023, 9, 15),
            instructions="Refogar alho no azeite, adicionar arroz...",
            ingredients=[
                RecipeIngredient(ingredient_id="1", quantity=0.250),
                RecipeIngredient(ingredient_id="5", quantity=0.010),
                RecipeIngredient(ingredient_id="6", quantity=0.010),
                RecipeIngredient(ingredient_id="8", quantity=0.005),
            ],
        ),
    ]
