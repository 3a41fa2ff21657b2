"""共通フィクスチャ"""

import pytest


SAMPLE_HEADER = ",".join(
    [
        "animal_recipe",
        "animal_recipe_ID",
        "plant_recipe",
        "plant_recipe_ID",
        "animal_GHG Emission (g) / 100g",
        "plant_GHG Emission (g) / 100g",
        "animal_N lost (g) / 100g",
        "plant_N lost (g) / 100g",
        "animal_Freshwater Withdrawals (L) / 100g",
        "plant_Freshwater Withdrawals (L) / 100g",
        "animal_Stress-Weighted Water Use (L) / 100g",
        "plant_Stress-Weighted Water Use (L) / 100g",
        "animal_Land Use (m^2) / 100g",
        "plant_Land Use (m^2) / 100g",
    ]
)

SAMPLE_ROWS = [
    "Beef Chili,101,Bean Chili,201,1200.5,150.25,12,3.5,300,120,9000,4000,15,2.5",
    "Chicken Curry,102,Chickpea Curry,202,500,100,6,2,200,90,7000,3000,7.5,1.5",
    'Tuna Salad,103,"Salad, Chickpea",203,400,0,3,0,150,60,5000,2000,4,0',
]


@pytest.fixture
def sample_csv_text():
    """5 指標すべての列を持つ 3 件のデータセット (末尾改行あり)"""
    return "\n".join([SAMPLE_HEADER] + SAMPLE_ROWS) + "\n"


@pytest.fixture
def truncated_csv_text():
    """最終行の末尾 (植物性 Land Use) が欠けたデータセット"""
    truncated = SAMPLE_ROWS[1].rsplit(",", 1)[0]
    return "\n".join([SAMPLE_HEADER, SAMPLE_ROWS[0], truncated]) + "\n"
