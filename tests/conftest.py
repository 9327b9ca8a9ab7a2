import numpy as np
import pytest


@pytest.fixture
def mixed_lines():
    return [
        "quantity,credit_card,width,height,length,animal",
        "1,visa,3,8,5,cat",
        "1,mastercard,6,4,25,cat",
    ]


@pytest.fixture
def dimension_lines():
    lines = ["a,b,c,d,e"]
    for i in range(1, 11):
        lines.append(f"{i},{i * 2},{i * 3},red,{i % 3}")
    return lines


@pytest.fixture
def separable_data():
    """Intercept plus one feature on [0, 1]; label is x > 0.5."""
    x = np.linspace(0.0, 1.0, 200)
    X = np.column_stack([np.ones_like(x), x])
    y = (x > 0.5).astype(float)
    return X, y


def write_census_csv(path, rows=60):
    workclasses = ["Private", "State-gov", "Self-emp"]
    lines = ["age, workclass, hours_per_week, salary"]
    for i in range(rows):
        age = 20 + (i * 7) % 50
        hours = 20 + (i * 11) % 45
        salary = ">50K" if age + hours > 90 else "<=50K"
        if i == 0:
            salary = "<=50K"
        lines.append(f"{age}, {workclasses[i % 3]}, {hours}, {salary}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def census_csv(tmp_path):
    return write_census_csv(tmp_path / "census.csv")
