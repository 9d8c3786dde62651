from typing import Dict, Sequence

import pandas as pd

from .backend_logic import category_average, category_totals
from .model import Category

# ------------------------
# DataFrame views (UI-side)
# ------------------------

SUMMARY_COLUMNS = ["Category", "Weight", "Earned", "Possible", "Average %"]


def summary_frame(categories: Sequence[Category]) -> pd.DataFrame:
    """One row per category, in gradebook order."""
    rows = []
    for category in categories:
        earned, possible = category_totals(category)
        rows.append(
            {
                "Category": category.name,
                "Weight": category.weight,
                "Earned": earned,
                "Possible": possible,
                "Average %": category_average(category) * 100,
            }
        )
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def category_options(categories: Sequence[Category]) -> Dict[int, str]:
    """Category id -> name, for select boxes."""
    return {c.id: c.name for c in categories}
