from typing import Dict, Tuple

from app.models.Product import normalize_concern

# Tipos de produto que melhor tratam cada preocupação, do mais relevante ao menos
CONCERN_PRIORITY_MAP: Dict[str, Tuple[str, ...]] = {
    "acne": ("spotTreatment", "serum", "cleanser", "toner"),
    "blackheads": ("exfoliant", "cleanser", "toner", "poreMinimizer"),
    "hyperpigmentation": ("serum", "vitaminC", "brightening", "sunscreen"),
    "fine_lines": ("serum", "retinoid", "eyeCream", "antiAging"),
    "wrinkles": ("retinoid", "peptide", "antiAging", "eyeCream"),
    "dullness": ("exfoliant", "vitaminC", "brightening", "essence"),
    "dehydration": ("hydrator", "essence", "hydratingMask", "serum"),
    "dryness": ("moisturizer", "faceOil", "barrierCream", "hydratingMask"),
    "redness": ("soothingCream", "cicaCream", "antiRedness", "barrierCream"),
    "sensitivity": ("barrierCream", "soothingCream", "cicaCream"),
    "pores": ("poreMinimizer", "niacinamide", "exfoliant", "toner"),
    "oiliness": ("sebumControl", "niacinamide", "toner", "cleanser"),
    "chapped_lips": ("lipBalm", "lipCare", "exfoliant"),
    "loss_of_firmness": ("retinoid", "peptide", "antiAging", "eyeCream"),
}


def priority_types(concern: str) -> Tuple[str, ...]:
    """Tipos prioritários da preocupação; vazio se ela não estiver mapeada."""
    return CONCERN_PRIORITY_MAP.get(normalize_concern(concern), ())
