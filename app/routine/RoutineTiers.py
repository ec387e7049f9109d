from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class RoutineTier:
    """
    Requisitos de uma complexidade de rotina.

    required: tipos que devem ser preenchidos sempre que possível
    preferred: tipos desejáveis depois dos obrigatórios e das preocupações
    optional: tipos de menor prioridade
    max_products: limite de produtos retornados
    """
    name: str
    required: Tuple[str, ...]
    preferred: Tuple[str, ...] = ()
    optional: Tuple[str, ...] = ()
    max_products: int = 0

    def __post_init__(self):
        if self.max_products < len(self.required):
            raise ValueError(
                f"Rotina '{self.name}': max_products ({self.max_products}) "
                f"menor que o número de tipos obrigatórios ({len(self.required)})"
            )

    def slot_band(self, product_type: str) -> Optional[str]:
        """Retorna a faixa ('required', 'preferred', 'optional') do tipo nesta rotina."""
        if product_type in self.required:
            return "required"
        if product_type in self.preferred:
            return "preferred"
        if product_type in self.optional:
            return "optional"
        return None


DEFAULT_COMPLEXITY = "standard"

_CORE_TYPES = ("cleanser", "moisturizer", "sunscreen")

ROUTINE_TIERS: Dict[str, RoutineTier] = {
    "minimal": RoutineTier(
        name="minimal",
        required=_CORE_TYPES,
        optional=("serum",),
        max_products=4,
    ),
    "standard": RoutineTier(
        name="standard",
        required=_CORE_TYPES,
        preferred=("toner", "serum", "eyeCream"),
        optional=("essence", "spotTreatment"),
        max_products=7,
    ),
    "comprehensive": RoutineTier(
        name="comprehensive",
        required=_CORE_TYPES,
        preferred=("toner", "serum", "eyeCream", "essence"),
        optional=("spotTreatment", "faceOil", "sleepingMask", "exfoliant", "faceMask"),
        max_products=12,
    ),
}


def resolve_tier(complexity: Optional[str]) -> Tuple[RoutineTier, bool]:
    """
    Resolve a complexidade da rotina.

    Ausente (None ou '') -> 'standard'. Valor desconhecido, inclusive só
    espaços -> 'standard' com used_fallback=True; nunca lança erro.

    Returns:
        (tier, used_fallback)
    """
    if not complexity:
        return ROUTINE_TIERS[DEFAULT_COMPLEXITY], False
    tier = ROUTINE_TIERS.get(complexity.strip().lower())
    if tier is None:
        return ROUTINE_TIERS[DEFAULT_COMPLEXITY], True
    return tier, False
