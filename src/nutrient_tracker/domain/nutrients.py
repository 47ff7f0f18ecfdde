"""Nutrient reference data."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class NutrientDefinition:
    """Daily target and descriptive text for a tracked nutrient."""

    name: str
    target: float
    unit: str
    purpose: str
    sources: str
    recommendations: str


class NutrientCatalog(Mapping[str, NutrientDefinition]):
    """Read-only, ordered table of nutrient definitions keyed by name."""

    def __init__(self, definitions: list[NutrientDefinition]) -> None:
        entries: dict[str, NutrientDefinition] = {}
        for definition in definitions:
            if definition.name in entries:
                raise ValueError(f"Duplicate nutrient: {definition.name}")
            entries[definition.name] = definition
        self._entries = MappingProxyType(entries)

    def __getitem__(self, name: str) -> NutrientDefinition:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def names(self) -> tuple[str, ...]:
        """Return nutrient names in catalog order."""
        return tuple(self._entries)

    def target(self, name: str) -> float:
        """Return the daily target for a nutrient, 0.0 when unknown."""
        definition = self._entries.get(name)
        return definition.target if definition else 0.0


DEFAULT_CATALOG = NutrientCatalog(
    [
        NutrientDefinition(
            name="Omega-3",
            target=2,
            unit="g",
            purpose="Brain function & mood regulation",
            sources=(
                "Fatty fish (salmon, mackerel, sardines), flaxseeds, chia seeds, "
                "walnuts"
            ),
            recommendations=(
                "Eat fatty fish 2-3 times per week or take a fish oil supplement"
            ),
        ),
        NutrientDefinition(
            name="Choline",
            target=500,
            unit="mg",
            purpose="Focus & memory support",
            sources="Eggs, liver, beef, chicken, fish, soybeans, quinoa",
            recommendations="Eat 2-3 eggs daily or include organ meats weekly",
        ),
        NutrientDefinition(
            name="Magnesium",
            target=400,
            unit="mg",
            purpose="Neurotransmitter function & stress relief",
            sources="Dark leafy greens, nuts, seeds, whole grains, dark chocolate",
            recommendations=(
                "Include magnesium-rich foods daily or supplement with magnesium "
                "glycinate if needed"
            ),
        ),
        NutrientDefinition(
            name="Vitamin D3",
            target=4000,
            unit="IU",
            purpose="Hormonal & bone health, cognitive support",
            sources="Sunlight exposure, fatty fish, egg yolks, fortified foods",
            recommendations=(
                "Get 15-30 minutes of sunlight daily or supplement, especially in "
                "winter months"
            ),
        ),
        NutrientDefinition(
            name="L-Theanine",
            target=200,
            unit="mg",
            purpose="Focus, relaxation, and alpha brain wave enhancement",
            sources="Green tea, matcha",
            recommendations=(
                "Drink 2-3 cups of green tea daily or supplement for relaxation "
                "and focus"
            ),
        ),
        NutrientDefinition(
            name="Curcumin",
            target=500,
            unit="mg",
            purpose="Neuroprotection & anti-inflammatory effects",
            sources="Turmeric (with black pepper for better absorption)",
            recommendations=(
                "Use turmeric in cooking or supplement with a curcumin extract "
                "with piperine"
            ),
        ),
        NutrientDefinition(
            name="Vitamin B Complex",
            target=100,
            unit="mg",
            purpose=(
                "Neurotransmitter production, energy metabolism, and myelin health"
            ),
            sources="Leafy greens, eggs, meat, fortified foods",
            recommendations=(
                "Include B-rich foods daily or supplement with a high-quality "
                "B-complex"
            ),
        ),
        NutrientDefinition(
            name="Phosphatidylserine",
            target=300,
            unit="mg",
            purpose="Cognitive function & memory",
            sources="Soy lecithin, white beans, egg yolks, chicken liver, mackerel",
            recommendations=(
                "Include soy products and organ meats in diet, or consider "
                "supplementation"
            ),
        ),
        NutrientDefinition(
            name="Iron",
            target=18,
            unit="mg",
            purpose="Oxygen transport & cognitive focus",
            sources="Red meat, spinach, legumes, fortified cereals",
            recommendations=(
                "Consume iron-rich foods with vitamin C for better absorption; "
                "supplement if deficient"
            ),
        ),
        NutrientDefinition(
            name="Zinc",
            target=11,
            unit="mg",
            purpose="Neurogenesis & immune support",
            sources="Shellfish, seeds, nuts, meat",
            recommendations=(
                "Include zinc-rich foods regularly or supplement during periods "
                "of stress or illness"
            ),
        ),
        NutrientDefinition(
            name="Selenium",
            target=55,
            unit="mcg",
            purpose="Antioxidant protection & cognitive health",
            sources="Brazil nuts, fish, eggs, whole grains",
            recommendations=(
                "Eat 1-2 Brazil nuts daily or include selenium-rich foods in meals"
            ),
        ),
        NutrientDefinition(
            name="Alpha-GPC",
            target=500,
            unit="mg",
            purpose="Acetylcholine production & focus",
            sources="Supplements (rare in significant quantities in food)",
            recommendations=(
                "Supplement daily for enhanced memory and focus, especially in "
                "aging adults"
            ),
        ),
        NutrientDefinition(
            name="Creatine",
            target=5,
            unit="g",
            purpose="Energy production, cognitive function & muscle performance",
            sources="Red meat, fish, supplements",
            recommendations=(
                "Take 5g daily as a supplement, especially for vegetarians/vegans"
            ),
        ),
    ]
)
