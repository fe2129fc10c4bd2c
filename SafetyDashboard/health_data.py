"""Disease incidence snapshot and static health guidance."""
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class DiseaseSnapshot:
    """Latest COVID-19 counts for one country."""
    country: str
    today_cases: int = 0
    population: int = 0
    active: int = 0
    tests: int = 0

    def incidence_per_million(self) -> int:
        """New cases today per one million population, rounded."""
        return round(self.today_cases / max(self.population, 1) * 1_000_000)

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> "DiseaseSnapshot":
        # disease.sh reports null for some counts in small territories
        return cls(
            country=data.get("country") or "",
            today_cases=int(data.get("todayCases") or 0),
            population=int(data.get("population") or 0),
            active=int(data.get("active") or 0),
            tests=int(data.get("tests") or 0),
        )


@dataclass(frozen=True)
class HealthGuidance:
    """Informational guidance shown next to the incidence figures."""
    symptoms: Tuple[str, ...] = field(default_factory=tuple)
    prevention: Tuple[str, ...] = field(default_factory=tuple)
    medicines: Tuple[str, ...] = field(default_factory=tuple)


DISCLAIMER = (
    "This section is informational and not a medical prescription. "
    "Consult local health authorities for official guidance."
)


def covid_guidance() -> HealthGuidance:
    return HealthGuidance(
        symptoms=(
            "Fever or chills",
            "Cough, sore throat",
            "Shortness of breath",
            "Loss of taste or smell",
            "Fatigue and body aches",
        ),
        prevention=(
            "Wash hands frequently",
            "Stay home if unwell",
            "Consider mask in crowded indoor spaces",
            "Keep distance from sick individuals",
            "Ensure good ventilation indoors",
        ),
        medicines=(
            "Paracetamol/Acetaminophen for fever (follow label dosing)",
            "Oral rehydration and rest",
            "Seek medical advice for high-risk individuals",
        ),
    )
