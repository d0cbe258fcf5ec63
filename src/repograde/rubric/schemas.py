"""Pydantic models for the rubric configuration."""

from pydantic import BaseModel, ConfigDict, Field


class RubricWeight(BaseModel):
    """One named sub-score: points available and the signal's native max."""

    model_config = ConfigDict(frozen=True)

    name: str
    weight: float = Field(ge=0)
    max: float = Field(gt=0)
    description: str = ""


class Rubric(BaseModel):
    """All rubric weights, in declaration order."""

    model_config = ConfigDict(frozen=True)

    weights: tuple[RubricWeight, ...] = ()

    def get(self, name: str) -> RubricWeight | None:
        for w in self.weights:
            if w.name == name:
                return w
        return None

    def __getitem__(self, name: str) -> RubricWeight:
        weight = self.get(name)
        if weight is None:
            raise KeyError(name)
        return weight

    @property
    def names(self) -> list[str]:
        return [w.name for w in self.weights]

    @property
    def total_weight(self) -> float:
        return sum(w.weight for w in self.weights)
