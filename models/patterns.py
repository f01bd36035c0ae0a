"""
Pydantic v2 models for the corridor pattern YAML.

The file lists the obstacle formations the corridor spawner can choose from,
their relative weights and the obstacle kind each slot uses.

Example:
    patterns:
      - name: wall
        weight: 2
        formation: wall
        kind: pillar
        size: [46, 90]
"""

from typing import List, Literal, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

FormationName = Literal["single", "pair", "wall", "slalom", "spray"]
PatternKind = Literal["crate", "pillar", "turret"]


class PatternConfig(BaseModel):
    """One obstacle formation template."""
    model_config = {"frozen": True}

    name: str = Field(description="Unique pattern name")
    weight: float = Field(description="Relative selection weight", gt=0.0)
    formation: FormationName = Field(description="Placement layout")
    kind: PatternKind = Field(default="crate", description="Obstacle kind for each slot")
    size: Tuple[float, float] = Field(
        default=(44.0, 44.0),
        description="Obstacle (width, height) in pixels",
    )
    turret_chance: float = Field(
        default=0.0,
        description="Chance per slot to spawn a turret instead of kind",
        ge=0.0,
        le=1.0,
    )
    min_section: int = Field(default=1, description="First section this pattern may appear in", ge=1)

    @field_validator('size')
    @classmethod
    def validate_size(cls, v: Tuple[float, float]) -> Tuple[float, float]:
        """Obstacle dimensions must be positive."""
        if v[0] <= 0 or v[1] <= 0:
            raise ValueError(f'size must be positive, got {v}')
        return v


class PatternSet(BaseModel):
    """All patterns available to the corridor spawner."""
    model_config = {"frozen": True}

    patterns: List[PatternConfig] = Field(min_length=1)

    @model_validator(mode='after')
    def validate_unique_names(self) -> 'PatternSet':
        """Pattern names must be unique."""
        names = [p.name for p in self.patterns]
        if len(names) != len(set(names)):
            raise ValueError(f'duplicate pattern names in {names}')
        return self

    def available(self, section: int) -> List[PatternConfig]:
        """Patterns allowed in the given section."""
        return [p for p in self.patterns if p.min_section <= section]
