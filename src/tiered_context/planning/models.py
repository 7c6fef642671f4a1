"""Pydantic result models for dependency planning queries."""

from __future__ import annotations

from pydantic import BaseModel, Field


class DependencyValidation(BaseModel):
    """Which dependencies of a target are missing from the user's artifacts."""

    target_id: str
    target_name: str
    valid: bool
    missing_required: list[str] = Field(default_factory=list)
    missing_optional: list[str] = Field(default_factory=list)

    @property
    def can_proceed_with_warning(self) -> bool:
        """Generation is allowed but optional context would improve it."""
        return self.valid and bool(self.missing_optional)


class CostLine(BaseModel):
    """Cost of generating a single resource."""

    resource_id: str
    resource_name: str
    cost: float
    estimated_tokens: int = 0


class GenerationCost(BaseModel):
    """Cost to produce a target from scratch, including missing dependencies."""

    target: CostLine
    missing_dependencies: list[CostLine] = Field(default_factory=list)
    missing_inputs: list[str] = Field(default_factory=list)
    total_cost: float
    total_estimated_tokens: int
    resource_count: int


class BatchSummary(BaseModel):
    total: int
    valid: int
    invalid: int
    total_cost: float


class BatchValidation(BaseModel):
    """Validation of several targets against the same available set."""

    valid: bool
    validations: list[DependencyValidation]
    summary: BatchSummary


class AvailableResource(BaseModel):
    """A resource whose required dependencies are all satisfied."""

    resource_id: str
    resource_name: str
    tier: int
    category: str
    estimated_cost: float
    estimated_tokens: int
    impact_statement: str = ""
    optional_missing_count: int = 0

    @property
    def has_optional_missing(self) -> bool:
        return self.optional_missing_count > 0
