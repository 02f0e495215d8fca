"""
Pydantic schemas for the flow-monitor API.
"""

from pydantic import BaseModel, Field

from ..monitoring_service import RegistrationResult


class TargetSchema(BaseModel):
    """Scrape target as echoed back to the caller."""
    name: str = Field("", description="Service name, discovered by Prometheus as tasks.<name>")
    port: int = Field(0, description="Port Prometheus scrapes")


class RuleSchema(BaseModel):
    """Alert rule as echoed back to the caller (normalized name)."""
    name: str = Field("", description="Normalized alert name")
    condition: str = Field("", description="Alert condition (IF)")
    source: str = Field("", description="Alert source (FROM), empty when not specified")


class RegistrationResponse(BaseModel):
    """Response for a registration."""
    status: str = Field(..., description="OK when the config was written and Prometheus reloaded, NOK otherwise")
    target: TargetSchema
    rule: RuleSchema

    @classmethod
    def from_result(cls, result: RegistrationResult) -> "RegistrationResponse":
        return cls(
            status=result.status,
            target=TargetSchema(name=result.target.name, port=result.target.port),
            rule=RuleSchema(
                name=result.rule.name,
                condition=result.rule.condition,
                source=result.rule.source,
            ),
        )
