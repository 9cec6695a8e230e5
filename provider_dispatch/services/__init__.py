"""Pure engine services: criteria, capability, eligibility, readiness, SLA."""
