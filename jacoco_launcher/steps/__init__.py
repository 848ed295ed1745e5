"""Pipeline steps: service launch, report generation and upload."""
