"""
GridRisk — Grid Segment Risk Analysis Worker.

Architecture:
    gridrisk/
    ├── engine/          # Segment scorer, risk aggregator, scoring pipeline
    ├── profiles/        # Analysis profile resolvers (HTTP, in-memory)
    ├── worker/          # Job adapter, mode selection, job client, poll loop
    ├── config.py        # Pydantic settings (env / .env)
    ├── exceptions.py    # Error taxonomy reported back to the engine
    └── logging_config.py

Module Boundaries:
    - The workflow engine owns process state; the worker only completes or fails jobs
    - The profile service owns weights; the worker fetches one profile per job
    - Scoring is pure: same inputs + same profile → byte-identical output

Data Flow:
    Job Worker → Job Adapter → Profile Resolver → Segment Scorer (×N)
    → Risk Aggregator → Job Adapter → complete / fail

Version: 1.0.0
"""

__version__ = "1.0.0"
