"""
GridRisk Job Worker.

Components:
- jobs: ActivatedJob model and JobClient protocol
- modes: Analysis mode / decision selection
- variables: Flat process variables → SegmentInput per segment
- adapter: Job state machine (received → scoring → completed | failed)
- zeebe_rest: Workflow engine job API client (httpx)
- runner: Poll loop (APScheduler), one job in flight at a time
"""
