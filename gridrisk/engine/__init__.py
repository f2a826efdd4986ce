"""
GridRisk Scoring Engine.

Components:
- schemas: Weather, segment inputs, analysis profiles, score results
- scorer: Bounded integer score per grid segment
- aggregator: Top-risk segment, overload probability, risk bands
- pipeline: Segments + profile → ScoreResult
"""
