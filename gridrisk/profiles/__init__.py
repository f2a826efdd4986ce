"""
Analysis Profile Resolvers.

Components:
- resolver: ProfileResolver protocol, HTTP resolver, in-memory resolver
"""
